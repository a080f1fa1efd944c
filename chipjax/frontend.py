"""pygame window: presentation and keyboard input for the emulator.

The CPU runs on an ``EmulatorThread``; this module owns the main thread,
pumps window events into a ``KeyEventQueue`` and blits whatever frame the
CPU last published.
"""

import threading

import pygame

from chipjax.config import EmulatorConfig
from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipjax.keypad import KeyEventQueue
from chipjax.logging import ConsoleLogger
from chipjax.pacing import EmulatorThread, FrameSlot, PacingController
from chipjax.rendering import chip8_display_to_rgb, create_color_scheme
from chipjax.state import EmulatorState

# COSMAC VIP keypad laid over the left of a QWERTY keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

WINDOW_FPS = 60


def handle_event(event, key_events: KeyEventQueue) -> bool:
    """Route one pygame event; returns False when the user asked to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_MAP:
            key_events.put(KEY_MAP[event.key], event.type == pygame.KEYDOWN)
    return True


def run_emulator(state: EmulatorState, config: EmulatorConfig, logger: ConsoleLogger) -> EmulatorState:
    """Open the window and run until quit or a fatal emulator error.

    The CPU thread is always joined before returning. An error raised on
    the CPU thread is re-raised here.
    """
    on_color, off_color = create_color_scheme(config.color_scheme)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("chipjax")
    screen.fill(off_color)
    pygame.display.flip()
    clock = pygame.time.Clock()

    key_events = KeyEventQueue()
    frames = FrameSlot()
    stop_event = threading.Event()
    controller = PacingController(
        state,
        poll_input=key_events.drain,
        present=frames.publish,
        instructions_per_second=config.instructions_per_second,
        timer_frequency=config.timer_frequency,
        logger=logger,
        trace=config.trace,
    )
    worker = EmulatorThread(controller, stop_event)
    worker.start()

    try:
        while not stop_event.is_set():
            clock.tick(WINDOW_FPS)

            for event in pygame.event.get():
                if not handle_event(event, key_events):
                    logger.info("Quit requested")
                    stop_event.set()

            frame = frames.take()
            if frame is not None:
                rgb = chip8_display_to_rgb(frame, config.scale, on_color, off_color)
                # surfarray is indexed (x, y)
                pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
                pygame.display.flip()
    finally:
        stop_event.set()
        worker.join()
        pygame.quit()

    if worker.error is not None:
        raise worker.error
    return controller.state
