"""CHIP-8 emulator package."""

from chipjax.state import EmulatorState, StackState, create_state
from chipjax.emulator import execute, fetch, load_rom, step, tick_timers
from chipjax.decode import DecodedInstruction, decode, disassemble
from chipjax.errors import (
    Chip8Error, RomLoadError, UnknownOpcodeError, StackError,
    StackOverflowError, StackUnderflowError, MemoryAccessError,
)
from chipjax.constants import (
    PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, MEMORY_SIZE,
)
from chipjax.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "Chip8Error",
    "RomLoadError",
    "UnknownOpcodeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "MEMORY_SIZE",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
