"""CHIP-8 keypad input.

The input layer never touches emulator state directly: it posts
``KeyEvent``s to a ``KeyEventQueue`` and the CPU side folds them into the
keypad with ``apply_key_events`` between cycles.
"""

import queue
from dataclasses import dataclass
from typing import Iterable, List

from chipjax.constants import NUM_KEYS
from chipjax.state import EmulatorState


@dataclass(frozen=True)
class KeyEvent:
    """A CHIP-8 key (0x0-0xF) going down or up."""
    key: int
    pressed: bool

    def __post_init__(self):
        if not 0 <= self.key < NUM_KEYS:
            raise ValueError(f"Key index must be in 0x0-0xF, got {self.key!r}")


class KeyEventQueue:
    """Single-producer, single-consumer queue of key events."""

    def __init__(self):
        self._events = queue.SimpleQueue()

    def put(self, key: int, pressed: bool) -> None:
        self._events.put(KeyEvent(key, pressed))

    def drain(self) -> List[KeyEvent]:
        """Take every pending event without blocking."""
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events


def apply_key_events(state: EmulatorState, events: Iterable[KeyEvent]) -> EmulatorState:
    """Fold key events into the keypad, oldest first."""
    events = list(events)
    if not events:
        return state
    keypad = state.keypad
    for event in events:
        keypad = keypad.at[event.key].set(event.pressed)
    return state.replace(keypad=keypad)

