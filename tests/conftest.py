"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipjax import create_state, load_rom


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set V registers by name, e.g. set_registers(state, V0=1, VF=2)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def set_index(state, value):
    """Helper to set I without changing its dtype."""
    return state.replace(I=jnp.asarray(value, dtype=jnp.uint16))


def program(*words):
    """Assemble instruction words into ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)


def state_with_program(*words):
    """Fresh state with the given instruction words loaded at 0x200."""
    return load_rom(create_state(), program(*words))
