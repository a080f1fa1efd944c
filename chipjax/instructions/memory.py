"""Register loads: immediates into VX and I, and the random byte."""

import jax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction


def _byte(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.uint8)


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(_byte(instruction.nn)))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - VX += NN (wraps, VF untouched)."""
    return state.replace(V=state.V.at[instruction.x].add(_byte(instruction.nn)))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - VX = (uniform random byte) AND NN.

    Draws from a fresh subkey so every execution consumes the generator.
    """
    rng, draw_key = jax.random.split(state.rng)
    random_byte = jax.random.randint(draw_key, shape=(), minval=0, maxval=256)
    return state.replace(
        V=state.V.at[instruction.x].set(_byte(random_byte & instruction.nn)),
        rng=rng,
    )
