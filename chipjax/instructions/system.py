"""CHIP-8 system instructions (0x0xxx)."""

import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Leave the state as it is."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Turn every pixel off."""
    return state.replace(
        display=jnp.zeros_like(state.display),
        display_dirty=jnp.ones((), dtype=jnp.bool_),
    )


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Pop the return address into PC."""
    stack, return_address = pop(state.stack)
    return state.replace(stack=stack, pc=return_address)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Route 00E0 and 00EE.

    Other 0NNN words are refused by ``emulator.validate``; inside a traced
    dispatch they fall through to ``no_op``.
    """
    is_clear = jnp.astype(instruction.raw == 0x00E0, jnp.int32)
    is_return = jnp.astype(instruction.raw == 0x00EE, jnp.int32)
    branch = is_clear + 2 * is_return
    return jax.lax.switch(branch, [no_op, execute_clear_screen, execute_return], state, instruction)
