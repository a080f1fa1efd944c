"""CHIP-8 control flow instructions: jumps, calls and conditional skips.

By the time a handler runs, ``fetch`` has already moved PC past the
instruction, so a skip only has to step over one more word.
"""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.stack import push

INSTRUCTION_SIZE = 2


def _target(address) -> jnp.ndarray:
    return jnp.astype(address, jnp.uint16)


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - PC = NNN."""
    return state.replace(pc=_target(instruction.nnn))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Push the return address, then jump to NNN."""
    return state.replace(stack=push(state.stack, state.pc), pc=_target(instruction.nnn))


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - PC = NNN + V0."""
    return state.replace(pc=_target(instruction.nnn) + _target(state.V[0]))


def skip_when(predicate):
    """Build a handler that steps over the next instruction when ``predicate`` holds."""
    def handler(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        offset = jnp.where(predicate(state, instruction), INSTRUCTION_SIZE, 0)
        return state.replace(pc=state.pc + jnp.astype(offset, jnp.uint16))
    return handler


# 3XNN / 4XNN compare against the immediate byte
execute_skip_if_equal_immediate = skip_when(lambda s, i: s.V[i.x] == i.nn)
execute_skip_if_not_equal_immediate = skip_when(lambda s, i: s.V[i.x] != i.nn)

# 5XY0 / 9XY0 compare two registers; the low nibble is not checked
execute_skip_if_equal_register = skip_when(lambda s, i: s.V[i.x] == s.V[i.y])
execute_skip_if_not_equal_register = skip_when(lambda s, i: s.V[i.x] != s.V[i.y])


def _key_condition(state: EmulatorState, instruction: DecodedInstruction):
    pressed = state.keypad[state.V[instruction.x] & 0xF]
    # EXA1 inverts EX9E
    return pressed != (instruction.nn == 0xA1)


# EX9E / EXA1 - Skip if the key in VX is down / up
execute_skip_if_key = skip_when(_key_condition)
