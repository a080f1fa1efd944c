"""Main CHIP-8 emulator execution engine."""

from typing import Optional

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction, decode
from chipjax.constants import PROGRAM_START, MEMORY_SIZE
from chipjax.errors import MemoryAccessError, RomLoadError, UnknownOpcodeError
from chipjax.stack import check_push, check_pop
from chipjax.instructions.system import execute_system_instruction
from chipjax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key
)
from chipjax.instructions.alu import execute_alu_operation
from chipjax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipjax.instructions.display import execute_display
from chipjax.instructions.misc import execute_misc_instruction, MISC_OPERATIONS

SYSTEM_INSTRUCTIONS = (0x00E0, 0x00EE)
KEY_INSTRUCTIONS = (0x9E, 0xA1)
ALU_INSTRUCTIONS = frozenset({0x0, 0x1, 0x2, 0x3, 0x4, 0x5, 0x6, 0x7, 0xE})
REGISTER_BLOCK_INSTRUCTIONS = (0x55, 0x65)


@jax.jit
def dispatch(state: EmulatorState, instruction: jnp.ndarray) -> EmulatorState:
    """Run the handler for an instruction word. Does no validation."""
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.category,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_skip_if_key,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def validate(state: EmulatorState, instruction: DecodedInstruction, address: int) -> None:
    """Raise for instructions that cannot run safely on this state."""
    if instruction.category == 0x0:
        if instruction.raw not in SYSTEM_INSTRUCTIONS:
            raise UnknownOpcodeError(instruction.raw, address)
        if instruction.raw == 0x00EE:
            check_pop(state.stack, address)
    elif instruction.category == 0x2:
        check_push(state.stack, address)
    elif instruction.category == 0x8 and instruction.n not in ALU_INSTRUCTIONS:
        raise UnknownOpcodeError(instruction.raw, address)
    elif instruction.category == 0xE and instruction.nn not in KEY_INSTRUCTIONS:
        raise UnknownOpcodeError(instruction.raw, address)
    elif instruction.category == 0xF and instruction.nn not in MISC_OPERATIONS:
        raise UnknownOpcodeError(instruction.raw, address)

    span = indexed_span(instruction)
    if span and int(state.I) + span > MEMORY_SIZE:
        raise MemoryAccessError(int(state.I) + span - 1, address)


def indexed_span(instruction: DecodedInstruction) -> int:
    """Number of bytes an instruction touches starting at I (0 if none)."""
    if instruction.category == 0xD:
        return instruction.n
    if instruction.category == 0xF and instruction.nn == 0x33:
        return 3
    if instruction.category == 0xF and instruction.nn in REGISTER_BLOCK_INSTRUCTIONS:
        return instruction.x + 1
    return 0


def execute(state: EmulatorState, instruction: int, address: Optional[int] = None) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    ``address`` is where the instruction was fetched from and only feeds
    error reports; it defaults to the current program counter.
    """
    instruction = int(instruction)
    if address is None:
        address = int(state.pc)
    validate(state, decode(instruction), address)
    return dispatch(state, jnp.asarray(instruction, dtype=jnp.uint16))


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


@jax.jit
def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance PC past it.

    Does no bounds check; ``step`` refuses a PC whose word would cross
    the end of memory.
    """
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle."""
    address = int(state.pc)
    if address + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(address + 1, address)
    state, instruction = fetch(state)
    return execute(state, instruction, address)


def tick_timers(state: EmulatorState, ticks: int = 1) -> EmulatorState:
    """Count both timers down by ``ticks``, stopping at zero."""
    def count_down(timer):
        return jnp.astype(jnp.maximum(jnp.astype(timer, jnp.int32) - ticks, 0), jnp.uint8)

    return state.replace(
        delay_timer=count_down(state.delay_timer),
        sound_timer=count_down(state.sound_timer),
    )


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    if PROGRAM_START + len(rom) > MEMORY_SIZE:
        raise RomLoadError(
            f"ROM is {len(rom)} bytes, at most {MEMORY_SIZE - PROGRAM_START} fit in memory"
        )
    if not rom:
        return state
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return state.replace(memory=new_memory)
