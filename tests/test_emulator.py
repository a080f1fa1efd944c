"""Tests for the fetch-decode-execute cycle, timers and ROM loading."""

import pytest
from chipjax import (
    fetch, step, execute, tick_timers, MemoryAccessError, UnknownOpcodeError, StackUnderflowError,
)
from conftest import program, state_with_program, set_registers, set_index, setup_sprite_in_memory
from chipjax.emulator import load_rom


class TestFetch:

    def test_fetch_is_big_endian(self):
        state = state_with_program(0xA2F0)

        state, instruction = fetch(state)

        assert instruction == 0xA2F0
        assert state.pc == 0x202

    def test_fetch_does_not_execute(self):
        state = state_with_program(0x6A42)
        state, _ = fetch(state)
        assert state.V[0xA] == 0


class TestProgramCounter:
    """Net PC movement of one full cycle."""

    @pytest.mark.parametrize("instruction", [
        0x00E0, 0x6012, 0x7012, 0x8120, 0x8124, 0x812E, 0xA123,
        0xC0FF, 0xD011, 0xF015, 0xF018, 0xF007, 0xF01E, 0xF029,
        0xF033, 0xF055, 0xF065,
    ])
    def test_plain_instructions_advance_by_two(self, instruction):
        state = step(state_with_program(instruction))
        assert state.pc == 0x202

    def test_taken_skip_advances_by_four(self):
        state = step(state_with_program(0x3000))  # V0 == 0
        assert state.pc == 0x204

    def test_untaken_skip_advances_by_two(self):
        state = step(state_with_program(0x3001))
        assert state.pc == 0x202

    def test_wait_for_key_repeats(self):
        state = state_with_program(0xF00A)

        state = step(state)
        state = step(state)

        assert state.pc == 0x200

    def test_wait_for_key_completes(self):
        state = state_with_program(0xF50A)
        state = state.replace(keypad=state.keypad.at[0x9].set(True))

        state = step(state)

        assert state.pc == 0x202
        assert state.V[5] == 0x9

    def test_jump(self):
        state = step(state_with_program(0x1345))
        assert state.pc == 0x345

    def test_call_pushes_next_instruction(self):
        state = step(state_with_program(0x2206))

        assert state.pc == 0x206
        assert state.stack.data[0] == 0x202

    def test_call_and_return(self):
        # 0x200: CALL 0x206 / 0x202: LD V1, 1 / 0x204: JP 0x204 / 0x206: LD V0, 7 / 0x208: RET
        state = state_with_program(0x2206, 0x6101, 0x1204, 0x6007, 0x00EE)

        for _ in range(4):
            state = step(state)

        assert state.pc == 0x204
        assert state.V[0] == 7
        assert state.V[1] == 1
        assert state.stack.pointer == 0

    def test_skip_loop(self):
        # Count V0 up to 3 with a skip-guarded jump
        state = state_with_program(0x7001, 0x3003, 0x1200, 0x1206)

        for _ in range(9):
            state = step(state)

        assert state.V[0] == 3
        assert state.pc == 0x206


class TestErrorAddresses:
    """Fatal errors report where the bad word was fetched from."""

    def test_unknown_opcode_address(self):
        state = state_with_program(0x6001, 0x6102, 0x8128)
        state = step(step(state))

        with pytest.raises(UnknownOpcodeError) as excinfo:
            step(state)

        assert excinfo.value.address == 0x204
        assert excinfo.value.instruction == 0x8128

    def test_underflow_address(self):
        state = state_with_program(0x6001, 0x00EE)
        state = step(state)

        with pytest.raises(StackUnderflowError) as excinfo:
            step(state)

        assert excinfo.value.address == 0x202

    def test_zeroed_memory_is_fatal(self, fresh_state):
        """Running off the loaded program hits 0x0000."""
        with pytest.raises(UnknownOpcodeError):
            step(fresh_state)


class TestTimers:

    def test_tick_decrements(self, fresh_state):
        state = fresh_state.replace(
            delay_timer=fresh_state.delay_timer + 5,
            sound_timer=fresh_state.sound_timer + 2,
        )

        state = tick_timers(state)

        assert state.delay_timer == 4
        assert state.sound_timer == 1

    def test_tick_saturates_at_zero(self, fresh_state):
        state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 3)

        state = tick_timers(state, 10)

        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_timers_independent_of_steps(self):
        state = state_with_program(0x6010, 0xF015, 0x6000, 0x6000)
        for _ in range(4):
            state = step(state)

        assert state.delay_timer == 0x10


class TestLoadRom:

    def test_program_helper_layout(self, fresh_state):
        state = load_rom(fresh_state, program(0x00E0, 0x1200))
        assert [int(b) for b in state.memory[0x200:0x204]] == [0x00, 0xE0, 0x12, 0x00]

    def test_empty_rom_leaves_memory(self, fresh_state):
        state = load_rom(fresh_state, b"")
        assert int(state.memory[0x200:].sum()) == 0

    def test_step_preserves_untouched_registers(self):
        state = set_registers(state_with_program(0x00E0), V3=1)
        state = step(state)
        assert state.V[3] == 1


class TestMemoryBounds:
    """Accesses past 0xFFF stop the machine instead of touching clamped bytes."""

    def test_jump_past_end_of_memory(self):
        state = state_with_program(0x60FF, 0xBFFF)  # PC = 0xFFF + 0xFF
        state = step(step(state))
        assert state.pc == 0x10FE

        with pytest.raises(MemoryAccessError) as excinfo:
            step(state)

        assert excinfo.value.pc == 0x10FE

    def test_fetch_straddling_end_of_memory(self, fresh_state):
        state = fresh_state.replace(pc=fresh_state.pc + (0xFFF - 0x200))

        with pytest.raises(MemoryAccessError) as excinfo:
            step(state)

        assert excinfo.value.address == 0x1000

    def test_last_word_of_memory_runs(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0xFFE, [0x12, 0x00])
        state = state.replace(pc=state.pc + (0xFFE - 0x200))

        state = step(state)

        assert state.pc == 0x200

    def test_bcd_past_end_of_memory(self, fresh_state):
        state = set_index(set_registers(fresh_state, V0=0xF3), 0xFFE)

        with pytest.raises(MemoryAccessError) as excinfo:
            execute(state, 0xF033)

        assert excinfo.value.address == 0x1000
        assert [int(b) for b in state.memory[0xFFE:]] == [0, 0]

    def test_bcd_ending_on_last_byte(self, fresh_state):
        state = set_index(set_registers(fresh_state, V0=0xF3), 0xFFD)

        state = execute(state, 0xF033)

        assert [int(b) for b in state.memory[0xFFD:]] == [2, 4, 3]

    @pytest.mark.parametrize("instruction", [0xF355, 0xF365])
    def test_register_block_past_end_of_memory(self, fresh_state, instruction):
        state = set_index(fresh_state, 0xFFD)  # V0-V3 need 4 bytes, 3 remain

        with pytest.raises(MemoryAccessError):
            execute(state, instruction)

        execute(state, instruction - 0x100)  # V0-V2 fit exactly

    def test_sprite_past_end_of_memory(self, fresh_state):
        state = set_index(fresh_state, 0xFFE)

        with pytest.raises(MemoryAccessError):
            execute(state, 0xD003)

        state = execute(state, 0xD002)
        assert not bool(state.display.any())

    def test_index_overflow_then_load(self, fresh_state):
        state = set_index(set_registers(fresh_state, V0=0xFF), 0xF80)
        state = execute(state, 0xF01E)
        assert state.I == 0x107F

        with pytest.raises(MemoryAccessError):
            execute(state, 0xF065)
