"""Tests for machine state construction, loading and timers."""

import chex
import jax
import jax.numpy as jnp
import pytest
from chipvm import create_state, reset, load, tick_timer, load_rom, fetch, RomTooLarge
from chipvm.constants import FONT_DATA, FONT_START, MAX_ROM_SIZE, PROGRAM_START
from chipvm.state import clear_display, increment_pc, sound_active


class TestCreateState:
    """Power-on state."""

    def test_defaults(self, fresh_state):
        assert fresh_state.pc == PROGRAM_START
        assert fresh_state.I == 0
        assert fresh_state.delay_timer == 0
        assert fresh_state.sound_timer == 0
        assert fresh_state.stack.depth == 0
        assert fresh_state.display.shape == (32, 64)
        assert not fresh_state.display.any()
        assert not fresh_state.keypad.any()
        assert not fresh_state.V.any()

    def test_font_loaded(self, fresh_state):
        chex.assert_trees_all_equal(
            fresh_state.memory[FONT_START:FONT_START + 80], FONT_DATA
        )
        # "0" glyph
        assert [int(b) for b in fresh_state.memory[FONT_START:FONT_START + 5]] == [
            0xF0, 0x90, 0x90, 0x90, 0xF0
        ]

    def test_memory_outside_font_is_zero(self, fresh_state):
        assert not fresh_state.memory[:FONT_START].any()
        assert not fresh_state.memory[FONT_START + 80:].any()


class TestLoad:
    """ROM loading and reset."""

    def test_load_copies_rom(self, fresh_state):
        state = load(fresh_state, bytes([0x12, 0x34, 0xAB]))
        assert [int(b) for b in state.memory[0x200:0x204]] == [0x12, 0x34, 0xAB, 0x00]
        assert state.pc == PROGRAM_START

    def test_load_then_empty_equals_fresh(self, fresh_state):
        state = load(fresh_state, bytes(range(256)) * 4)
        state = state.replace(
            V=state.V.at[3].set(9),
            delay_timer=jnp.asarray(5, dtype=jnp.uint8),
            display=state.display.at[1, 1].set(True),
        )

        state = load(state, b"")

        chex.assert_trees_all_equal(state, create_state())

    def test_load_largest_rom(self, fresh_state):
        state = load(fresh_state, b"\xAA" * MAX_ROM_SIZE)
        assert state.memory[-1] == 0xAA

    def test_rom_too_large(self, fresh_state):
        with pytest.raises(RomTooLarge) as excinfo:
            load(fresh_state, b"\x00" * (MAX_ROM_SIZE + 1))
        assert excinfo.value.size == MAX_ROM_SIZE + 1
        assert excinfo.value.capacity == 3584

    def test_reset_keeps_rng(self):
        state = create_state(jax.random.PRNGKey(42))
        state = state.replace(pc=jnp.asarray(0x300, dtype=jnp.uint16))

        state = reset(state)

        assert state.pc == PROGRAM_START
        chex.assert_trees_all_equal(state.rng, jax.random.PRNGKey(42))

    def test_load_rom_file(self, fresh_state, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0x00, 0xE0]))

        state = load_rom(fresh_state, rom)

        assert state.memory[0x200] == 0x00
        assert state.memory[0x201] == 0xE0


class TestTimers:
    """60 Hz countdown."""

    def test_timer_reaches_zero_without_wrapping(self, fresh_state):
        state = fresh_state.replace(delay_timer=jnp.asarray(10, dtype=jnp.uint8))
        for _ in range(300):
            state = tick_timer(state)
        assert state.delay_timer == 0

    def test_timers_are_independent(self, fresh_state):
        state = fresh_state.replace(
            delay_timer=jnp.asarray(3, dtype=jnp.uint8),
            sound_timer=jnp.asarray(1, dtype=jnp.uint8),
        )

        state = tick_timer(state)
        assert state.delay_timer == 2
        assert state.sound_timer == 0

        state = tick_timer(state)
        assert state.delay_timer == 1
        assert state.sound_timer == 0

    def test_sound_active(self, fresh_state):
        assert not sound_active(fresh_state)
        state = fresh_state.replace(sound_timer=jnp.asarray(2, dtype=jnp.uint8))
        assert sound_active(state)


class TestPrimitives:
    """Small state mutators."""

    def test_increment_pc(self, fresh_state):
        assert increment_pc(fresh_state).pc == PROGRAM_START + 2

    def test_clear_display(self, fresh_state):
        state = fresh_state.replace(display=fresh_state.display.at[5, 5].set(True))
        assert not clear_display(state).display.any()

    def test_fetch_reads_big_endian_and_advances(self, fresh_state):
        state = load(fresh_state, bytes([0xA2, 0xF0]))

        state, word = fetch(state)

        assert word == 0xA2F0
        assert state.pc == PROGRAM_START + 2
