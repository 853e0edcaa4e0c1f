"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
from chipvm import execute, Quirks
from chipvm.isa import DisplayDraw
from conftest import run, set_registers, setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        # Simple 2x2 box sprite
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0, 0xC0])

        state = run(state, 0x600A)  # V0 = 10
        state = run(state, 0x6105)  # V1 = 5
        state = run(state, 0xA300)  # I = 0x300
        state = run(state, 0xD012)  # Draw at V0,V1 with height 2

        assert state.display[5, 10]
        assert state.display[5, 11]
        assert state.display[6, 10]
        assert state.display[6, 11]
        assert not state.display[5, 12]
        assert jnp.sum(state.display) == 4
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])

        state = run(state, 0x6014)  # V0 = 20
        state = run(state, 0x610A)  # V1 = 10
        state = run(state, 0xA400)  # I = 0x400

        state = run(state, 0xD011)
        assert state.display[10, 20]
        assert state.V[15] == 0

        state = run(state, 0xD011)
        assert not state.display[10, 20]  # Pixel erased by XOR
        assert state.V[15] == 1  # Collision detected

    def test_flag_cleared_without_collision(self, fresh_state):
        """VF is reset when nothing is erased."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])
        state = set_registers(state, VF=1)
        state = run(state, 0xA400)

        state = run(state, 0xD011)

        assert state.V[15] == 0

    def test_xor_behavior(self, fresh_state):
        """Test XOR behavior - drawing twice should erase."""
        state = setup_sprite_in_memory(fresh_state, 0x500, [0xF0])

        state = run(state, 0x6008)  # V0 = 8
        state = run(state, 0x610F)  # V1 = 15
        state = run(state, 0xA500)  # I = 0x500

        state = run(state, 0xD011)
        for x in range(8, 12):
            assert state.display[15, x]
        assert state.V[15] == 0

        state = run(state, 0xD011)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_draw_over_existing_pixels(self, fresh_state):
        """Two-row sprite XORed over a 3x2 block of lit pixels."""
        state = setup_sprite_in_memory(fresh_state, 0x000, [0b10111111, 0b01001001])
        state = set_registers(state, V4=1, V6=2)
        display = state.display
        for x, y in [(1, 2), (2, 2), (3, 2), (1, 3), (2, 3), (3, 3)]:
            display = display.at[y, x].set(True)
        state = state.replace(display=display, I=jnp.asarray(0, dtype=jnp.uint16))

        state = execute(state, DisplayDraw(vx=4, vy=6, height=2), Quirks())

        expected_row_2 = [False, True, False, True, True, True, True, True]
        expected_row_3 = [True, False, True, False, True, False, False, True]
        for offset in range(8):
            assert state.display[2, 1 + offset] == expected_row_2[offset]
            assert state.display[3, 1 + offset] == expected_row_3[offset]
        assert state.V[15] == 1


class TestScreenBoundaries:
    """Test sprite clipping and start position wrapping."""

    def test_right_edge_clipping(self, fresh_state):
        """Pixels past the right edge are dropped, not wrapped."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])

        state = run(state, 0x603C)  # V0 = 60
        state = run(state, 0x6100)  # V1 = 0
        state = run(state, 0xA600)
        state = run(state, 0xD011)

        for x in range(60, 64):
            assert state.display[0, x]
        for x in range(0, 4):
            assert not state.display[0, x]
        assert jnp.sum(state.display) == 4

    def test_bottom_edge_clipping(self, fresh_state):
        """Rows past the bottom edge are dropped, not wrapped."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])

        state = run(state, 0x6000)  # V0 = 0
        state = run(state, 0x611E)  # V1 = 30
        state = run(state, 0xA700)
        state = run(state, 0xD013)

        assert state.display[30, 0]
        assert state.display[31, 0]
        assert not state.display[0, 0]
        assert jnp.sum(state.display) == 2

    def test_start_position_wraps(self, fresh_state):
        """The start coordinates are taken modulo the screen size."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])

        state = run(state, 0x6046)  # V0 = 70 -> x = 6
        state = run(state, 0x6123)  # V1 = 35 -> y = 3
        state = run(state, 0xA300)
        state = run(state, 0xD011)

        assert state.display[3, 6]
        assert jnp.sum(state.display) == 1

    def test_zero_height_draws_nothing(self, fresh_state):
        """DXY0 draws no rows in base CHIP-8."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xFF])
        state = run(state, 0xA300)

        state = run(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_font_sprite(self, fresh_state):
        """Font digits can be drawn through FX29."""
        state = run(fresh_state, 0x6000)  # V0 = 0
        state = run(state, 0xF029)  # I = font "0"
        state = run(state, 0xD005)

        assert [bool(state.display[0, x]) for x in range(4)] == [True] * 4
        assert [bool(state.display[1, x]) for x in range(4)] == [True, False, False, True]

    def test_sprite_rows_wrap_past_end_of_memory(self, fresh_state):
        """Rows read past 0xFFF come from the start of memory."""
        state = setup_sprite_in_memory(fresh_state, 0xFFF, [0x80])
        state = setup_sprite_in_memory(state, 0x000, [0x40])
        state = run(state, 0xAFFF)

        state = run(state, 0xD012)

        assert state.display[0, 0]
        assert state.display[1, 1]
        assert not state.display[1, 0]
        assert jnp.sum(state.display) == 2
