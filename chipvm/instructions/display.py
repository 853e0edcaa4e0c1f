"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipvm import isa
from chipvm.config import Quirks
from chipvm.constants import MEMORY_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from chipvm.state import EmulatorState

# Pre-computed coordinate grids for display operations, row-major like the display
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def execute_display(state: EmulatorState, instruction: isa.DisplayDraw, quirks: Quirks) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The start position wraps, the sprite itself is clipped at the right and
    bottom edges. Sprite rows past 0xFFF are read from the start of memory.
    VF is 1 if any lit pixel was turned off, else 0.
    """
    sprite_x = int(state.V[instruction.vx]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.vy]) % SCREEN_HEIGHT

    in_sprite = (
        (xx >= sprite_x) & (xx < sprite_x + 8)
        & (yy >= sprite_y) & (yy < sprite_y + instruction.height)
    )

    row_offset = jnp.where(in_sprite, yy - sprite_y, 0)
    col_offset = jnp.where(in_sprite, xx - sprite_x, 0)
    sprite_bytes = state.memory[(state.I.astype(jnp.int32) + row_offset) % MEMORY_SIZE].astype(jnp.int32)
    sprite = (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8))
    )
