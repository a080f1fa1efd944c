"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, MAX_SPRITE_HEIGHT

# Pre-computed sprite grids: one row per sprite byte, one column per bit (MSB first)
rows = jnp.arange(MAX_SPRITE_HEIGHT)[:, None]
cols = jnp.arange(8)[None, :]


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Pixels are XORed onto the framebuffer. Each axis wraps around
    independently, so a sprite crossing the right edge reappears on the
    left of the same row. VF is 1 if any lit pixel was turned off.
    """
    origin_x = jnp.astype(state.V[instruction.x], jnp.int32)
    origin_y = jnp.astype(state.V[instruction.y], jnp.int32)

    sprite_bytes = state.memory[jnp.astype(state.I, jnp.int32) + rows]
    sprite = ((sprite_bytes >> (7 - cols)) & 1).astype(jnp.bool_) & (rows < instruction.n)

    # Every (row, col) maps to a distinct cell since 15 < 32 and 8 < 64
    cells = (origin_x + cols) % SCREEN_WIDTH + ((origin_y + rows) % SCREEN_HEIGHT) * SCREEN_WIDTH
    lit = state.display[cells] != 0

    collision = jnp.any(lit & sprite)
    flipped = jnp.astype(lit ^ sprite, jnp.uint8)

    return state.replace(
        display=state.display.at[cells].set(flipped),
        display_dirty=jnp.ones((), dtype=jnp.bool_),
        V=state.V.at[15].set(jnp.astype(collision, jnp.uint8)),
    )
