"""Framebuffer to RGB conversion and the named palettes the window offers."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    "octo": ((255, 204, 0), (153, 102, 0)),  # Octo default palette
}


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert the flat CHIP-8 framebuffer to an upscaled RGB image.

    Args:
        display: 2048 cells, row-major, non-zero meaning lit
        scale: Size in output pixels of one CHIP-8 pixel
        on_color: RGB color for lit cells
        off_color: RGB color for dark cells

    Returns:
        uint8 array of shape (32*scale, 64*scale, 3), indexed [row, column]
    """
    lit = np.asarray(display).reshape(SCREEN_HEIGHT, SCREEN_WIDTH) != 0
    palette = np.array([off_color, on_color], dtype=np.uint8)
    rgb_frame = palette[lit.astype(np.intp)]

    if scale > 1:
        rgb_frame = rgb_frame.repeat(scale, axis=0).repeat(scale, axis=1)

    return rgb_frame


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Look up ``(on_color, off_color)`` for a palette name."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}"
        )
    return COLOR_SCHEMES[scheme]
