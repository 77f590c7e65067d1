"""
Render a projection grid as block-shaded text or as a raster image
"""

import numpy as np
from PIL import Image

# (threshold on value * 4, glyph, gray level), first match wins
SHADES = (
    (3.0, "▓", 40),
    (1.5, "▒", 110),
    (0.0, "░", 180),
)
BLANK = " "
BACKGROUND = 255


def shade_index(value):
    """Index into SHADES for a depth value, None for an empty cell"""
    scaled = value * 4
    for index, (threshold, _, _) in enumerate(SHADES):
        if scaled > threshold:
            return index
    return None


def glyph_for(value):
    index = shade_index(value)
    return BLANK if index is None else SHADES[index][1]


def render_text(grid) -> str:
    """
    Draw a depth grid with one character per cell

    Args:
        grid: 2D array or nested sequence of depth values

    Returns:
        One newline-terminated line per grid row
    """
    lines = []
    for row in grid:
        lines.append("".join(glyph_for(value) for value in row))
        lines.append("\n")
    return "".join(lines)


def render_image(grid, cell_size=(8, 16)):
    """
    Rasterize a depth grid into a grayscale Pillow image

    Each cell becomes a cell_size (width, height) block shaded with the same
    levels as the text renderer, darker meaning deeper.

    Args:
        grid: 2D array of depth values
        cell_size: Pixel size of one cell as (width, height)

    Returns:
        PIL.Image.Image in mode 'L'
    """
    values = np.asarray(grid, dtype=np.float32)
    if values.ndim != 2:
        raise ValueError(f"Grid must be 2D, got shape {values.shape}")
    cell_w, cell_h = cell_size
    if cell_w < 1 or cell_h < 1:
        raise ValueError(f"Cell size must be positive, got {cell_size}")

    levels = np.full(values.shape, BACKGROUND, dtype=np.uint8)
    for row, col in np.ndindex(values.shape):
        index = shade_index(values[row, col])
        if index is not None:
            levels[row, col] = SHADES[index][2]

    # Grow every cell into a cell_h x cell_w block of pixels
    pixels = np.repeat(np.repeat(levels, cell_h, axis=0), cell_w, axis=1)
    # uint8 2D arrays map to mode 'L'
    return Image.fromarray(pixels)
