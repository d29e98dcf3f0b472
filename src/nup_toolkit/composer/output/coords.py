"""
Module: composer.output.coords

Purpose:
    Convert layout rectangles (bottom-up PDF user space) into PyMuPDF's
    top-down page coordinates.

Key Functions:
    - to_page_rect(): Bottom-up rectangle to fitz.Rect
    - tile_rect(): Target rectangle for an embedded tile, honouring rotation

Used By:
    - composer.output.renderer
    - composer.output.borders
"""

from __future__ import annotations

import fitz

from nup_toolkit.composer.layout.models import TilePlacement

# Rotations that swap a page's width and height
_QUARTER_TURNS = (90, 270)


def to_page_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    page_height: float,
) -> fitz.Rect:
    """
    Convert a bottom-up rectangle to PyMuPDF's top-down page coordinates.

    Args:
        x: Left edge in points
        y: Bottom edge in points, measured from the page bottom
        width: Width in points
        height: Height in points
        page_height: Page height in points

    Returns:
        fitz.Rect measured from the page top.

    Example:
        >>> to_page_rect(0, 0, 100, 50, page_height=792)
        Rect(0.0, 742.0, 100.0, 792.0)
    """
    top = page_height - (y + height)
    return fitz.Rect(x, top, x + width, top + height)


def tile_rect(tile: TilePlacement, page_height: float) -> fitz.Rect:
    """
    Rectangle a tile's source page is embedded into.

    For quarter turns the rectangle takes the rotated extent
    (height x width) centred on the planned tile, so the embedded page
    keeps the planned scale.

    Example:
        >>> tile_rect(tile, 792).width == tile.height  # rotation 90
        True
    """
    if tile.rotation not in _QUARTER_TURNS:
        return to_page_rect(tile.x, tile.y, tile.width, tile.height, page_height)

    center_x = tile.x + tile.width / 2
    center_y = tile.y + tile.height / 2
    return to_page_rect(
        center_x - tile.height / 2,
        center_y - tile.width / 2,
        tile.height,
        tile.width,
        page_height,
    )
