"""
Module: composer.output.borders

Purpose:
    Frame grid cells with a stroked rectangle. Every cell of the grid is
    framed, including cells left empty on a partially filled sheet, and
    the frame spans the full cell rather than the scaled tile.

Key Functions:
    - draw_borders(): Stroke every cell of a sheet

Dependencies:
    - fitz (PyMuPDF): Vector drawing

Used By:
    - composer.pipeline
"""

from __future__ import annotations

import logging

import fitz

from nup_toolkit.composer.errors import CompositionError
from nup_toolkit.composer.layout.models import SheetPlan

from .coords import to_page_rect

logger = logging.getLogger(__name__)

BORDER_COLOR = (0.3, 0.3, 0.3)  # neutral gray, RGB 0..1


def draw_borders(page: fitz.Page, sheet: SheetPlan, border_width: float) -> int:
    """
    Draw a border around every grid cell of a sheet.

    Args:
        page: Output page for the sheet
        sheet: Sheet plan (provides grid and paper)
        border_width: Stroke width in points; <= 0 draws nothing

    Returns:
        Number of rectangles drawn.

    Example:
        >>> draw_borders(page, sheet, 0)
        0
    """
    if border_width <= 0:
        return 0

    cells = sheet.cells
    try:
        for cell in cells:
            rect = to_page_rect(cell.x, cell.y, cell.width, cell.height, sheet.paper.height)
            page.draw_rect(rect, color=BORDER_COLOR, width=border_width)
    except (RuntimeError, ValueError) as e:
        raise CompositionError(f"Failed to draw borders on sheet {sheet.index + 1}: {e}") from e

    logger.debug(f"Drew {len(cells)} border(s) on sheet {sheet.index + 1}")
    return len(cells)
