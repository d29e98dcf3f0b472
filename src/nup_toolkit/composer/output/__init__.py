"""
Module: composer.output

Purpose:
    PDF output for planned sheets: page embedding and cell borders.

Key Functions:
    - render_layout(): Render a whole layout into a new document
    - render_sheet(): Render one SheetPlan
    - draw_borders(): Frame every grid cell

Dependencies:
    - fitz (PyMuPDF)
"""

from .coords import tile_rect, to_page_rect
from .borders import BORDER_COLOR, draw_borders
from .renderer import render_layout, render_sheet, render_sheets

__all__ = [
    # Coordinates
    "tile_rect",
    "to_page_rect",
    # Borders
    "BORDER_COLOR",
    "draw_borders",
    # Rendering
    "render_layout",
    "render_sheet",
    "render_sheets",
]
