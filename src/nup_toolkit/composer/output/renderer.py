"""
Module: composer.output.renderer

Purpose:
    Render planned sheets to PDF using PyMuPDF.
    Each SheetPlan becomes one output page; each tile embeds its source
    page as vector content at the planned rectangle, then the sheet's
    cells are framed when a border is requested.

Key Functions:
    - render_layout(): Render a whole LayoutResult into a new document
    - render_sheets(): Render sheet by sheet, yielding each finished page
    - render_sheet(): Render one sheet onto a new page

Dependencies:
    - fitz (PyMuPDF): PDF page embedding
    - composer.layout.models: LayoutResult, SheetPlan, TilePlacement
    - composer.output.borders: Cell frames

Used By:
    - composer.pipeline: Pipeline orchestration
"""

from __future__ import annotations

import logging
from typing import Iterator

import fitz

from nup_toolkit.composer.errors import CompositionError
from nup_toolkit.composer.layout.models import LayoutResult, SheetPlan, TilePlacement

from .borders import draw_borders
from .coords import tile_rect

logger = logging.getLogger(__name__)


def render_layout(
    source: fitz.Document,
    layout: LayoutResult,
    border_width: float = 0.0,
) -> fitz.Document:
    """
    Render every sheet of a layout into a new document.

    Args:
        source: Source document the tiles refer to
        layout: Planned layout
        border_width: Cell border stroke in points (0 draws none)

    Returns:
        New output document with one page per sheet. Caller closes it.

    Raises:
        CompositionError: If any sheet fails; the partial output is closed.

    Example:
        >>> out = render_layout(source, layout)
        >>> out.page_count == layout.sheet_count
        True
    """
    out = fitz.open()
    try:
        for _ in render_sheets(out, source, layout, border_width):
            pass
    except Exception:
        out.close()
        raise
    return out


def render_sheets(
    out: fitz.Document,
    source: fitz.Document,
    layout: LayoutResult,
    border_width: float = 0.0,
) -> Iterator[fitz.Page]:
    """Append each planned sheet to ``out`` (with borders), yielding its page."""
    for sheet in layout.sheets:
        page = render_sheet(out, source, sheet)
        draw_borders(page, sheet, border_width)
        yield page


def render_sheet(
    out: fitz.Document,
    source: fitz.Document,
    sheet: SheetPlan,
) -> fitz.Page:
    """
    Append one sheet to ``out`` and embed its tiles.

    Args:
        out: Output document
        source: Source document the tiles refer to
        sheet: Sheet plan

    Returns:
        The new output page.

    Raises:
        CompositionError: If the page cannot be created or a tile fails
    """
    try:
        page = out.new_page(width=sheet.paper.width, height=sheet.paper.height)
    except (RuntimeError, ValueError) as e:
        raise CompositionError(f"Could not create sheet {sheet.index + 1}: {e}") from e

    for tile in sheet.tiles:
        _embed_tile(page, source, tile, sheet.paper.height)

    return page


def _embed_tile(
    page: fitz.Page,
    source: fitz.Document,
    tile: TilePlacement,
    page_height: float,
) -> None:
    """Embed one source page at its planned rectangle and scale."""
    try:
        src_page = source[tile.source_index]
        if not src_page.get_contents():
            # Nothing to show; the cell stays blank
            logger.debug(f"Source page {tile.source_index + 1} is blank, leaving cell empty")
            return

        rect = tile_rect(tile, page_height)
        page.show_pdf_page(
            rect,
            source,
            tile.source_index,
            keep_proportion=True,
            rotate=tile.rotation,
        )
    except (RuntimeError, ValueError, IndexError) as e:
        raise CompositionError(
            f"Failed to place page {tile.source_index + 1}: {e}"
        ) from e

    logger.debug(
        f"Placed page {tile.source_index + 1} at cell ({tile.column}, {tile.row}) "
        f"scale {tile.scale:.4f}"
    )
