"""
Module: composer.layout.planner

Purpose:
    Arrange source pages onto output sheets. Pages are consumed in order,
    tiles_per_sheet at a time; every group becomes one sheet, including a
    partially filled final sheet. Each tile is scaled uniformly to fit its
    cell (with 2% padding) and centred in it.

    Tiles are authored in reading order (left-to-right, top-to-bottom) but
    PDF user space has its origin at the bottom edge, so the first row in
    reading order is the highest visual row.

Key Functions:
    - plan_layout(): Plan every sheet of a document
    - place_tile(): Position one source page in its cell

Dependencies:
    - composer.layout.models: Layout dataclasses

Used By:
    - composer.pipeline
"""

from __future__ import annotations

import logging
from typing import Sequence

from nup_toolkit.composer.config import CompositionSettings

from .models import (
    CellBounds,
    GridConfig,
    LayoutResult,
    PaperDimensions,
    SheetPlan,
    TilePlacement,
)

logger = logging.getLogger(__name__)

TILE_PADDING_FACTOR = 0.98


def cell_for_tile(tile_index: int, grid: GridConfig, paper: PaperDimensions) -> tuple[int, int, CellBounds]:
    """
    Map a reading-order tile index to its grid cell.

    Returns:
        (column, visual_row, cell bounds) where visual_row 0 is the bottom row.
    """
    column = tile_index % grid.columns
    visual_row = grid.rows - 1 - tile_index // grid.columns
    cell_width = paper.width / grid.columns
    cell_height = paper.height / grid.rows
    cell = CellBounds(
        x=column * cell_width,
        y=visual_row * cell_height,
        width=cell_width,
        height=cell_height,
    )
    return column, visual_row, cell


def place_tile(
    source_index: int,
    tile_index: int,
    page_size: tuple[float, float],
    grid: GridConfig,
    paper: PaperDimensions,
    rotation: int = 0,
) -> TilePlacement:
    """
    Position one source page inside its cell.

    Args:
        source_index: Page index in the source document
        tile_index: Position on the sheet in reading order
        page_size: (width, height) of the source page in points
        grid: Sheet grid
        paper: Sheet size
        rotation: Rotation applied to the tile

    Returns:
        TilePlacement centred in its cell.

    Example:
        >>> p = place_tile(0, 0, (300, 400), GridConfig(2, 2), PaperDimensions(612, 792))
        >>> round(p.scale, 4)
        0.9702
    """
    src_width, src_height = page_size
    if src_width <= 0 or src_height <= 0:
        raise ValueError(f"Page {source_index + 1} has invalid size {src_width}x{src_height}")

    column, row, cell = cell_for_tile(tile_index, grid, paper)
    scale = min(cell.width / src_width, cell.height / src_height) * TILE_PADDING_FACTOR
    width = src_width * scale
    height = src_height * scale
    center_x, center_y = cell.center

    return TilePlacement(
        source_index=source_index,
        tile_index=tile_index,
        column=column,
        row=row,
        cell=cell,
        scale=scale,
        x=center_x - width / 2,
        y=center_y - height / 2,
        width=width,
        height=height,
        rotation=rotation,
    )


def plan_layout(
    page_sizes: Sequence[tuple[float, float]],
    settings: CompositionSettings,
    grid: GridConfig,
    paper: PaperDimensions,
) -> LayoutResult:
    """
    Plan every output sheet for a document.

    Args:
        page_sizes: (width, height) of each source page, in document order
        settings: Composition settings (rotation is applied to every tile)
        grid: Sheet grid
        paper: Sheet size

    Returns:
        LayoutResult with ceil(len(page_sizes) / tiles_per_sheet) sheets.
    """
    tiles_per_sheet = grid.tiles_per_sheet
    sheets = []
    warnings: list[str] = []

    for start in range(0, len(page_sizes), tiles_per_sheet):
        group = page_sizes[start:start + tiles_per_sheet]
        tiles = tuple(
            place_tile(
                source_index=start + offset,
                tile_index=offset,
                page_size=size,
                grid=grid,
                paper=paper,
                rotation=settings.rotation_degrees,
            )
            for offset, size in enumerate(group)
        )
        sheets.append(SheetPlan(index=len(sheets), paper=paper, grid=grid, tiles=tiles))

    if sheets and not sheets[-1].is_full:
        empty = tiles_per_sheet - len(sheets[-1].tiles)
        warnings.append(f"Last sheet has {empty} empty cell(s)")

    first_size = tuple(page_sizes[0]) if page_sizes else None
    if first_size is not None and any(tuple(size) != first_size for size in page_sizes):
        # Paper was sized from the first page only
        warnings.append("Source pages differ in size; paper sized from the first page")

    logger.debug(
        f"Planned {len(sheets)} sheet(s) for {len(page_sizes)} page(s) "
        f"on {grid.columns}x{grid.rows} grid"
    )
    return LayoutResult(grid=grid, paper=paper, sheets=tuple(sheets), warnings=warnings)
