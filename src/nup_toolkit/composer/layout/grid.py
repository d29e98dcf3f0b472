"""
Module: composer.layout.grid

Purpose:
    Resolve pages-per-sheet into a grid of cells. Fixed table favouring
    taller-than-wide grids for small counts.

Key Functions:
    - resolve_grid(): pages_per_sheet -> GridConfig

Used By:
    - composer.pipeline
    - composer.layout.paper (grid input)
"""

from __future__ import annotations

import logging

from .models import GridConfig

logger = logging.getLogger(__name__)

# pages_per_sheet -> (columns, rows)
GRID_TABLE: dict[int, tuple[int, int]] = {
    1: (1, 1),
    2: (1, 2),
    4: (2, 2),
    6: (2, 3),
    8: (2, 4),
}

SUPPORTED_PAGES_PER_SHEET = tuple(GRID_TABLE)

FALLBACK_GRID = GridConfig(1, 1)


def resolve_grid(pages_per_sheet: int) -> GridConfig:
    """
    Resolve the grid for a pages-per-sheet value.

    Unknown values fall back to one tile per sheet rather than failing.

    Example:
        >>> resolve_grid(6)
        GridConfig(columns=2, rows=3)
        >>> resolve_grid(3)
        GridConfig(columns=1, rows=1)
    """
    shape = GRID_TABLE.get(pages_per_sheet)
    if shape is None:
        logger.warning(
            f"Unsupported pages per sheet {pages_per_sheet!r}, using one page per sheet"
        )
        return FALLBACK_GRID
    return GridConfig(*shape)
