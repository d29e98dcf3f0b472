"""
Module: composer.layout

Purpose:
    Pure sheet geometry for the n-up engine: grid resolution, paper size
    selection and per-tile placement. No PDF access happens here.

Key Functions:
    - resolve_grid(): pages per sheet -> grid
    - select_paper_size(): sizing mode -> paper dimensions
    - plan_layout(): source page sizes -> sheet plans

Key Classes:
    - GridConfig, PaperDimensions, CellBounds
    - TilePlacement, SheetPlan, LayoutResult

Used By:
    - composer.pipeline
    - composer.output.renderer
"""

from .models import (
    CellBounds,
    GridConfig,
    LayoutResult,
    PaperDimensions,
    SheetPlan,
    TilePlacement,
)
from .grid import resolve_grid, SUPPORTED_PAGES_PER_SHEET
from .paper import PAPER_SIZES, PaperCandidate, score_all, select_paper_size
from .planner import plan_layout, place_tile

__all__ = [
    # Models
    "CellBounds",
    "GridConfig",
    "LayoutResult",
    "PaperDimensions",
    "SheetPlan",
    "TilePlacement",
    # Grid
    "resolve_grid",
    "SUPPORTED_PAGES_PER_SHEET",
    # Paper
    "PAPER_SIZES",
    "PaperCandidate",
    "score_all",
    "select_paper_size",
    # Planning
    "plan_layout",
    "place_tile",
]
