"""
Module: composer.layout.paper

Purpose:
    Choose the output paper size for a document. Auto mode scores every
    known size in both orientations by how well the grid of scaled source
    pages fills the sheet, penalising upscaling and near-illegible
    downscaling. Fixed modes only choose an orientation.

    The auto score is a heuristic: it picks the best candidate from a
    short fixed list and makes no claim of global optimality.

Key Functions:
    - select_paper_size(): Main entry point
    - score_candidate(): Score one paper/orientation for auto mode
    - auto_candidates(): Enumeration order used by auto mode

Dependencies:
    - composer.layout.models: GridConfig, PaperDimensions
    - composer.config: PaperSizeMode

Used By:
    - composer.pipeline
    - cli: ``plan`` command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from nup_toolkit.composer.config import PaperSizeMode

from .models import GridConfig, PaperDimensions

logger = logging.getLogger(__name__)

# Canonical portrait sizes in points, in auto enumeration order
PAPER_SIZES: dict[PaperSizeMode, PaperDimensions] = {
    PaperSizeMode.LETTER: PaperDimensions(612, 792),
    PaperSizeMode.LEGAL: PaperDimensions(612, 1008),
    PaperSizeMode.A4: PaperDimensions(595, 842),
    PaperSizeMode.A3: PaperDimensions(842, 1191),
    PaperSizeMode.TABLOID: PaperDimensions(792, 1224),
}

CELL_PADDING_FACTOR = 0.98  # 2% shrink per cell dimension
UPSCALE_PENALTY = 0.5
MIN_LEGIBLE_SCALE = 0.3


@dataclass(frozen=True)
class PaperCandidate:
    """
    Scored paper/orientation pair.

    Attributes:
        size: Paper size name
        paper: Dimensions in this orientation
        scale: Uniform scale a source page would get in one cell
        utilization: Fraction of the sheet covered by scaled tiles
        score: utilization x scale penalty
    """

    size: PaperSizeMode
    paper: PaperDimensions
    scale: float
    utilization: float
    score: float


def auto_candidates() -> List[tuple[PaperSizeMode, PaperDimensions]]:
    """Every known size, portrait then landscape, in fixed order."""
    candidates = []
    for size, portrait in PAPER_SIZES.items():
        candidates.append((size, portrait))
        candidates.append((size, portrait.swapped()))
    return candidates


def _scale_penalty(scale: float) -> float:
    if scale > 1:
        return UPSCALE_PENALTY
    if scale < MIN_LEGIBLE_SCALE:
        return scale
    return 1.0


def score_candidate(
    size: PaperSizeMode,
    paper: PaperDimensions,
    source_width: float,
    source_height: float,
    grid: GridConfig,
) -> PaperCandidate:
    """
    Score one paper/orientation for auto selection.

    Args:
        size: Paper size name
        paper: Dimensions in the orientation being scored
        source_width: First source page width (points)
        source_height: First source page height (points)
        grid: Grid of cells

    Returns:
        PaperCandidate with scale, utilization and score.
    """
    cell_width = paper.width / grid.columns * CELL_PADDING_FACTOR
    cell_height = paper.height / grid.rows * CELL_PADDING_FACTOR
    scale = min(cell_width / source_width, cell_height / source_height)

    used_area = (
        source_width * scale * grid.columns
        * source_height * scale * grid.rows
    )
    utilization = used_area / (paper.width * paper.height)
    score = utilization * _scale_penalty(scale)
    return PaperCandidate(size, paper, scale, utilization, score)


def score_all(
    source_width: float,
    source_height: float,
    grid: GridConfig,
) -> List[PaperCandidate]:
    """Score every auto candidate in enumeration order."""
    _validate_source(source_width, source_height)
    return [
        score_candidate(size, paper, source_width, source_height, grid)
        for size, paper in auto_candidates()
    ]


def select_paper_size(
    mode: PaperSizeMode | str,
    source_width: float,
    source_height: float,
    grid: GridConfig,
) -> PaperDimensions:
    """
    Select concrete output paper dimensions.

    Args:
        mode: ``auto`` or a fixed paper size
        source_width: Width of the document's first page (points)
        source_height: Height of the document's first page (points)
        grid: Grid of cells on each sheet

    Returns:
        PaperDimensions, possibly the landscape swap of a canonical size.

    Raises:
        ValueError: If source dimensions are not positive or mode is unknown.

    Example:
        >>> select_paper_size("letter", 300, 400, GridConfig(2, 2))
        PaperDimensions(width=612, height=792)
    """
    mode = PaperSizeMode(mode)
    _validate_source(source_width, source_height)

    if mode.is_auto:
        return _select_auto(source_width, source_height, grid)
    return _select_orientation(PAPER_SIZES[mode], source_width, source_height, grid)


def _select_auto(
    source_width: float,
    source_height: float,
    grid: GridConfig,
) -> PaperDimensions:
    best = None
    for candidate in score_all(source_width, source_height, grid):
        # Strictly greater: ties keep the earliest candidate
        if best is None or candidate.score > best.score:
            best = candidate

    logger.debug(
        f"Auto paper: {best.size.value} {best.paper.width:g}x{best.paper.height:g} "
        f"(score {best.score:.4f}, scale {best.scale:.4f})"
    )
    return best.paper


def _select_orientation(
    portrait: PaperDimensions,
    source_width: float,
    source_height: float,
    grid: GridConfig,
) -> PaperDimensions:
    source_aspect = source_width / source_height
    landscape = portrait.swapped()

    portrait_diff = abs(_cell_aspect(portrait, grid) - source_aspect)
    landscape_diff = abs(_cell_aspect(landscape, grid) - source_aspect)

    # Exact tie prefers portrait
    if landscape_diff < portrait_diff:
        return landscape
    return portrait


def _cell_aspect(paper: PaperDimensions, grid: GridConfig) -> float:
    return (paper.width / grid.columns) / (paper.height / grid.rows)


def _validate_source(source_width: float, source_height: float) -> None:
    if source_width <= 0 or source_height <= 0:
        raise ValueError(
            f"Source page dimensions must be positive: {source_width}x{source_height}"
        )
