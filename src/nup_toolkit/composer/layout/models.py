"""
Module: composer.layout.models

Purpose:
    Data models for sheet layout.
    Immutable dataclasses describing grids, paper, cells and tile placements.
    All coordinates are PDF points in user space (origin at bottom-left).

Key Classes:
    - GridConfig: Columns x rows arrangement of cells
    - PaperDimensions: Output sheet size
    - CellBounds: Rectangle of one grid cell
    - TilePlacement: One source page positioned on a sheet
    - SheetPlan: Complete layout of one output sheet
    - LayoutResult: Layout of a whole document

Dependencies:
    - dataclasses (std)

Used By:
    - composer.layout.planner: Creates SheetPlans
    - composer.output.renderer: Renders SheetPlans
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GridConfig:
    """
    Grid of cells on a sheet.

    Attributes:
        columns: Number of cell columns (>= 1)
        rows: Number of cell rows (>= 1)

    Example:
        >>> GridConfig(2, 3).tiles_per_sheet
        6
    """

    columns: int
    rows: int

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"Grid must be at least 1x1: {self.columns}x{self.rows}")

    @property
    def tiles_per_sheet(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class PaperDimensions:
    """
    Output sheet size in points.

    Attributes:
        width: Sheet width in points
        height: Sheet height in points
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Paper dimensions must be positive: {self.width}x{self.height}")

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    def swapped(self) -> "PaperDimensions":
        """Same paper in the other orientation."""
        return PaperDimensions(self.height, self.width)


@dataclass(frozen=True)
class CellBounds:
    """Rectangle of one grid cell (bottom-left origin)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class TilePlacement:
    """
    A source page positioned on a sheet.

    Attributes:
        source_index: 0-based page index in the source document
        tile_index: 0-based position on the sheet in reading order
        column: Grid column of the cell
        row: Visual grid row of the cell (0 = bottom row)
        cell: Bounds of the cell holding the tile
        scale: Uniform scale applied to the source page
        x: Left edge of the scaled tile
        y: Bottom edge of the scaled tile
        width: Scaled tile width
        height: Scaled tile height
        rotation: Rotation in degrees applied to the tile

    Example:
        >>> placement.right
        placement.x + placement.width
    """

    source_index: int
    tile_index: int
    column: int
    row: int
    cell: CellBounds
    scale: float
    x: float
    y: float
    width: float
    height: float
    rotation: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class SheetPlan:
    """
    Complete layout plan for a single output sheet.

    Attributes:
        index: Sheet number (0-indexed)
        paper: Sheet size
        grid: Grid of cells
        tiles: Tiles placed on this sheet, in reading order
    """

    index: int
    paper: PaperDimensions
    grid: GridConfig
    tiles: tuple[TilePlacement, ...]

    @property
    def cell_width(self) -> float:
        return self.paper.width / self.grid.columns

    @property
    def cell_height(self) -> float:
        return self.paper.height / self.grid.rows

    @property
    def cells(self) -> tuple[CellBounds, ...]:
        """Every cell of the grid, filled or not, bottom row first."""
        return tuple(
            CellBounds(
                x=col * self.cell_width,
                y=row * self.cell_height,
                width=self.cell_width,
                height=self.cell_height,
            )
            for row in range(self.grid.rows)
            for col in range(self.grid.columns)
        )

    @property
    def is_full(self) -> bool:
        return len(self.tiles) == self.grid.tiles_per_sheet


@dataclass(frozen=True)
class LayoutResult:
    """
    Layout of a whole output document.

    Attributes:
        grid: Grid used on every sheet
        paper: Sheet size used on every sheet
        sheets: Sheet plans in output order
        warnings: Non-fatal notes gathered while planning

    Example:
        >>> layout.sheet_count
        3
    """

    grid: GridConfig
    paper: PaperDimensions
    sheets: tuple[SheetPlan, ...]
    warnings: list[str] = field(default_factory=list, compare=False)

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    @property
    def tile_count(self) -> int:
        return sum(len(sheet.tiles) for sheet in self.sheets)
