"""
Module: composer.config

Purpose:
    Composition settings for the n-up engine. Immutable value object
    re-supplied on every composition, validated on construction.

Key Classes:
    - PaperSizeMode: Output paper sizing mode (auto or a fixed size)
    - CompositionSettings: Pages per sheet, rotation, border and paper size

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - composer.pipeline: Drives a single composition
    - batch.coordinator: Stores the current settings for re-dispatch
    - common.settings_store: Persists last-used settings
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


SUPPORTED_ROTATIONS = (0, 90, 180, 270)


class PaperSizeMode(str, Enum):
    """Output paper sizing mode."""

    AUTO = "auto"
    LETTER = "letter"
    LEGAL = "legal"
    A4 = "a4"
    A3 = "a3"
    TABLOID = "tabloid"

    @property
    def is_auto(self) -> bool:
        return self is PaperSizeMode.AUTO


@dataclass(frozen=True)
class CompositionSettings:
    """
    Settings for composing one document (immutable).

    ``pages_per_sheet`` is deliberately not rejected here: values outside
    the grid table resolve to a single tile per sheet.

    Attributes:
        pages_per_sheet: Number of source pages tiled per output sheet
        rotation_degrees: Rotation applied to every tile (0/90/180/270)
        border_width: Cell border stroke in points (0 disables borders)
        paper_size: Output paper sizing mode

    Example:
        >>> settings = CompositionSettings(pages_per_sheet=4, paper_size="letter")
        >>> settings.paper_size
        <PaperSizeMode.LETTER: 'letter'>
    """

    pages_per_sheet: int = 1
    rotation_degrees: int = 0
    border_width: float = 0.0
    paper_size: PaperSizeMode = PaperSizeMode.AUTO

    def __post_init__(self) -> None:
        """Validate and normalise settings on construction."""
        if not isinstance(self.paper_size, PaperSizeMode):
            try:
                mode = PaperSizeMode(str(self.paper_size).lower())
            except ValueError:
                raise ValueError(f"Unknown paper size: {self.paper_size!r}") from None
            object.__setattr__(self, "paper_size", mode)
        if self.rotation_degrees not in SUPPORTED_ROTATIONS:
            raise ValueError(
                f"rotation_degrees must be one of {SUPPORTED_ROTATIONS}: {self.rotation_degrees}"
            )
        if self.border_width < 0:
            raise ValueError(f"border_width must be non-negative: {self.border_width}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire/persistence form."""
        return {
            "pagesPerSheet": self.pages_per_sheet,
            "rotation": self.rotation_degrees,
            "borderWidth": self.border_width,
            "paperSize": self.paper_size.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompositionSettings":
        """
        Build settings from the wire/persistence form.

        Missing keys take the defaults. Raises ValueError for invalid values.
        """
        defaults = cls()
        try:
            return cls(
                pages_per_sheet=int(data.get("pagesPerSheet", defaults.pages_per_sheet)),
                rotation_degrees=int(data.get("rotation", defaults.rotation_degrees)),
                border_width=float(data.get("borderWidth", defaults.border_width)),
                paper_size=data.get("paperSize", defaults.paper_size),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed settings: {e}") from e
