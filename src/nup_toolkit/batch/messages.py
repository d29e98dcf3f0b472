"""
Module: batch.messages

Purpose:
    Request/response messages exchanged between the batch coordinator and
    the composition worker. Responses form a typed union matched with
    isinstance rather than a discriminator field.

Key Classes:
    - ProcessRequest: Compose one document
    - CompositionSuccess: Output bytes for a document
    - CompositionFailure: Error message for a document
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from nup_toolkit.composer.config import CompositionSettings


@dataclass(frozen=True)
class ProcessRequest:
    """
    Request to compose one document.

    Attributes:
        document_id: Record id the result belongs to
        source_bytes: Copy of the retained source bytes
        settings: Settings for this composition
        revision: Record revision at dispatch time
    """

    document_id: str
    source_bytes: bytes = field(repr=False)
    settings: CompositionSettings
    revision: int = 0

    kind = "process"


@dataclass(frozen=True)
class CompositionSuccess:
    """Composed output for a document at a given revision."""

    document_id: str
    output_bytes: bytes = field(repr=False)
    revision: int = 0

    kind = "success"


@dataclass(frozen=True)
class CompositionFailure:
    """
    Composition failure for a document at a given revision.

    ``message`` is user-facing; it is the composer error text.
    """

    document_id: str
    message: str
    revision: int = 0

    kind = "error"


CompositionResult = Union[CompositionSuccess, CompositionFailure]
