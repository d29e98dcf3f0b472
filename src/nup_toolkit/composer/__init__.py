"""
Module: composer

Purpose:
    Page-composition engine: tiles the pages of a source PDF onto new
    sheets according to a grid, with rotation, cell borders and fixed or
    automatically selected paper size.

Key Functions:
    - compose_document(): Compose one document synchronously
    - compose_document_async(): Cooperative variant used by the batch worker

Key Classes:
    - CompositionSettings: Settings for one composition
    - PaperSizeMode: auto / letter / legal / a4 / a3 / tabloid
    - CompositionOutput: Output bytes plus layout

Dependencies:
    - fitz (PyMuPDF): Document codec

Used By:
    - nup_toolkit.batch: Batch coordinator and worker
    - nup_toolkit.cli: Command line front end
"""

from .config import CompositionSettings, PaperSizeMode
from .errors import (
    ComposerError,
    CompositionError,
    EmptyDocumentError,
    SerializationError,
    SourceLoadError,
)
from .pipeline import CompositionOutput, compose_document, compose_document_async

__all__ = [
    # Config
    "CompositionSettings",
    "PaperSizeMode",
    # Errors
    "ComposerError",
    "CompositionError",
    "EmptyDocumentError",
    "SerializationError",
    "SourceLoadError",
    # Pipeline
    "CompositionOutput",
    "compose_document",
    "compose_document_async",
]
