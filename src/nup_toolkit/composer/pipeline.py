"""
Module: composer.pipeline

Purpose:
    Compose one document under one set of settings.
    Load → Resolve grid → Select paper → Plan → Render (+ borders) → Serialize

    The same step sequence backs a synchronous entry point and a
    cooperative async one that yields to the event loop after loading,
    after every sheet and before serialization, so several documents can
    interleave on a single loop.

Key Functions:
    - compose_document(): Synchronous composition
    - compose_document_async(): Cooperative composition for the batch worker
    - load_source(): Open and validate source bytes

Key Classes:
    - CompositionOutput: Output bytes plus the layout that produced them

Dependencies:
    - fitz (PyMuPDF): Document codec
    - composer.layout: Geometry
    - composer.output: render_sheets (rendering and borders)

Used By:
    - batch.worker: Processes composition requests
    - cli: Via the batch coordinator
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Generator

import fitz

from .config import CompositionSettings
from .errors import (
    CompositionError,
    EmptyDocumentError,
    SerializationError,
    SourceLoadError,
)
from .layout import LayoutResult, plan_layout, resolve_grid, select_paper_size
from .output import render_sheets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositionOutput:
    """
    Result of composing one document (immutable).

    Attributes:
        output_bytes: Serialized output PDF
        layout: Sheet layout used for the output
        source_page_count: Number of pages in the source

    Example:
        >>> output = compose_document(data, CompositionSettings(pages_per_sheet=4))
        >>> output.sheet_count
        3
    """

    output_bytes: bytes
    layout: LayoutResult
    source_page_count: int

    @property
    def sheet_count(self) -> int:
        return self.layout.sheet_count


def load_source(source_bytes: bytes) -> fitz.Document:
    """
    Open source bytes as a PDF.

    Returns:
        Opened document with at least one page. Caller closes it.

    Raises:
        SourceLoadError: Bytes are empty, malformed or password protected
        EmptyDocumentError: Document parsed but has no pages
    """
    if not source_bytes:
        raise SourceLoadError("Source document is empty (0 bytes)")

    try:
        doc = fitz.open(stream=bytes(source_bytes), filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise SourceLoadError(f"Could not read PDF: {e}") from e

    if doc.needs_pass:
        doc.close()
        raise SourceLoadError("Source document is password protected")
    if doc.page_count == 0:
        doc.close()
        raise EmptyDocumentError("Source document has no pages")
    return doc


def plan_document(source: fitz.Document, settings: CompositionSettings) -> LayoutResult:
    """
    Plan the output layout for an opened source document.

    Paper is sized from the first page only.

    Raises:
        CompositionError: If page geometry is unusable
    """
    grid = resolve_grid(settings.pages_per_sheet)
    page_sizes = [(page.rect.width, page.rect.height) for page in source]
    first_width, first_height = page_sizes[0]

    try:
        paper = select_paper_size(settings.paper_size, first_width, first_height, grid)
        return plan_layout(page_sizes, settings, grid, paper)
    except ValueError as e:
        raise CompositionError(f"Could not lay out pages: {e}") from e


def _serialize(out: fitz.Document) -> bytes:
    try:
        return out.tobytes(garbage=3, deflate=True)
    except (RuntimeError, ValueError) as e:
        raise SerializationError(f"Could not write output PDF: {e}") from e


def _compose_steps(
    source_bytes: bytes,
    settings: CompositionSettings,
) -> Generator[None, None, CompositionOutput]:
    """Composition as a step generator; each ``yield`` is a suspension point."""
    start_time = time.perf_counter()
    source = load_source(source_bytes)
    try:
        yield

        layout = plan_document(source, settings)
        out = fitz.open()
        try:
            for _ in render_sheets(out, source, layout, settings.border_width):
                yield

            output_bytes = _serialize(out)
        finally:
            out.close()
        page_count = source.page_count
    finally:
        source.close()

    for warning in layout.warnings:
        logger.debug(warning)

    duration = time.perf_counter() - start_time
    logger.info(
        f"Composed {layout.sheet_count} sheet(s) from {page_count} page(s) "
        f"({layout.grid.columns}x{layout.grid.rows}, "
        f"{layout.paper.width:g}x{layout.paper.height:g}pt) in {duration:.2f}s"
    )
    return CompositionOutput(
        output_bytes=output_bytes,
        layout=layout,
        source_page_count=page_count,
    )


def compose_document(
    source_bytes: bytes,
    settings: CompositionSettings,
) -> CompositionOutput:
    """
    Compose a document synchronously.

    Args:
        source_bytes: Raw source PDF bytes
        settings: Composition settings

    Returns:
        CompositionOutput with serialized bytes and layout.

    Raises:
        ComposerError: Any load, layout, embedding or serialization failure.
            Partial output is discarded.

    Example:
        >>> output = compose_document(Path("in.pdf").read_bytes(), CompositionSettings(4))
        >>> Path("out.pdf").write_bytes(output.output_bytes)
    """
    steps = _compose_steps(source_bytes, settings)
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value


async def compose_document_async(
    source_bytes: bytes,
    settings: CompositionSettings,
) -> CompositionOutput:
    """
    Compose a document cooperatively on the running event loop.

    Same contract as compose_document(); yields control between steps.
    """
    steps = _compose_steps(source_bytes, settings)
    try:
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value
            await asyncio.sleep(0)
    finally:
        steps.close()
