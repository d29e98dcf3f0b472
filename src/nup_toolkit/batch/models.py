"""
Module: batch.models

Purpose:
    Per-document lifecycle records for a batch. Records are immutable;
    each status transition returns a new record that replaces the old one
    in the coordinator's store.

Key Classes:
    - DocumentStatus: queued / processing / ready / errored
    - BatchStatus: Derived aggregate status of a batch
    - DocumentRecord: State of one uploaded document

Used By:
    - batch.coordinator
    - cli: Status reporting
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


class DocumentStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    READY = "ready"
    ERRORED = "errored"

    @property
    def is_pending(self) -> bool:
        return self in (DocumentStatus.QUEUED, DocumentStatus.PROCESSING)


class BatchStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    ERRORED = "errored"
    READY = "ready"

    @classmethod
    def derive(cls, statuses: Iterable[DocumentStatus]) -> "BatchStatus":
        """
        Aggregate document statuses.

        Example:
            >>> BatchStatus.derive([DocumentStatus.READY, DocumentStatus.ERRORED])
            <BatchStatus.ERRORED: 'errored'>
        """
        statuses = list(statuses)
        if not statuses:
            return cls.IDLE
        if any(status.is_pending for status in statuses):
            return cls.PROCESSING
        if any(status is DocumentStatus.ERRORED for status in statuses):
            return cls.ERRORED
        return cls.READY


@dataclass(frozen=True)
class DocumentRecord:
    """
    State of one uploaded document (immutable).

    Attributes:
        id: Stable identifier for the document's lifetime
        name: Human-readable file name
        byte_size: Size of the uploaded file in bytes
        status: Current lifecycle status
        result_bytes: Composed output (ready only)
        preview: Path of the derived preview resource (ready only)
        error_message: Failure message (errored only)
        revision: Dispatch counter; results for older revisions are stale

    Example:
        >>> record = DocumentRecord.create("abc", "report.pdf", 1024)
        >>> record.processing().status
        <DocumentStatus.PROCESSING: 'processing'>
    """

    id: str
    name: str
    byte_size: int
    status: DocumentStatus = DocumentStatus.QUEUED
    result_bytes: Optional[bytes] = None
    preview: Optional[Path] = None
    error_message: Optional[str] = None
    revision: int = 0

    @classmethod
    def create(cls, record_id: str, name: str, byte_size: int) -> "DocumentRecord":
        return cls(id=record_id, name=name, byte_size=byte_size)

    def processing(self) -> "DocumentRecord":
        """Start a new composition; bumps the revision."""
        return replace(
            self,
            status=DocumentStatus.PROCESSING,
            error_message=None,
            revision=self.revision + 1,
        )

    def ready(self, result_bytes: bytes, preview: Optional[Path]) -> "DocumentRecord":
        return replace(
            self,
            status=DocumentStatus.READY,
            result_bytes=result_bytes,
            preview=preview,
            error_message=None,
        )

    def errored(self, message: str) -> "DocumentRecord":
        return replace(
            self,
            status=DocumentStatus.ERRORED,
            result_bytes=None,
            preview=None,
            error_message=message,
        )
