"""
Module: batch.coordinator

Purpose:
    Manage a batch of documents, each with its own lifecycle:

        queued → processing → ready | errored
        ready | errored → processing   (settings changed)

    The coordinator retains each document's source bytes for its whole
    lifetime so every settings change can re-compose from scratch. Results
    are applied only after looking the record up again: a result for a
    removed document, or for a revision that a later dispatch has
    superseded, is discarded.

Key Classes:
    - BatchCoordinator: Indexed record store plus dispatch/reconcile logic

Dependencies:
    - batch.worker: CompositionWorker
    - batch.previews: PreviewStore

Used By:
    - cli: compose command
    - Presentation code via subscribe()
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, List, Optional

from nup_toolkit.composer.config import CompositionSettings

from .messages import CompositionFailure, CompositionResult, CompositionSuccess, ProcessRequest
from .models import BatchStatus, DocumentRecord
from .previews import PreviewStore
from .worker import CompositionWorker, WorkerNotRunningError

logger = logging.getLogger(__name__)

Listener = Callable[[str, Optional[DocumentRecord]], None]


class BatchCoordinator:
    """
    Batch of documents dispatched through one composition worker.

    Usage:
        async with CompositionWorker() as worker:
            batch = BatchCoordinator(worker)
            record = await batch.register("a.pdf", data)
            await batch.wait_settled()
            batch.get(record.id).status

    Attributes:
        settings: Settings used for every dispatch.
        active_id: Record focused by the presentation layer (None iff empty).
    """

    def __init__(
        self,
        worker: CompositionWorker,
        settings: Optional[CompositionSettings] = None,
        previews: Optional[PreviewStore] = None,
    ):
        self._worker = worker
        self.settings = settings or CompositionSettings()
        self._previews = previews
        self._records: Dict[str, DocumentRecord] = {}
        self._sources: Dict[str, bytes] = {}
        self._listeners: List[Listener] = []
        self._outstanding = 0
        self.active_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[DocumentRecord]:
        """Records in upload order."""
        return list(self._records.values())

    @property
    def status(self) -> BatchStatus:
        return BatchStatus.derive(record.status for record in self._records.values())

    @property
    def outstanding(self) -> int:
        """Dispatched requests whose results have not been received."""
        return self._outstanding

    def get(self, record_id: str) -> Optional[DocumentRecord]:
        return self._records.get(record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(record_id, record_or_None)`` after every change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def register(
        self,
        name: str,
        data: bytes,
        byte_size: Optional[int] = None,
    ) -> DocumentRecord:
        """
        Add a document and dispatch its first composition.

        Args:
            name: Display name of the upload
            data: Raw source bytes (a private copy is retained)
            byte_size: Reported upload size, len(data) when omitted

        Returns:
            The record after dispatch (status processing).
        """
        record_id = uuid.uuid4().hex
        record = DocumentRecord.create(
            record_id,
            name,
            len(data) if byte_size is None else byte_size,
        )
        self._sources[record_id] = bytes(data)
        self._store(record)
        if self.active_id is None:
            self.active_id = record_id

        logger.info(f"Registered {name} ({record.byte_size} bytes) as {record_id}")
        return await self._dispatch(record_id)

    async def update_settings(self, settings: CompositionSettings) -> None:
        """Store new settings and re-compose every document."""
        self.settings = settings
        logger.info(f"Settings changed, re-composing {len(self._records)} document(s)")
        for record_id in list(self._records):
            # Removed while an earlier submit was waiting on the queue
            if record_id not in self._records:
                continue
            await self._dispatch(record_id)

    def remove(self, record_id: str) -> bool:
        """
        Remove a document and release its resources.

        In-flight work for it is not stopped; its result is discarded.

        Returns:
            False if no such record exists.
        """
        record = self._records.pop(record_id, None)
        if record is None:
            return False
        self._sources.pop(record_id, None)
        self._release_preview(record)

        if self.active_id == record_id:
            self.active_id = next(iter(self._records), None)

        logger.info(f"Removed {record.name} ({record_id})")
        self._notify(record_id, None)
        return True

    def reset(self) -> None:
        """Release every record's resources and empty the batch."""
        removed = list(self._records)
        for record in self._records.values():
            self._release_preview(record)
        self._records.clear()
        self._sources.clear()
        self.active_id = None
        for record_id in removed:
            self._notify(record_id, None)

    def activate(self, record_id: str) -> None:
        """Focus a record. Raises KeyError for unknown ids."""
        if record_id not in self._records:
            raise KeyError(record_id)
        self.active_id = record_id

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def apply(self, result: CompositionResult) -> bool:
        """
        Reconcile a worker result into its record.

        Returns:
            True if the result was applied, False if it was stale.
        """
        record = self._records.get(result.document_id)
        if record is None:
            logger.debug(f"Discarding result for removed document {result.document_id}")
            return False
        if result.revision != record.revision:
            logger.debug(
                f"Discarding superseded result for {record.name} "
                f"(revision {result.revision}, current {record.revision})"
            )
            return False

        if isinstance(result, CompositionSuccess):
            self._release_preview(record)
            preview = None
            if self._previews is not None:
                preview = self._previews.create(record.id, result.output_bytes)
            updated = record.ready(result.output_bytes, preview)
            logger.info(f"{record.name} ready ({len(result.output_bytes)} bytes)")
        elif isinstance(result, CompositionFailure):
            self._release_preview(record)
            updated = record.errored(result.message)
            logger.warning(f"{record.name} failed: {result.message}")
        else:
            raise TypeError(f"Unknown result type: {type(result).__name__}")

        self._store(updated)
        return True

    async def receive(self) -> bool:
        """
        Wait for the next worker result and apply it.

        Returns:
            Whether the result was applied (see apply()).
        """
        result = await self._worker.next_result()
        self._outstanding -= 1
        return self.apply(result)

    async def wait_settled(self) -> None:
        """Receive and apply results until every dispatch has reported back."""
        while self._outstanding > 0:
            await self.receive()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _dispatch(self, record_id: str) -> DocumentRecord:
        record = self._records[record_id].processing()
        self._store(record)
        request = ProcessRequest(
            document_id=record_id,
            source_bytes=self._sources[record_id],
            settings=self.settings,
            revision=record.revision,
        )
        try:
            await self._worker.submit(request)
        except WorkerNotRunningError as e:
            if record_id in self._records:
                self._release_preview(record)
                self._store(record.errored(str(e)))
            raise
        self._outstanding += 1
        return record

    def _store(self, record: DocumentRecord) -> None:
        self._records[record.id] = record
        self._notify(record.id, record)

    def _release_preview(self, record: DocumentRecord) -> None:
        if self._previews is not None:
            self._previews.release(record.preview)

    def _notify(self, record_id: str, record: Optional[DocumentRecord]) -> None:
        for listener in self._listeners:
            listener(record_id, record)
