"""
Module: batch.worker

Purpose:
    Long-lived composition service shared by every document in a batch.
    Requests arrive on a queue and run as cooperative tasks on the event
    loop; results are posted to a result queue tagged with the document
    id. Completion order across documents is not guaranteed and there is
    no cancellation: a submitted request always finishes or fails.

Key Classes:
    - CompositionWorker: asyncio request/result queue pair
    - WorkerNotRunningError: Submit/receive on a stopped worker

Dependencies:
    - asyncio (std)
    - composer.pipeline: compose_document_async

Used By:
    - batch.coordinator
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from nup_toolkit.composer.config import CompositionSettings
from nup_toolkit.composer.errors import ComposerError
from nup_toolkit.composer.pipeline import CompositionOutput, compose_document_async

from .messages import (
    CompositionFailure,
    CompositionResult,
    CompositionSuccess,
    ProcessRequest,
)

logger = logging.getLogger(__name__)

ComposeFn = Callable[[bytes, CompositionSettings], Awaitable[CompositionOutput]]

_STOP = object()


class WorkerNotRunningError(RuntimeError):
    """Worker used before start() or after shutdown()."""
    pass


class CompositionWorker:
    """
    Cooperative composition service.

    Usage:
        async with CompositionWorker() as worker:
            await worker.submit(ProcessRequest("doc-1", data, settings))
            result = await worker.next_result()

    Attributes:
        max_pending: Request queue bound (0 = unbounded).
    """

    def __init__(
        self,
        max_pending: int = 0,
        compose: Optional[ComposeFn] = None,
    ):
        """
        Initialize the worker (does not start it).

        Args:
            max_pending: Maximum queued requests; submit() waits when full.
            compose: Composition coroutine, compose_document_async by default.
        """
        self.max_pending = max_pending
        self._compose = compose or compose_document_async
        self._requests: Optional[asyncio.Queue] = None
        self._results: Optional[asyncio.Queue] = None
        self._dispatcher: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._accepting = False

    @property
    def is_running(self) -> bool:
        return self._accepting

    @property
    def in_flight(self) -> int:
        """Requests currently being composed."""
        return len(self._tasks)

    async def start(self) -> None:
        """Start serving requests on the running event loop."""
        if self._accepting:
            return
        self._requests = asyncio.Queue(maxsize=self.max_pending)
        self._results = asyncio.Queue()
        self._dispatcher = asyncio.create_task(self._serve())
        self._accepting = True
        logger.debug("Composition worker started")

    async def submit(self, request: ProcessRequest) -> None:
        """
        Queue a composition request.

        Raises:
            WorkerNotRunningError: If the worker is not running
        """
        if not self._accepting:
            raise WorkerNotRunningError("Composition worker is not running")
        await self._requests.put(request)

    async def next_result(self) -> CompositionResult:
        """Wait for the next completed request, in completion order."""
        if self._results is None:
            raise WorkerNotRunningError("Composition worker was never started")
        return await self._results.get()

    async def shutdown(self) -> None:
        """Stop accepting requests and wait for queued and in-flight work."""
        if not self._accepting:
            return
        self._accepting = False
        await self._requests.put(_STOP)
        await self._dispatcher
        if self._tasks:
            await asyncio.gather(*self._tasks)
        logger.debug("Composition worker stopped")

    async def __aenter__(self) -> "CompositionWorker":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.shutdown()

    async def _serve(self) -> None:
        while True:
            request = await self._requests.get()
            if request is _STOP:
                break
            task = asyncio.create_task(self._process(request))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _process(self, request: ProcessRequest) -> None:
        result = await self.run(request)
        await self._results.put(result)

    async def run(self, request: ProcessRequest) -> CompositionResult:
        """Compose one request and wrap the outcome as a typed result."""
        logger.debug(f"Composing {request.document_id} (revision {request.revision})")
        try:
            output = await self._compose(request.source_bytes, request.settings)
        except ComposerError as e:
            logger.warning(f"Composition failed for {request.document_id}: {e}")
            return CompositionFailure(request.document_id, str(e) or "Unable to process PDF.", request.revision)
        except Exception as e:
            # One document must never take the worker down
            logger.exception(f"Unexpected error composing {request.document_id}")
            return CompositionFailure(request.document_id, f"Unexpected error: {e}", request.revision)
        return CompositionSuccess(request.document_id, output.output_bytes, request.revision)
