"""
Module: batch

Purpose:
    Drive batches of documents through the composition engine. Each
    document has an independent lifecycle; a single cooperative worker
    composes every document and the coordinator reconciles results.

Key Classes:
    - BatchCoordinator: Record store, dispatch and reconciliation
    - CompositionWorker: asyncio request/result service
    - DocumentRecord, DocumentStatus, BatchStatus: Batch state
    - ProcessRequest, CompositionSuccess, CompositionFailure: Messages
    - PreviewStore: Derived preview files

Used By:
    - nup_toolkit.cli
"""

from .models import BatchStatus, DocumentRecord, DocumentStatus
from .messages import CompositionFailure, CompositionResult, CompositionSuccess, ProcessRequest
from .previews import PreviewStore
from .worker import CompositionWorker, WorkerNotRunningError
from .coordinator import BatchCoordinator

__all__ = [
    # State
    "BatchStatus",
    "DocumentRecord",
    "DocumentStatus",
    # Messages
    "CompositionFailure",
    "CompositionResult",
    "CompositionSuccess",
    "ProcessRequest",
    # Services
    "BatchCoordinator",
    "CompositionWorker",
    "PreviewStore",
    "WorkerNotRunningError",
]
