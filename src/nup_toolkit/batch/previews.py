"""
Module: batch.previews

Purpose:
    Derived preview resources for ready documents. Each ready output is
    written to its own temporary file that presentation code can open;
    the file is deleted when the record is updated, removed or reset.

Key Classes:
    - PreviewStore: Creates and releases preview files
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PreviewStore:
    """
    Temporary-file backed preview resources.

    Usage:
        store = PreviewStore()
        try:
            path = store.create("doc-1", pdf_bytes)
            ...
            store.release(path)
        finally:
            store.close()

    Attributes:
        root: Directory holding preview files.
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            root: Directory for preview files. A private temporary
                directory is created (and removed on close) when omitted.
        """
        self._owns_root = root is None
        self.root = Path(tempfile.mkdtemp(prefix="nup_previews_")) if root is None else root
        self.root.mkdir(parents=True, exist_ok=True)
        self._live: set[Path] = set()

    @property
    def live_count(self) -> int:
        """Number of previews not yet released."""
        return len(self._live)

    def create(self, document_id: str, data: bytes) -> Path:
        """
        Write ``data`` as a new preview for a document.

        Returns:
            Path of the preview file.
        """
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=f"{document_id}_",
            suffix=".pdf",
            dir=self.root,
            delete=False,
        ) as f:
            f.write(data)
            path = Path(f.name)
        self._live.add(path)
        return path

    def release(self, path: Optional[Path]) -> None:
        """Delete a preview. Releasing None or an unknown path is a no-op."""
        if path is None or path not in self._live:
            return
        self._live.discard(path)
        path.unlink(missing_ok=True)

    def close(self) -> None:
        """Release every preview and remove the owned directory."""
        for path in list(self._live):
            self.release(path)
        if self._owns_root and self.root.exists():
            shutil.rmtree(self.root)
            logger.debug(f"Removed preview directory {self.root}")

    def __enter__(self) -> "PreviewStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()
