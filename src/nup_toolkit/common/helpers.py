"""Small helpers shared by the command line front end."""
from __future__ import annotations

import re
from pathlib import Path

PDF_MAGIC = b"%PDF-"
MAX_UPLOAD_BYTES = 100 * 1024 * 1024  # 100 MB
OUTPUT_SUFFIX = "-manipulated"

# Some writers put junk before the header; readers scan the first KB
_HEADER_SCAN_BYTES = 1024


def format_size(bytes_size: float) -> str:
    """Format bytes to human-readable string (e.g., '1.2 MB').

    Args:
        bytes_size: Size in bytes.

    Returns:
        Formatted string with appropriate unit.
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.1f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.1f} TB"


def output_filename(name: str) -> str:
    """Download name for a composed document.

    Example:
        >>> output_filename("Report.PDF")
        'Report-manipulated.pdf'
    """
    stem = re.sub(r"\.pdf$", "", Path(name).name, flags=re.IGNORECASE)
    return f"{stem}{OUTPUT_SUFFIX}.pdf"


def looks_like_pdf(data: bytes) -> bool:
    """Check for a PDF header near the start of ``data``."""
    return PDF_MAGIC in data[:_HEADER_SCAN_BYTES]
