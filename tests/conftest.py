import pytest
import sys
from pathlib import Path

import fitz

# Add src to sys.path so we can import nup_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


def _build_pdf(page_sizes, blank=False) -> bytes:
    doc = fitz.open()
    for index, (width, height) in enumerate(page_sizes):
        page = doc.new_page(width=width, height=height)
        if not blank:
            page.insert_text((20, 40), f"Page {index + 1}", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


# Common test fixtures
@pytest.fixture
def make_pdf():
    """Return a factory building PDF bytes from a list of (width, height)."""
    return _build_pdf


@pytest.fixture
def four_page_pdf() -> bytes:
    """Four 300x400pt pages with a text label each."""
    return _build_pdf([(300, 400)] * 4)


@pytest.fixture
def sample_pdf_file(tmp_path: Path, make_pdf) -> Path:
    """Three letter-size pages written to disk."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(make_pdf([(612, 792)] * 3))
    return path


@pytest.fixture
def zero_page_pdf() -> bytes:
    """A well-formed PDF whose page tree is empty."""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [] /Count 0 >>",
    ]
    data = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(data))
        data += b"%d 0 obj\n%s\nendobj\n" % (number, body)
    xref_offset = len(data)
    data += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        data += b"%010d 00000 n \n" % offset
    data += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(data)


@pytest.fixture
def encrypted_pdf() -> bytes:
    """One page protected with a user password."""
    doc = fitz.open()
    doc.new_page(width=300, height=400).insert_text((20, 40), "Secret", fontsize=12)
    data = doc.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="user-secret",
    )
    doc.close()
    return data
