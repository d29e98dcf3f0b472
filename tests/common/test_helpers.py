"""
Tests for common.helpers and common.paths
"""
from pathlib import Path

import pytest

from nup_toolkit.common import (
    format_size,
    get_app_data_dir,
    get_settings_path,
    looks_like_pdf,
    output_filename,
)
from nup_toolkit.common.paths import HOME_ENV_VAR


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0.0 B"), (512, "512.0 B"), (1024, "1.0 KB"), (1536, "1.5 KB"), (5 * 1024 ** 2, "5.0 MB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.pdf", "report-manipulated.pdf"),
        ("Report.PDF", "Report-manipulated.pdf"),
        ("notes", "notes-manipulated.pdf"),
        ("dir/slides.v2.pdf", "slides.v2-manipulated.pdf"),
    ],
)
def test_output_filename(name, expected):
    assert output_filename(name) == expected


def test_looks_like_pdf():
    assert looks_like_pdf(b"%PDF-1.7\n...")
    assert looks_like_pdf(b"\xef\xbb\xbf%PDF-1.4")
    assert not looks_like_pdf(b"PK\x03\x04 zip archive")
    assert not looks_like_pdf(b"")
    assert not looks_like_pdf(b" " * 2048 + b"%PDF-1.7")


def test_app_data_dir_honours_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "home"))
    assert get_app_data_dir() == tmp_path / "home"
    assert get_settings_path() == tmp_path / "home" / "settings.json"


def test_app_data_dir_default_is_absolute(monkeypatch):
    monkeypatch.delenv(HOME_ENV_VAR, raising=False)
    assert isinstance(get_app_data_dir(), Path)
    assert get_app_data_dir().is_absolute()
