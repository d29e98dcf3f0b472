"""
Tests for batch.previews
"""
from nup_toolkit.batch.previews import PreviewStore


def test_create_writes_file_under_root(tmp_path):
    store = PreviewStore(tmp_path)
    path = store.create("doc1", b"%PDF-preview")
    assert path.parent == tmp_path
    assert path.name.startswith("doc1_")
    assert path.suffix == ".pdf"
    assert path.read_bytes() == b"%PDF-preview"
    assert store.live_count == 1


def test_release_deletes_file(tmp_path):
    store = PreviewStore(tmp_path)
    path = store.create("doc1", b"data")
    store.release(path)
    assert not path.exists()
    assert store.live_count == 0


def test_release_none_or_unknown_is_noop(tmp_path):
    store = PreviewStore(tmp_path)
    outsider = tmp_path / "keep.pdf"
    outsider.write_bytes(b"x")
    store.release(None)
    store.release(outsider)
    assert outsider.exists()


def test_each_create_gets_its_own_file(tmp_path):
    store = PreviewStore(tmp_path)
    first = store.create("doc1", b"one")
    second = store.create("doc1", b"two")
    assert first != second
    assert store.live_count == 2


def test_close_removes_owned_directory():
    with PreviewStore() as store:
        path = store.create("doc1", b"data")
        root = store.root
        assert path.exists()
    assert not root.exists()


def test_close_keeps_supplied_directory(tmp_path):
    store = PreviewStore(tmp_path)
    path = store.create("doc1", b"data")
    store.close()
    assert not path.exists()
    assert tmp_path.exists()
