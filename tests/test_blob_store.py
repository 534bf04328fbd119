"""
Tests for the local blob store.
"""
import pytest

from movie_pitch.exceptions import StorageError
from movie_pitch.storage import LocalBlobStore


def test_put_writes_file_and_returns_reference(tmp_path):
    store = LocalBlobStore(str(tmp_path), base_url="/posters/")

    reference = store.put("robots/abc.jpg", b"JPEG")

    assert reference == "/posters/robots/abc.jpg"
    assert (tmp_path / "robots" / "abc.jpg").read_bytes() == b"JPEG"
    assert not list((tmp_path / "robots").glob("*.tmp"))


def test_put_overwrites_same_key(tmp_path):
    store = LocalBlobStore(str(tmp_path))
    store.put("s/a.jpg", b"one")
    store.put("s/a.jpg", b"two")
    assert (tmp_path / "s" / "a.jpg").read_bytes() == b"two"


@pytest.mark.parametrize("key", ["../escape.jpg", "s/../../escape.jpg", ""])
def test_key_cannot_escape_root(tmp_path, key):
    store = LocalBlobStore(str(tmp_path / "blobs"))
    with pytest.raises(StorageError):
        store.put(key, b"x")


def test_write_failure_is_storage_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = LocalBlobStore(str(blocker))
    with pytest.raises(StorageError):
        store.put("s/a.jpg", b"x")
