"""
Blob storage for generated posters.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Protocol for a binary store that returns a retrievable reference."""
    def put(self, key: str, payload: bytes) -> str:
        ...


class LocalBlobStore:
    """
    Stores blobs as files under ``root_dir``.

    The returned reference is ``{base_url}/{key}``; the Flask app serves
    ``root_dir`` under the same prefix.
    """

    def __init__(self, root_dir: str, base_url: str = "/posters"):
        self._root = Path(root_dir).resolve()
        self._base_url = base_url.rstrip("/")

    @property
    def root_dir(self) -> Path:
        return self._root

    def _path_for(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if path == self._root or self._root not in path.parents:
            raise StorageError(f"Blob key escapes storage root: {key!r}")
        return path

    def put(self, key: str, payload: bytes) -> str:
        """
        Write a payload under a key such as ``{session_id}/{random_id}.jpg``.

        :return: Reference to surface verbatim to the caller
        :raises StorageError: if the key is invalid or the write fails
        """
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as tmp_file:
                    tmp_file.write(payload)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to store blob {key}: {e}")
            raise StorageError(f"Cannot store blob {key}: {e}") from e

        logger.info(f"Stored blob {key} ({len(payload)} bytes)")
        return f"{self._base_url}/{key}"
