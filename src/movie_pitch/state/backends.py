"""
Persistence backends for session state.

A backend only knows how to load and save a whole MovieState snapshot.
Atomicity across concurrent callers is the state store's job.
"""
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from ..exceptions import StorageError
from ..models import MovieState

logger = logging.getLogger(__name__)


class StateBackend(ABC):
    """
    Protocol for session state persistence.

    Backends must NOT:
    - Merge or interpret field values
    - Notify subscribers
    """

    @abstractmethod
    def load(self, session_id: str) -> Optional[MovieState]:
        """
        Load the persisted snapshot for a session.

        :param session_id: Session identifier
        :return: MovieState, or None if the session was never saved
        :raises StorageError: if persisted data cannot be read
        """

    @abstractmethod
    def save(self, session_id: str, state: MovieState) -> None:
        """
        Persist a snapshot, replacing the previous one.

        :raises StorageError: if the snapshot could not be written
        """


class InMemoryBackend(StateBackend):
    """Process-local backend. Snapshots are frozen so they are stored as-is."""

    def __init__(self):
        self._states: Dict[str, MovieState] = {}
        self._lock = threading.Lock()

    def load(self, session_id: str) -> Optional[MovieState]:
        with self._lock:
            return self._states.get(session_id)

    def save(self, session_id: str, state: MovieState) -> None:
        with self._lock:
            self._states[session_id] = state


class JsonFileBackend(StateBackend):
    """
    One JSON document per session under ``state_dir``.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace`` so a reader never sees a half-written file.
    """

    def __init__(self, state_dir: str):
        self._state_dir = Path(state_dir)

    def path_for(self, session_id: str) -> Path:
        # Session ids are opaque; quote them so any id maps to a single file name
        return self._state_dir / f"{quote(session_id, safe='')}.json"

    def load(self, session_id: str) -> Optional[MovieState]:
        path = self.path_for(session_id)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return MovieState.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to load state for session '{session_id}' from {path}: {e}")
            raise StorageError(f"Cannot read state for session '{session_id}': {e}") from e

    def save(self, session_id: str, state: MovieState) -> None:
        path = self.path_for(session_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    json.dump(state.to_dict(), tmp_file, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to persist state for session '{session_id}' to {path}: {e}")
            raise StorageError(f"Cannot persist state for session '{session_id}': {e}") from e
