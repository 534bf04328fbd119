"""
Session state store.

Holds the single MovieState record per session. All writes go through
``update(mutator)``, which applies, persists and notifies atomically.
"""
import logging
import threading
from typing import Callable, Dict, List, Optional

from ..models import DEFAULT_MOVIE_TITLE, MovieState
from .backends import InMemoryBackend, StateBackend

logger = logging.getLogger(__name__)

Listener = Callable[[MovieState], None]
Mutator = Callable[[MovieState], MovieState]


class SessionStateStore:
    """
    State store for one named session.

    Key traits:
    - Lazy creation with defaults (or the persisted snapshot) on first access
    - One notification per successful update, carrying the full snapshot
    - A failed persist leaves state untouched and notifies nobody
    """

    def __init__(
        self,
        session_id: str,
        backend: StateBackend,
        default_title: str = DEFAULT_MOVIE_TITLE,
    ):
        self.session_id = session_id
        self._backend = backend
        self._default_title = default_title
        self._state: Optional[MovieState] = None
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    def _current(self) -> MovieState:
        if self._state is None:
            loaded = self._backend.load(self.session_id)
            self._state = loaded or MovieState(movie_title=self._default_title)
        return self._state

    def get(self) -> MovieState:
        """Return the current snapshot (frozen, safe to hand out)."""
        with self._lock:
            return self._current()

    def update(self, mutator: Mutator) -> MovieState:
        """
        Apply a mutator atomically with respect to other callers on this session.

        :param mutator: Receives the current snapshot, returns the replacement
        :return: The new snapshot
        :raises StorageError: if the backend fails to persist (state unchanged)
        """
        with self._lock:
            new_state = mutator(self._current())
            if not isinstance(new_state, MovieState):
                raise TypeError(f"State mutator must return MovieState, got {type(new_state).__name__}")
            self._backend.save(self.session_id, new_state)
            self._state = new_state
            # Notify under the lock so listeners see snapshots in commit order
            self._notify(new_state)
            return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for post-update snapshots.

        :return: Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: MovieState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                # Listener errors never reach the caller or the other listeners
                logger.exception(f"State listener failed for session '{self.session_id}'")


class StateStoreManager:
    """
    Manages one SessionStateStore per session ID.

    Sessions never interact; each store has its own lock.
    """

    def __init__(
        self,
        backend: Optional[StateBackend] = None,
        default_title: str = DEFAULT_MOVIE_TITLE,
    ):
        self._backend = backend or InMemoryBackend()
        self._default_title = default_title
        self._stores: Dict[str, SessionStateStore] = {}
        self._lock = threading.Lock()

    def get_store(self, session_id: str) -> SessionStateStore:
        """
        Get or create the store for a session.

        :param session_id: Session identifier
        :return: SessionStateStore instance
        """
        with self._lock:
            if session_id not in self._stores:
                self._stores[session_id] = SessionStateStore(
                    session_id,
                    backend=self._backend,
                    default_title=self._default_title,
                )
            return self._stores[session_id]
