import logging
import threading
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .exceptions import ValidationError
from .models import MovieField, MovieState
from .orchestration import RegenerationOrchestrator
from .schemas import OperationResponse, RegenerateResponse
from .security import InputValidator
from .state.state_store import Listener, StateStoreManager

logger = logging.getLogger(__name__)


class MoviePitchService:
    """
    Facade over the movie pitch subsystem.
    The ONLY entry point for transport layers.

    Operations are addressed by name through an explicit dispatch table;
    every handler validates its arguments before anything is written.
    """

    def __init__(self, orchestrator: RegenerationOrchestrator, stores: StateStoreManager):
        self._orchestrator = orchestrator
        self._stores = stores

        # operation name -> (handler, number of arguments)
        self._operations: Dict[str, Tuple[Callable[..., Any], int]] = {
            "regenerate": (self.regenerate, 1),
            "lock": (self.lock, 1),
            "unlock": (self.unlock, 1),
            "updateDescription": (self.update_description, 1),
            "updateTagline": (self.update_tagline, 1),
            "updateCast": (self.update_cast, 1),
            "updatePosterUrl": (self.update_poster_url, 1),
            "getState": (self._get_state_response, 0),
        }

    @property
    def operations(self) -> Tuple[str, ...]:
        return tuple(self._operations)

    def call(self, session_id: str, operation: str, args: Sequence[Any] = ()) -> Any:
        """
        Dispatch a named operation.

        :param session_id: Session identifier (e.g. slug)
        :param operation: Operation name, e.g. "regenerate" or "updateCast"
        :param args: Positional arguments of the operation
        :return: OperationResponse, or RegenerateResponse for "regenerate"
        :raises ValidationError: unknown operation or wrong arguments
        """
        entry = self._operations.get(operation)
        if entry is None:
            raise ValidationError(
                f"Unknown operation '{operation}'. Allowed: {', '.join(self._operations)}"
            )
        handler, arity = entry
        if not isinstance(args, (list, tuple)) or len(args) != arity:
            raise ValidationError(f"Operation '{operation}' expects {arity} argument(s)")
        return handler(session_id, *args)

    # ----------------------------
    # Reads and subscriptions
    # ----------------------------
    def get_state(self, session_id: str) -> MovieState:
        session_id = InputValidator.validate_session_id(session_id)
        return self._orchestrator.get_state(session_id)

    def subscribe(self, session_id: str, listener: Listener) -> Callable[[], None]:
        """
        Receive every post-update snapshot of a session.

        :return: Callable that removes the listener
        """
        session_id = InputValidator.validate_session_id(session_id)
        return self._stores.get_store(session_id).subscribe(listener)

    def _get_state_response(self, session_id: str) -> OperationResponse:
        return OperationResponse("getState", self.get_state(session_id))

    # ----------------------------
    # Mutating operations
    # ----------------------------
    def regenerate(
        self,
        session_id: str,
        title: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> RegenerateResponse:
        session_id = InputValidator.validate_session_id(session_id)
        title = InputValidator.sanitize_title(title)
        return self._orchestrator.regenerate(session_id, title, cancel_event=cancel_event)

    def lock(self, session_id: str, field: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        movie_field: MovieField = InputValidator.validate_field(field)
        logger.info(f"Lock - Session: {session_id}, Field: {movie_field.value}")
        return OperationResponse("lock", self._orchestrator.lock(session_id, movie_field))

    def unlock(self, session_id: str, field: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        movie_field: MovieField = InputValidator.validate_field(field)
        logger.info(f"Unlock - Session: {session_id}, Field: {movie_field.value}")
        return OperationResponse("unlock", self._orchestrator.unlock(session_id, movie_field))

    def update_description(self, session_id: str, description: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        description = InputValidator.validate_text(description, "Description")
        return OperationResponse(
            "updateDescription",
            self._orchestrator.update_description(session_id, description),
        )

    def update_tagline(self, session_id: str, tagline: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        tagline = InputValidator.validate_text(tagline, "Tagline")
        return OperationResponse(
            "updateTagline",
            self._orchestrator.update_tagline(session_id, tagline),
        )

    def update_cast(self, session_id: str, cast: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        members = InputValidator.validate_cast(cast)
        return OperationResponse(
            "updateCast",
            self._orchestrator.update_cast(session_id, members),
        )

    def update_poster_url(self, session_id: str, poster_url: Any) -> OperationResponse:
        session_id = InputValidator.validate_session_id(session_id)
        poster_url = InputValidator.validate_poster_url(poster_url)
        return OperationResponse(
            "updatePosterUrl",
            self._orchestrator.update_poster_url(session_id, poster_url),
        )
