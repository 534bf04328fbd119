"""
Regeneration orchestrator.

Dependency graph of one regenerate run:

    title -> description -> {tagline, cast, poster}

Every generated value is written together with its lock in a single store
update. A failing step is recorded and skipped; it never blocks the others.
"""
import logging
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from dataclasses import replace
from time import time
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from ..exceptions import GenerationError, StorageError
from ..generation import context_builder, prompts
from ..generation.client import GenerationClient
from ..generation.schemas import CastListSchema
from ..models import CastMember, MovieField, MovieState
from ..schemas import FieldStatus, RegenerateResponse
from ..state import lock_manager
from ..state.state_store import SessionStateStore, StateStoreManager
from ..storage.blob_store import BlobStore

logger = logging.getLogger(__name__)


# MovieField -> MovieState attribute
FIELD_ATTRIBUTES: Dict[MovieField, str] = {
    MovieField.TITLE: "movie_title",
    MovieField.DESCRIPTION: "description",
    MovieField.TAGLINE: "tagline",
    MovieField.CAST: "cast",
    MovieField.POSTER_URL: "poster_url",
}

# Steps that only depend on the description and may run concurrently
FANOUT_FIELDS = (MovieField.TAGLINE, MovieField.CAST, MovieField.POSTER_URL)

StepResult = Tuple[FieldStatus, Optional[str]]


def _set_and_lock(movie_field: MovieField, value: Any) -> Callable[[MovieState], MovieState]:
    """Mutator that writes a field and locks it in the same update."""
    attribute = FIELD_ATTRIBUTES[movie_field]

    def mutator(state: MovieState) -> MovieState:
        return replace(
            state,
            **{attribute: value},
            locked_fields=lock_manager.lock(state.locked_fields, movie_field),
        )

    return mutator


class RegenerationOrchestrator:
    """
    Runs the regeneration pipeline and the direct field operations.

    All mutating operations on one session are serialized by a per-session
    lock; callers queue behind the operation in flight. Arguments are
    expected to be validated already (see MoviePitchService).
    """

    def __init__(
        self,
        stores: StateStoreManager,
        generation_client: GenerationClient,
        blob_store: BlobStore,
        generation_timeout_s: Optional[float] = None,
        parallel_fanout: bool = True,
        max_workers: int = 8,
    ):
        """
        :param stores: Per-session state stores
        :param generation_client: Text/structured/image generation capability
        :param blob_store: Storage for poster images
        :param generation_timeout_s: Timeout per generation call (None disables)
        :param parallel_fanout: Run tagline, cast and poster concurrently
        :param max_workers: Thread pool size for generation calls
        """
        self._stores = stores
        self._client = generation_client
        self._blob_store = blob_store
        self._timeout = generation_timeout_s
        self._parallel_fanout = parallel_fanout

        self._session_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

        # Separate pools: steps block on calls, calls never block on steps
        self._call_executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="generation-call")
        self._step_executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pipeline-step")

    # ----------------------------
    # Session serialization
    # ----------------------------
    @contextmanager
    def _session_lock(self, session_id: str) -> Iterator[None]:
        with self._registry_lock:
            session_lock = self._session_locks.setdefault(session_id, threading.Lock())
        with session_lock:
            yield

    def close(self) -> None:
        """Release worker threads. In-flight generation calls are not awaited."""
        self._step_executor.shutdown(wait=False)
        self._call_executor.shutdown(wait=False)

    # ----------------------------
    # Direct operations
    # ----------------------------
    def get_state(self, session_id: str) -> MovieState:
        return self._stores.get_store(session_id).get()

    def lock(self, session_id: str, movie_field: MovieField) -> MovieState:
        with self._session_lock(session_id):
            return self._stores.get_store(session_id).update(
                lambda state: replace(state, locked_fields=lock_manager.lock(state.locked_fields, movie_field))
            )

    def unlock(self, session_id: str, movie_field: MovieField) -> MovieState:
        with self._session_lock(session_id):
            return self._stores.get_store(session_id).update(
                lambda state: replace(state, locked_fields=lock_manager.unlock(state.locked_fields, movie_field))
            )

    def update_field(self, session_id: str, movie_field: MovieField, value: Any) -> MovieState:
        """Set a field and lock it, bypassing generation."""
        with self._session_lock(session_id):
            return self._stores.get_store(session_id).update(_set_and_lock(movie_field, value))

    def update_description(self, session_id: str, description: str) -> MovieState:
        return self.update_field(session_id, MovieField.DESCRIPTION, description)

    def update_tagline(self, session_id: str, tagline: str) -> MovieState:
        return self.update_field(session_id, MovieField.TAGLINE, tagline)

    def update_cast(self, session_id: str, cast: Tuple[CastMember, ...]) -> MovieState:
        return self.update_field(session_id, MovieField.CAST, tuple(cast))

    def update_poster_url(self, session_id: str, poster_url: str) -> MovieState:
        return self.update_field(session_id, MovieField.POSTER_URL, poster_url)

    # ----------------------------
    # Pipeline
    # ----------------------------
    def regenerate(
        self,
        session_id: str,
        title: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> RegenerateResponse:
        """
        Run the pipeline once for a session.

        Workflow:
        1. Set and lock the title (unconditionally)
        2. Description, if unlocked
        3-5. Tagline, cast and poster, if unlocked (concurrent when enabled)

        :param session_id: Session identifier
        :param title: New movie title
        :param cancel_event: When set, unstarted steps are skipped
        :return: RegenerateResponse with final snapshot and per-field status
        :raises StorageError: if the title itself cannot be persisted
        """
        start_time = time()
        store = self._stores.get_store(session_id)
        field_status: Dict[MovieField, FieldStatus] = {}
        errors: Dict[MovieField, str] = {}

        def record(movie_field: MovieField, result: StepResult) -> None:
            status, error = result
            field_status[movie_field] = status
            if error:
                errors[movie_field] = error

        with self._session_lock(session_id):
            logger.info(f"Regenerate - Session: {session_id}, Title: {title!r}")
            store.update(_set_and_lock(MovieField.TITLE, title))

            record(
                MovieField.DESCRIPTION,
                self._run_step(session_id, store, MovieField.DESCRIPTION, store.get(), cancel_event),
            )

            if self._parallel_fanout:
                # Every fan-out step sees the same post-description snapshot
                base_state = store.get()
                futures = {
                    movie_field: self._step_executor.submit(
                        self._run_step, session_id, store, movie_field, base_state, cancel_event
                    )
                    for movie_field in FANOUT_FIELDS
                }
                for movie_field, future in futures.items():
                    record(movie_field, future.result())
            else:
                for movie_field in FANOUT_FIELDS:
                    record(
                        movie_field,
                        self._run_step(session_id, store, movie_field, store.get(), cancel_event),
                    )

            final_state = store.get()

        response = RegenerateResponse(
            state=final_state,
            field_status=field_status,
            errors=errors,
            latency_ms=int((time() - start_time) * 1000),
        )
        if response.failed_fields:
            logger.warning(
                f"Regenerate - Session: {session_id}, failed fields: "
                f"{sorted(f.value for f in response.failed_fields)}"
            )
        logger.info(f"Regenerate - Session: {session_id}, Latency: {response.latency_ms}ms")
        return response

    def _run_step(
        self,
        session_id: str,
        store: SessionStateStore,
        movie_field: MovieField,
        state: MovieState,
        cancel_event: Optional[threading.Event],
    ) -> StepResult:
        if lock_manager.is_locked(state.locked_fields, movie_field):
            logger.debug(f"Step {movie_field.value} skipped: field is locked")
            return FieldStatus.LOCKED, None

        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Step {movie_field.value} cancelled before start - Session: {session_id}")
            return FieldStatus.CANCELLED, None

        generators = {
            MovieField.DESCRIPTION: self._generate_description,
            MovieField.TAGLINE: self._generate_tagline,
            MovieField.CAST: self._generate_cast,
            MovieField.POSTER_URL: self._generate_poster,
        }

        value = None
        try:
            value = generators[movie_field](session_id, state)
            store.update(_set_and_lock(movie_field, value))
        except (GenerationError, StorageError) as e:
            # Previous value is retained and the field stays unlocked for a retry
            logger.warning(f"Step {movie_field.value} failed - Session: {session_id}: {e}")
            if movie_field is MovieField.POSTER_URL and value is not None:
                # Blob storage is put-only: the uploaded poster stays unreferenced
                logger.warning(f"Orphaned poster blob {value} - Session: {session_id}")
            return FieldStatus.FAILED, str(e)

        logger.info(f"Step {movie_field.value} generated - Session: {session_id}")
        return FieldStatus.GENERATED, None

    def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """
        Run a generation call, enforcing the per-call timeout.

        The timeout counts from the moment the call starts running; time
        spent queued behind other sessions' calls is not charged to it.
        """
        if self._timeout is None:
            return fn(*args)

        started = threading.Event()

        def run() -> Any:
            started.set()
            return fn(*args)

        future = self._call_executor.submit(run)
        started.wait()
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError as e:
            # The call keeps running in its thread; its result is discarded
            future.cancel()
            raise GenerationError(f"Generation timed out after {self._timeout}s") from e

    # ----------------------------
    # Step generators
    # ----------------------------
    def _generate_description(self, session_id: str, state: MovieState) -> str:
        return self._call(
            self._client.generate_text,
            prompts.DESCRIPTION_INSTRUCTIONS,
            context_builder.description_context(state),
        )

    def _generate_tagline(self, session_id: str, state: MovieState) -> str:
        return self._call(
            self._client.generate_text,
            prompts.TAGLINE_INSTRUCTIONS,
            context_builder.tagline_context(state),
        )

    def _generate_cast(self, session_id: str, state: MovieState) -> Tuple[CastMember, ...]:
        cast_list: CastListSchema = self._call(
            self._client.generate_structured,
            prompts.CAST_INSTRUCTIONS,
            context_builder.cast_context(state),
            CastListSchema,
        )
        members = cast_list.to_cast_members()
        if not members:
            raise GenerationError("Cast generation returned an empty cast")
        return members

    def _generate_poster(self, session_id: str, state: MovieState) -> str:
        poster_prompt = self._call(
            self._client.generate_text,
            prompts.POSTER_PROMPT_INSTRUCTIONS,
            context_builder.poster_context(state),
        )
        logger.debug(f"Poster prompt - Session: {session_id}: {poster_prompt}")

        payload = self._call(self._client.generate_image, poster_prompt)
        key = f"{session_id}/{uuid.uuid4().hex}.jpg"
        return self._blob_store.put(key, payload)
