"""
Shared fakes and fixtures.

The fakes stand in for the external capabilities (generation client,
blob store) so the pipeline can be exercised without network access.
"""
import io
import threading
import time
from typing import Any, List, Optional

import pytest
from PIL import Image
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from movie_pitch.exceptions import GenerationError, StorageError
from movie_pitch.generation import prompts
from movie_pitch.generation.schemas import CastListSchema, CastMemberSchema
from movie_pitch.orchestration import RegenerationOrchestrator
from movie_pitch.service import MoviePitchService
from movie_pitch.state import InMemoryBackend, StateStoreManager


STEP_BY_INSTRUCTIONS = {
    prompts.DESCRIPTION_INSTRUCTIONS: "description",
    prompts.TAGLINE_INSTRUCTIONS: "tagline",
    prompts.CAST_INSTRUCTIONS: "cast",
    prompts.POSTER_PROMPT_INSTRUCTIONS: "poster_prompt",
}


def make_png_bytes(size=(8, 12), color=(200, 30, 30, 255)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeGenerationClient:
    """
    In-process GenerationClient.

    Responds with fixed values per step; any step listed in ``fail`` raises
    GenerationError. Every call is recorded as (step, context).
    """

    def __init__(self, fail=(), delays=None, responses=None):
        self.fail = set(fail)
        self.delays = dict(delays or {})
        self.responses = {
            "description": "D",
            "tagline": "T",
            "poster_prompt": "P",
            "cast": CastListSchema(cast=[CastMemberSchema(character="Hero", actor="A")]),
            "image": b"IMG",
        }
        self.responses.update(responses or {})
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _respond(self, step: str, context: Any) -> Any:
        with self._lock:
            self.calls.append((step, context))
        if step in self.delays:
            time.sleep(self.delays[step])
        if step in self.fail:
            raise GenerationError(f"{step} generation failed")
        return self.responses[step]

    def steps_called(self) -> List[str]:
        with self._lock:
            return [step for step, _ in self.calls]

    def context_for(self, step: str) -> Optional[str]:
        with self._lock:
            for called, context in self.calls:
                if called == step:
                    return context
        return None

    def generate_text(self, system_instructions: str, context_document: str) -> str:
        return self._respond(STEP_BY_INSTRUCTIONS[system_instructions], context_document)

    def generate_structured(self, system_instructions, context_document, schema):
        return self._respond(STEP_BY_INSTRUCTIONS[system_instructions], context_document)

    def generate_image(self, prompt: str) -> bytes:
        return self._respond("image", prompt)


class FakeBlobStore:
    """Records puts and returns ``blob://{key}`` references."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.blobs = {}

    def put(self, key: str, payload: bytes) -> str:
        if self.fail:
            raise StorageError("blob store unavailable")
        self.blobs[key] = payload
        return f"blob://{key}"


class ScriptedChatModel(BaseChatModel):
    """LangChain-compatible chat model that replays scripted replies."""

    replies: List[str] = []
    error: Optional[str] = None
    received: List[List[BaseMessage]] = []

    @property
    def _llm_type(self) -> str:
        return "scripted-chat"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        self.received.append(list(messages))
        if self.error:
            raise RuntimeError(self.error)
        content = self.replies.pop(0) if self.replies else ""
        generation = ChatGeneration(message=AIMessage(content=content))
        return ChatResult(generations=[generation])


class StaticImageGenerator:
    def __init__(self, payload: bytes = b"", error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> bytes:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.payload


@pytest.fixture
def generation_client():
    return FakeGenerationClient()


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def stores():
    return StateStoreManager(backend=InMemoryBackend())


@pytest.fixture
def make_orchestrator(stores, blob_store):
    """Factory so each test can pick its own client and fan-out mode."""
    created = []

    def _make(client=None, parallel_fanout=True, generation_timeout_s=None, blobs=None, max_workers=4):
        orchestrator = RegenerationOrchestrator(
            stores=stores,
            generation_client=client or FakeGenerationClient(),
            blob_store=blobs or blob_store,
            generation_timeout_s=generation_timeout_s,
            parallel_fanout=parallel_fanout,
            max_workers=max_workers,
        )
        created.append(orchestrator)
        return orchestrator

    yield _make

    for orchestrator in created:
        orchestrator.close()


@pytest.fixture
def orchestrator(make_orchestrator, generation_client):
    return make_orchestrator(client=generation_client)


@pytest.fixture
def service(orchestrator, stores):
    return MoviePitchService(orchestrator, stores)
