from typing import Protocol, Type, TypeVar

from pydantic import BaseModel


SchemaT = TypeVar("SchemaT", bound=BaseModel)


class GenerationClient(Protocol):
    """
    Protocol for the text/image generation capability used by the orchestrator.

    Every method raises GenerationError on provider failure, timeout, or an
    empty or malformed response.
    """
    def generate_text(self, system_instructions: str, context_document: str) -> str:
        ...

    def generate_structured(
        self,
        system_instructions: str,
        context_document: str,
        schema: Type[SchemaT],
    ) -> SchemaT:
        ...

    def generate_image(self, prompt: str) -> bytes:
        ...


class ImageGenerator(Protocol):
    """Protocol for a prompt-to-image backend."""
    def generate(self, prompt: str) -> bytes:
        ...
