"""
LangChain adapter for the GenerationClient protocol.

Text and structured output go through any LangChain chat model (Groq,
OpenAI, or a test double); images are delegated to an ImageGenerator.
"""
import logging
from typing import Any, Optional, Type

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import ChatPromptTemplate

from ..exceptions import GenerationError
from ..security.file_validator import ImageValidator
from .client import ImageGenerator, SchemaT

logger = logging.getLogger(__name__)


GENERATION_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{instructions}"),
        ("human", "{context}"),
    ]
)


def _message_text(message: Any) -> str:
    """Extract plain text from a chat model response."""
    content = getattr(message, "content", message)
    if isinstance(content, list):
        # Some providers return content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    if not isinstance(content, str):
        return ""
    return content.strip()


class LangChainGenerationClient:
    """
    Generation client backed by a LangChain chat model.

    Every provider exception is re-raised as GenerationError so the
    orchestrator can isolate the failure to one pipeline step.
    """

    def __init__(self, llm: Any, image_generator: Optional[ImageGenerator] = None):
        """
        :param llm: LangChain chat model (anything with ``invoke(messages)``)
        :param image_generator: Backend for poster images (optional)
        """
        self._llm = llm
        self._image_generator = image_generator

    def generate_text(self, system_instructions: str, context_document: str) -> str:
        messages = GENERATION_PROMPT.format_messages(
            instructions=system_instructions,
            context=context_document,
        )
        try:
            response = self._llm.invoke(messages)
        except Exception as e:
            logger.warning(f"Chat model call failed: {e}")
            raise GenerationError(f"Text generation failed: {e}") from e

        text = _message_text(response)
        if not text:
            raise GenerationError("Text generation returned an empty response")
        return text

    def generate_structured(
        self,
        system_instructions: str,
        context_document: str,
        schema: Type[SchemaT],
    ) -> SchemaT:
        parser = PydanticOutputParser(pydantic_object=schema)
        instructions = f"{system_instructions}\n\n{parser.get_format_instructions()}"
        text = self.generate_text(instructions, context_document)
        try:
            return parser.parse(text)
        except OutputParserException as e:
            logger.warning(f"Structured output did not match {schema.__name__}: {e}")
            raise GenerationError(f"Response does not match {schema.__name__} schema") from e

    def generate_image(self, prompt: str) -> bytes:
        if self._image_generator is None:
            raise GenerationError("No image generator configured")
        try:
            payload = self._image_generator.generate(prompt)
        except GenerationError:
            raise
        except Exception as e:
            logger.warning(f"Image generation failed: {e}")
            raise GenerationError(f"Image generation failed: {e}") from e

        # Any Pillow failure on untrusted bytes is a failure of this call only
        try:
            is_valid, error = ImageValidator.validate_image_bytes(payload)
            if not is_valid:
                raise GenerationError(f"Image generation returned an invalid image: {error}")
            return ImageValidator.to_jpeg(payload)
        except GenerationError:
            raise
        except Exception as e:
            logger.warning(f"Poster re-encoding failed: {e}")
            raise GenerationError(f"Image generation returned an invalid image: {e}") from e
