import base64
import logging
from typing import Optional

from openai import OpenAI

from ..exceptions import GenerationError

logger = logging.getLogger(__name__)


class OpenAIImageGenerator:
    """ImageGenerator backed by the OpenAI Images API."""

    def __init__(
        self,
        api_key: str,
        model: str = "dall-e-3",
        size: str = "1024x1792",
        timeout: Optional[float] = None,
    ):
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=1)
        self._model = model
        self._size = size

    def generate(self, prompt: str) -> bytes:
        logger.info(f"Requesting poster image from {self._model} ({self._size})")
        response = self._client.images.generate(
            model=self._model,
            prompt=prompt,
            size=self._size,
            n=1,
            response_format="b64_json",
        )
        encoded = response.data[0].b64_json if response.data else None
        if not encoded:
            raise GenerationError("Image generation returned no image data")
        return base64.b64decode(encoded)
