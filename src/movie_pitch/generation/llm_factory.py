import logging
from typing import Any, Optional

from ..config_validator import get_required_env

logger = logging.getLogger(__name__)


KNOWN_GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "meta-llama/llama-4-scout-17b-16e-instruct",
    "mixtral-8x7b-32768",
]


def get_llm_instance(
    provider: str,
    model: str,
    timeout: Optional[float] = None,
    temperature: float = 0.8,
) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    :param provider: 'groq' or 'openai'
    :param model: Chat model name
    :param timeout: Request timeout in seconds passed to the provider client
    :param temperature: Sampling temperature
    :return: LangChain chat model ready to pass to LangChainGenerationClient
    """
    provider = provider.lower()

    if provider == "groq":
        from langchain_groq import ChatGroq

        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for text generation (get from https://console.groq.com/keys)"
        )

        if model not in KNOWN_GROQ_MODELS:
            # Warn but don't fail - Groq adds models regularly
            logger.warning(f"Model '{model}' not in known Groq models. Known models: {KNOWN_GROQ_MODELS}")

        return ChatGroq(
            model=model,
            api_key=api_key,
            timeout=timeout,
            temperature=temperature,
            max_retries=1,
        )

    elif provider == "openai":
        from langchain_openai import ChatOpenAI

        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key for text generation (get from https://platform.openai.com/api-keys)"
        )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            timeout=timeout,
            temperature=temperature,
            max_retries=1,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
