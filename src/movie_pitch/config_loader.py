"""
Configuration loader with validation.
"""
from dotenv import load_dotenv

from .config import MoviePitchConfig
from .config_validator import get_bool_env, get_float_env, get_int_env, get_optional_env
from .exceptions import ConfigurationError
from .models import DEFAULT_MOVIE_TITLE


SUPPORTED_LLM_PROVIDERS = ("groq", "openai")


def load_config_from_env(load_env_file: bool = True) -> MoviePitchConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = MoviePitchApp(config)
        app.initialize()

    :param load_env_file: Load a local .env file first (disable in production)
    :return: Validated MoviePitchConfig instance
    :raises: ConfigurationError if a value is invalid
    """
    if load_env_file:
        load_dotenv()

    llm_provider = (get_optional_env("LLM_PROVIDER", default="groq") or "groq").lower()
    if llm_provider not in SUPPORTED_LLM_PROVIDERS:
        raise ConfigurationError(
            f"LLM_PROVIDER must be one of {', '.join(SUPPORTED_LLM_PROVIDERS)}, got '{llm_provider}'"
        )

    default_model = "llama-3.1-8b-instant" if llm_provider == "groq" else "gpt-4o-mini"

    return MoviePitchConfig(
        llm_provider=llm_provider,
        llm_model=get_optional_env("LLM_MODEL", default=default_model),
        llm_temperature=get_float_env("LLM_TEMPERATURE", 0.8) or 0.0,
        enable_posters=get_bool_env("ENABLE_POSTERS", True),
        image_model=get_optional_env("IMAGE_MODEL", default="dall-e-3"),
        image_size=get_optional_env("IMAGE_SIZE", default="1024x1792"),
        generation_timeout_s=get_float_env("GENERATION_TIMEOUT_S", 60.0),
        parallel_fanout=get_bool_env("PARALLEL_FANOUT", True),
        max_workers=get_int_env("MAX_WORKERS", 8),
        default_title=get_optional_env("DEFAULT_MOVIE_TITLE", default=DEFAULT_MOVIE_TITLE),
        state_dir=get_optional_env("STATE_DIR") or None,
        blob_dir=get_optional_env("BLOB_DIR", default="data/posters"),
        blob_base_url=get_optional_env("BLOB_BASE_URL", default="/posters"),
        verbose=get_bool_env("VERBOSE", False),
    )
