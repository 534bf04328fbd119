"""
Configuration validation utilities.

Environment lookups reject placeholder values and never echo secrets.
"""
import logging
import os
from typing import Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.

    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or invalid
    """
    value = os.getenv(key)

    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n\n"
            f"Description: {desc}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}"
        )

    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        logger.warning(f"{key} appears to be a placeholder. Using default.")
        return default

    return value


def get_bool_env(key: str, default: bool) -> bool:
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_float_env(key: str, default: Optional[float]) -> Optional[float]:
    """
    Parse a float variable. ``none`` or ``0`` disables the setting.

    :raises: ConfigurationError if the value is not a number
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    if value.strip().lower() == "none":
        return None
    try:
        parsed = float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got '{value}'") from e
    return parsed if parsed > 0 else None


def get_int_env(key: str, default: int, min_value: int = 1) -> int:
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'") from e
    if parsed < min_value:
        raise ConfigurationError(f"{key} must be at least {min_value}, got {parsed}")
    return parsed


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "sk-0000",
        "gsk_0000",
        "replace_me",
        "changeme",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
