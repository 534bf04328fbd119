class MoviePitchError(Exception):
    """Base exception for movie pitch service."""


class ConfigurationError(MoviePitchError):
    """Raised when configuration is missing or invalid."""


class ValidationError(MoviePitchError):
    """Raised when an operation is called with invalid input. Nothing is written."""


class GenerationError(MoviePitchError):
    """Raised when the generation client fails (provider error, timeout, bad output)."""


class StorageError(MoviePitchError):
    """Raised when the blob store or the state store fails to persist."""
