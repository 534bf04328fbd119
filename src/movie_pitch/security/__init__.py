"""
Security module for boundary validation of operation inputs and generated images.
"""
from ..exceptions import ValidationError
from .input_validator import InputValidator
from .file_validator import ImageValidator

__all__ = [
    "ValidationError",
    "InputValidator",
    "ImageValidator",
]
