"""
Boundary validation for session operations.

OOP: Single Responsibility - Only handles validation of operation arguments.
Every check runs before any state is touched.
"""
from collections.abc import Iterable
from typing import Any, Tuple

from ..exceptions import ValidationError
from ..models import CastMember, MovieField


class InputValidator:
    """
    Validates arguments of session operations.

    Values are stored verbatim (rendering is the viewer's concern), so
    validation only strips surrounding whitespace and NUL bytes.
    """

    MAX_SESSION_ID_LENGTH = 128
    MAX_TITLE_LENGTH = 200
    MAX_TEXT_LENGTH = 5000
    MAX_NAME_LENGTH = 200
    MAX_CAST_SIZE = 50
    MAX_URL_LENGTH = 2048

    @staticmethod
    def _clean(value: Any, field_name: str, max_length: int) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")

        cleaned = value.replace("\x00", "").strip()
        if not cleaned:
            raise ValidationError(f"{field_name} cannot be empty")

        if len(cleaned) > max_length:
            raise ValidationError(
                f"{field_name} exceeds maximum length of {max_length} characters"
            )
        return cleaned

    @staticmethod
    def validate_session_id(session_id: Any) -> str:
        """
        Validate an opaque session identifier (e.g. a slug).

        :raises ValidationError: if blank, too long, or not a single path segment
        """
        cleaned = InputValidator._clean(session_id, "Session id", InputValidator.MAX_SESSION_ID_LENGTH)
        if any(ord(ch) < 32 for ch in cleaned):
            raise ValidationError("Session id contains control characters")
        # Session ids prefix blob keys, so they must stay a single path segment
        if "/" in cleaned or "\\" in cleaned or cleaned in (".", ".."):
            raise ValidationError("Session id cannot contain path separators")
        return cleaned

    @staticmethod
    def sanitize_title(title: Any) -> str:
        return InputValidator._clean(title, "Title", InputValidator.MAX_TITLE_LENGTH)

    @staticmethod
    def validate_text(text: Any, field_name: str = "Text") -> str:
        return InputValidator._clean(text, field_name, InputValidator.MAX_TEXT_LENGTH)

    @staticmethod
    def validate_poster_url(url: Any) -> str:
        cleaned = InputValidator._clean(url, "Poster URL", InputValidator.MAX_URL_LENGTH)
        if any(ch.isspace() for ch in cleaned):
            raise ValidationError("Poster URL cannot contain whitespace")
        return cleaned

    @staticmethod
    def validate_field(value: Any) -> MovieField:
        """
        Resolve a field identifier against the closed enumeration.

        :param value: MovieField or its wire value (e.g. "posterUrl")
        :return: MovieField
        :raises ValidationError: if the identifier is not in the enumeration
        """
        if isinstance(value, MovieField):
            return value
        if isinstance(value, str):
            try:
                return MovieField(value)
            except ValueError:
                pass
        raise ValidationError(
            f"Unknown field '{value}'. Allowed: {', '.join(MovieField.values())}"
        )

    @staticmethod
    def validate_cast(cast: Any) -> Tuple[CastMember, ...]:
        """
        Validate a cast list.

        :param cast: Iterable of CastMember or {"character", "actor"} mappings
        :return: Tuple of CastMember in the given order
        :raises ValidationError: if the list or any entry is malformed
        """
        if isinstance(cast, (str, bytes)) or not isinstance(cast, Iterable):
            raise ValidationError("Cast must be a list of {character, actor} entries")

        members = []
        for index, entry in enumerate(cast):
            if isinstance(entry, CastMember):
                character, actor = entry.character, entry.actor
            elif isinstance(entry, dict):
                character, actor = entry.get("character"), entry.get("actor")
            else:
                raise ValidationError(f"Cast entry {index} must be an object with character and actor")

            members.append(
                CastMember(
                    character=InputValidator._clean(character, f"Cast entry {index} character", InputValidator.MAX_NAME_LENGTH),
                    actor=InputValidator._clean(actor, f"Cast entry {index} actor", InputValidator.MAX_NAME_LENGTH),
                )
            )

            if len(members) > InputValidator.MAX_CAST_SIZE:
                raise ValidationError(f"Cast exceeds maximum size of {InputValidator.MAX_CAST_SIZE} entries")

        return tuple(members)
