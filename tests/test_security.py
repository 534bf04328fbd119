"""
Tests for security module.

Validates operation inputs and generated poster images.
"""
import io

import pytest
from PIL import Image

from movie_pitch.models import CastMember, MovieField
from movie_pitch.security import ImageValidator, InputValidator, ValidationError

from conftest import make_png_bytes


class TestInputValidator:
    """Test input validation and sanitization."""

    def test_sanitize_title_valid(self):
        assert InputValidator.sanitize_title("Giant Robots") == "Giant Robots"

    def test_sanitize_title_strips_nul_and_whitespace(self):
        assert InputValidator.sanitize_title("  Giant\x00 Robots \n") == "Giant Robots"

    def test_sanitize_title_too_long(self):
        with pytest.raises(ValidationError, match="exceeds maximum length"):
            InputValidator.sanitize_title("a" * 201)

    def test_values_are_stored_verbatim(self):
        text = "<b>Robots</b> & \"friends\""
        assert InputValidator.validate_text(text) == text

    def test_validate_text_too_long(self):
        with pytest.raises(ValidationError, match="Description exceeds"):
            InputValidator.validate_text("a" * 5001, "Description")

    def test_validate_session_id(self):
        assert InputValidator.validate_session_id("giant-robots") == "giant-robots"

    @pytest.mark.parametrize("session_id", ["a\\b", ".", "with\ttab"])
    def test_validate_session_id_rejects(self, session_id):
        with pytest.raises(ValidationError):
            InputValidator.validate_session_id(session_id)

    def test_validate_field_accepts_enum_and_wire_value(self):
        assert InputValidator.validate_field(MovieField.CAST) is MovieField.CAST
        assert InputValidator.validate_field("reviews") is MovieField.REVIEWS

    @pytest.mark.parametrize("value", ["Title", "poster_url", "", None, 3])
    def test_validate_field_rejects(self, value):
        with pytest.raises(ValidationError, match="Unknown field"):
            InputValidator.validate_field(value)

    def test_validate_cast_mixed_entries(self):
        members = InputValidator.validate_cast([
            CastMember(" Hero ", "A. Star"),
            {"character": "Villain", "actor": " B. Heavy"},
        ])
        assert members == (CastMember("Hero", "A. Star"), CastMember("Villain", "B. Heavy"))

    def test_validate_cast_preserves_duplicates_and_order(self):
        members = InputValidator.validate_cast([
            {"character": "Twin", "actor": "A"},
            {"character": "Twin", "actor": "A"},
        ])
        assert len(members) == 2

    def test_validate_cast_too_large(self):
        cast = [{"character": f"C{i}", "actor": f"A{i}"} for i in range(51)]
        with pytest.raises(ValidationError, match="maximum size"):
            InputValidator.validate_cast(cast)

    def test_validate_poster_url(self):
        assert InputValidator.validate_poster_url(" /posters/s/1.jpg ") == "/posters/s/1.jpg"


class TestImageValidator:
    """Test generated image validation."""

    def test_valid_png(self):
        is_valid, error = ImageValidator.validate_image_bytes(make_png_bytes())
        assert is_valid
        assert error is None

    def test_empty_payload(self):
        is_valid, error = ImageValidator.validate_image_bytes(b"")
        assert not is_valid
        assert "empty" in error

    def test_oversized_payload(self, monkeypatch):
        monkeypatch.setattr(ImageValidator, "MAX_PAYLOAD_SIZE", 10)
        is_valid, error = ImageValidator.validate_image_bytes(make_png_bytes())
        assert not is_valid
        assert "exceeds maximum" in error

    def test_too_large_dimensions(self, monkeypatch):
        monkeypatch.setattr(ImageValidator, "MAX_DIMENSION", 4)
        is_valid, error = ImageValidator.validate_image_bytes(make_png_bytes(size=(8, 8)))
        assert not is_valid
        assert "dimensions" in error

    def test_decompression_bomb(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        is_valid, error = ImageValidator.validate_image_bytes(make_png_bytes(size=(64, 64)))
        assert not is_valid
        assert "validation failed" in error

    def test_garbage_payload(self):
        is_valid, error = ImageValidator.validate_image_bytes(b"not an image")
        assert not is_valid
        assert "validation failed" in error

    def test_to_jpeg_flattens_transparency(self):
        payload = make_png_bytes(color=(0, 0, 0, 0))
        with Image.open(io.BytesIO(ImageValidator.to_jpeg(payload))) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"
            r, g, b = img.getpixel((0, 0))
            assert min(r, g, b) > 240

    def test_to_jpeg_keeps_jpeg_payload(self):
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), color="blue").save(buffer, format="JPEG")
        payload = buffer.getvalue()
        assert ImageValidator.to_jpeg(payload) is payload
