"""
Image payload validation.

OOP: Single Responsibility - Only handles validation of generated poster bytes.
"""
import io
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError


class ImageValidator:
    """
    Validates generated images before they reach the blob store.

    Rejects empty, oversized, undecodable or degenerate payloads.
    """

    MAX_PAYLOAD_SIZE = 20 * 1024 * 1024
    MAX_DIMENSION = 10000
    JPEG_QUALITY = 90

    @staticmethod
    def validate_image_bytes(payload: bytes) -> Tuple[bool, Optional[str]]:
        """
        Validate an image payload.

        :param payload: Raw image bytes
        :return: Tuple of (is_valid, error_message)
        """
        if not payload:
            return False, "Image payload is empty"

        if len(payload) > ImageValidator.MAX_PAYLOAD_SIZE:
            return False, f"Image size {len(payload)} bytes exceeds maximum {ImageValidator.MAX_PAYLOAD_SIZE} bytes"

        try:
            with Image.open(io.BytesIO(payload)) as img:
                img.verify()

            with Image.open(io.BytesIO(payload)) as img:
                if img.width > ImageValidator.MAX_DIMENSION or img.height > ImageValidator.MAX_DIMENSION:
                    return False, f"Image dimensions too large (max {ImageValidator.MAX_DIMENSION}x{ImageValidator.MAX_DIMENSION})"

                if img.width == 0 or img.height == 0:
                    return False, "Image has invalid dimensions"

        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            return False, f"Image validation failed: {str(e)}"

        return True, None

    @staticmethod
    def to_jpeg(payload: bytes) -> bytes:
        """
        Re-encode an image payload as JPEG.

        Blob keys always end in ``.jpg``, so every stored poster is a JPEG.
        Transparency is flattened onto a white background.
        """
        with Image.open(io.BytesIO(payload)) as img:
            if img.format == "JPEG":
                return payload

            if img.mode in ("RGBA", "LA", "P"):
                rgba = img.convert("RGBA")
                flattened = Image.new("RGB", rgba.size, (255, 255, 255))
                flattened.paste(rgba, mask=rgba.split()[-1])
            else:
                flattened = img.convert("RGB")

            buffer = io.BytesIO()
            flattened.save(buffer, format="JPEG", quality=ImageValidator.JPEG_QUALITY)
            return buffer.getvalue()
