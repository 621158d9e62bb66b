"""
VaultChat Backend — Chat Image Validation
==========================================

What:  Validates an uploaded image payload against a size limit and a MIME
       allow-list before it is persisted.
How:   Size checks run first (empty, over limit). The image format is then
       determined by a pluggable ImageFormatDetector:

       - MagicByteDetector ("sniff"): reads the leading bytes of the payload
         and ignores whatever Content-Type the client declared.
       - DeclaredTypeDetector ("declared"): trusts the client's Content-Type.

       The detector is chosen by IMAGE_DETECTION_STRATEGY (default "sniff").
Who:   Called by the upload route before ChatImageService persists the bytes.

Recognized signatures (MagicByteDetector):
    JPEG  FF D8 FF                    at offset 0
    PNG   89 50 4E 47 0D 0A 1A 0A     at offset 0
    GIF   "GIF87a" | "GIF89a"         at offset 0
    WEBP  "RIFF" at offset 0 and "WEBP" at offset 8

    Payloads shorter than 12 bytes are never recognized.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional

from vaultchat.config import settings
from vaultchat.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Shortest payload that can hold every signature we check (WEBP needs 12 bytes)
MIN_SNIFF_LENGTH = 12

JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
GIF_SIGNATURES = (b"GIF87a", b"GIF89a")
RIFF_SIGNATURE = b"RIFF"
WEBP_FOURCC = b"WEBP"


@dataclass(frozen=True)
class ValidatedImage:
    """An image payload that passed validation."""

    content: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class ImageFormatDetector(ABC):
    """Determines the MIME type of an uploaded image."""

    name: str = "abstract"

    @abstractmethod
    def detect(self, content: bytes, declared_content_type: Optional[str]) -> Optional[str]:
        """Return the MIME type of the payload, or None if it cannot be determined."""


class MagicByteDetector(ImageFormatDetector):
    """Detects the image format from its leading bytes."""

    name = "sniff"

    def detect(self, content: bytes, declared_content_type: Optional[str]) -> Optional[str]:
        if content is None or len(content) < MIN_SNIFF_LENGTH:
            return None
        if content.startswith(JPEG_SIGNATURE):
            return "image/jpeg"
        if content.startswith(PNG_SIGNATURE):
            return "image/png"
        if content[:6] in GIF_SIGNATURES:
            return "image/gif"
        if content[:4] == RIFF_SIGNATURE and content[8:12] == WEBP_FOURCC:
            return "image/webp"
        return None


class DeclaredTypeDetector(ImageFormatDetector):
    """Uses the Content-Type the client declared for the upload."""

    name = "declared"

    def detect(self, content: bytes, declared_content_type: Optional[str]) -> Optional[str]:
        if not declared_content_type:
            return None
        # "image/png; charset=binary" -> "image/png"
        mime = declared_content_type.split(";", 1)[0].strip().lower()
        return mime or None


DETECTORS = {
    MagicByteDetector.name: MagicByteDetector,
    DeclaredTypeDetector.name: DeclaredTypeDetector,
}


def get_detector(strategy: str) -> ImageFormatDetector:
    """Instantiate the detector registered under `strategy` ("sniff" or "declared")."""
    try:
        return DETECTORS[strategy.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown image detection strategy '{strategy}'. "
            f"Available: {', '.join(sorted(DETECTORS))}"
        ) from None


class ImageValidator:
    """
    Validates image payloads for chat uploads.

    Attributes:
        max_size_bytes: Largest accepted payload; a payload of exactly this size passes.
        allowed_mime_types: Allow-list the detected type must belong to.
        detector: Strategy used to determine the payload's type.
    """

    def __init__(
        self,
        max_size_bytes: int,
        allowed_mime_types: Iterable[str],
        detector: ImageFormatDetector,
    ):
        self.max_size_bytes = max_size_bytes
        self.allowed_mime_types: List[str] = [m.strip().lower() for m in allowed_mime_types]
        self.detector = detector

    @classmethod
    def from_settings(cls) -> "ImageValidator":
        return cls(
            max_size_bytes=settings.chat_image_max_size_bytes,
            allowed_mime_types=settings.allowed_mime_types_list,
            detector=get_detector(settings.image_detection_strategy),
        )

    def validate_size(self, content: bytes) -> None:
        """
        Reject empty payloads and payloads larger than max_size_bytes.

        Raises:
            ValidationError with a human-readable message.
        """
        if not content:
            raise ValidationError(
                message="Image file cannot be empty",
                field="image",
            )
        if len(content) > self.max_size_bytes:
            raise ValidationError(
                message="Image file too large",
                field="image",
                context={"max_size_bytes": self.max_size_bytes, "actual_size": len(content)},
            )

    def validate_mime_type(self, content: bytes, declared_content_type: Optional[str]) -> str:
        """
        Determine the payload's type with the configured detector and check the allow-list.

        Returns:
            The detected MIME type.

        Raises:
            ValidationError if the type is undetected or not allowed.
        """
        detected = self.detector.detect(content, declared_content_type)
        if detected is None or detected not in self.allowed_mime_types:
            raise ValidationError(
                message=(
                    f"Unsupported image type. Detected: {detected}. "
                    f"Allowed: [{', '.join(self.allowed_mime_types)}]"
                ),
                field="image",
                context={
                    "detected_mime": detected,
                    "declared_mime": declared_content_type,
                    "strategy": self.detector.name,
                },
            )
        if declared_content_type and detected != declared_content_type.split(";", 1)[0].strip().lower():
            logger.info(
                "Declared content type %s differs from detected %s",
                declared_content_type,
                detected,
            )
        return detected

    def validate(self, content: bytes, declared_content_type: Optional[str] = None) -> ValidatedImage:
        """
        Full validation pipeline: size first, then type.

        Args:
            content: Raw bytes of the uploaded file
            declared_content_type: Content-Type sent by the client (may be None)

        Returns:
            ValidatedImage with the payload and its MIME type
        """
        self.validate_size(content)
        mime_type = self.validate_mime_type(content, declared_content_type)
        return ValidatedImage(content=content, mime_type=mime_type)
