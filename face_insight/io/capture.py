"""Photo capture options and the file-backed capture source."""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from ..config import AppConfig
from ..errors import CaptureFailure
from ..utils.encoding import tag_transport_prefix

logger = logging.getLogger(__name__)


class DestinationType(str, Enum):
    """How a capture hands back the photo."""

    DATA_URL = "data_url"
    FILE_URI = "file_uri"


class EncodingType(str, Enum):
    JPEG = "jpeg"


class MediaType(str, Enum):
    PICTURE = "picture"


class SourceType(str, Enum):
    CAMERA = "camera"


class CameraDirection(str, Enum):
    BACK = "back"
    FRONT = "front"


@dataclass(frozen=True, slots=True)
class CaptureOptions:
    """Settings handed to a capture source. Defaults take a square selfie."""

    destination_type: DestinationType = DestinationType.DATA_URL
    encoding_type: EncodingType = EncodingType.JPEG
    media_type: MediaType = MediaType.PICTURE
    target_width: int = 600
    target_height: int = 600
    save_to_photo_album: bool = False
    allow_edit: bool = True
    source_type: SourceType = SourceType.CAMERA
    correct_orientation: bool = False
    camera_direction: CameraDirection = CameraDirection.FRONT
    quality: int = 92

    @classmethod
    def from_config(cls, config: AppConfig) -> CaptureOptions:
        return cls(
            target_width=config.capture_width,
            target_height=config.capture_height,
            quality=config.jpeg_quality,
        )


class ImageSource(Protocol):
    """Interface for anything that can take a photo."""

    def capture(self, options: CaptureOptions) -> str:
        """Return the photo as a tagged data URL or raise ``CaptureFailure``."""


class FileImageSource:
    """Capture source that "takes" a photo by reading an image file from disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def capture(self, options: CaptureOptions) -> str:
        if options.destination_type is not DestinationType.DATA_URL:
            raise CaptureFailure(
                f"Unsupported destination type {options.destination_type.value!r}."
            )
        try:
            with Image.open(self.path) as img:
                converted = img.convert("RGB")
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise CaptureFailure(f"Could not read photo from {self.path}: {exc}") from exc

        # Scaled to fit the target box; EXIF orientation is left as-is.
        converted.thumbnail((options.target_width, options.target_height))
        buffer = io.BytesIO()
        converted.save(buffer, format="JPEG", quality=options.quality, optimize=True)
        payload = base64.b64encode(buffer.getvalue()).decode("ascii")
        logger.debug(
            "Captured %s as %dx%d JPEG (%d bytes)",
            self.path,
            converted.width,
            converted.height,
            buffer.tell(),
        )
        return tag_transport_prefix(payload)
