"""
Data models for the fashion shot pipeline
"""

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, Union


class ImageRole(str, Enum):
    garment = "garment"
    model = "model"


@dataclass(frozen=True)
class SourceImage:
    """Raw user upload: bytes plus the content type the client declared"""

    data: bytes = field(repr=False)
    content_type: str = ""
    filename: Optional[str] = None

    @property
    def preview_url(self) -> str:
        mime = self.content_type or "application/octet-stream"
        return f"data:{mime};base64,{base64.b64encode(self.data).decode('ascii')}"


@dataclass(frozen=True)
class TransportPayload:
    """Normalized image ready to be sent inline to the model"""

    data: bytes = field(repr=False)
    mime_type: str
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class GenerationRequest:
    """One multimodal request: garment first, model second, instruction last"""

    garment: TransportPayload
    model: TransportPayload
    instruction: str

    def parts(self) -> Tuple[Union[TransportPayload, str], ...]:
        # The instruction text refers to "first image" (garment) and "second image" (model)
        return (self.garment, self.model, self.instruction)


@dataclass(frozen=True)
class GeneratedImage:
    image_url: str
    timestamp: datetime

    @classmethod
    def captured_now(cls, image_url: str) -> "GeneratedImage":
        return cls(image_url=image_url, timestamp=datetime.now(timezone.utc))

    @property
    def timestamp_ms(self) -> int:
        return int(self.timestamp.timestamp() * 1000)

    def download_filename(self, prefix: str) -> str:
        return f"{prefix}-{self.timestamp_ms}.png"

    def image_bytes(self) -> bytes:
        """Decode the data URL payload back to raw bytes"""
        _, encoded = self.image_url.split(",", 1)
        return base64.b64decode(encoded)
