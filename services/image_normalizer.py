"""
Image Normalizer
Downscales oversized uploads and re-encodes them before they are sent to Gemini
"""

import asyncio
import io
import logging
import math
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

import config
from services.errors import DecodeError, EncodeError
from services.models import SourceImage, TransportPayload


logger = logging.getLogger(__name__)


def target_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """
    Proportional size whose larger side is at most max_dimension

    Images already within bounds keep their size. The scaled side is rounded
    half-up to the nearest pixel.
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height

    if width > height:
        return max_dimension, math.floor(height * max_dimension / width + 0.5)
    return math.floor(width * max_dimension / height + 0.5), max_dimension


class ImageNormalizer:
    """Bounds upload payload size so generation requests stay fast"""

    def __init__(
        self,
        max_dimension: int = config.MAX_IMAGE_DIMENSION,
        jpeg_quality: int = config.JPEG_QUALITY,
    ):
        self.max_dimension = max_dimension
        self.jpeg_quality = jpeg_quality

    async def normalize(self, image: SourceImage) -> TransportPayload:
        return await asyncio.to_thread(self.normalize_sync, image)

    def normalize_sync(self, image: SourceImage) -> TransportPayload:
        img = self._decode(image)

        width, height = img.size
        if width == 0 or height == 0:
            raise EncodeError("Could not create a drawing surface for the image")

        new_width, new_height = target_size(width, height, self.max_dimension)
        if (new_width, new_height) != (width, height):
            img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # PNG keeps transparency, everything else is sent as JPEG
        if image.content_type == "image/png":
            mime_type = "image/png"
            data = self._encode_png(img)
        else:
            mime_type = "image/jpeg"
            data = self._encode_jpeg(img)

        logger.debug(
            "Normalized %s: %dx%d -> %dx%d (%s, %d bytes)",
            image.filename or "upload", width, height, new_width, new_height, mime_type, len(data)
        )
        return TransportPayload(data=data, mime_type=mime_type, width=new_width, height=new_height)

    @staticmethod
    def _decode(image: SourceImage) -> Image.Image:
        try:
            img = Image.open(io.BytesIO(image.data))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError(f"Could not process the image: {e}") from e

        # Browsers honour EXIF orientation when decoding, so do the same
        return ImageOps.exif_transpose(img)

    @staticmethod
    def _encode_png(img: Image.Image) -> bytes:
        if img.mode not in ("RGB", "RGBA", "L", "LA", "P", "1"):
            img = img.convert("RGBA")
        output = io.BytesIO()
        try:
            img.save(output, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeError(f"Could not encode the image as PNG: {e}") from e
        return output.getvalue()

    def _encode_jpeg(self, img: Image.Image) -> bytes:
        if img.mode in ("RGBA", "LA", "P"):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            img = background
        elif img.mode != "RGB":
            img = img.convert("RGB")

        output = io.BytesIO()
        try:
            img.save(output, format="JPEG", quality=self.jpeg_quality)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Could not encode the image as JPEG: {e}") from e
        return output.getvalue()
