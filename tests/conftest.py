# Test fixtures and configuration
import io
import pytest
from unittest.mock import AsyncMock, MagicMock

from PIL import Image
from google.genai import types

from services.models import SourceImage


def image_bytes(width, height, fmt="JPEG", mode="RGB", color=(200, 30, 60)):
    """Encode a solid-colour image of the given size."""
    if mode == "RGBA" and len(color) == 3:
        color = color + (128,)
    img = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def image_response(data=b"\x89PNG\r\n\x1a\nfake", mime_type="image/png"):
    """Gemini response carrying one inline image part."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[types.Part(inline_data=types.Blob(mime_type=mime_type, data=data))],
                )
            )
        ]
    )


def text_response(text):
    """Gemini response carrying only text."""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def empty_response():
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[]))]
    )


@pytest.fixture
def make_source():
    """Factory for SourceImage uploads."""
    def _make(width=640, height=480, content_type="image/jpeg", fmt=None, mode="RGB", filename=None):
        fmt = fmt or ("PNG" if content_type == "image/png" else "JPEG")
        return SourceImage(
            data=image_bytes(width, height, fmt=fmt, mode=mode),
            content_type=content_type,
            filename=filename,
        )
    return _make


@pytest.fixture
def mock_client():
    """Remote client double: counts generate_content calls."""
    client = MagicMock()
    client.check_credentials.return_value = "test-key"
    client.generate_content = AsyncMock(return_value=image_response())
    return client
