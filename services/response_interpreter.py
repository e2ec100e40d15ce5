"""
Response Interpreter
Turns a Gemini generate_content response into an image data URL or a typed failure
"""

import base64
import logging

import config
from services.errors import EmptyResponseError, ModelRefusedError


logger = logging.getLogger(__name__)


def _response_parts(response) -> list:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    if content is None:
        return []
    return list(getattr(content, "parts", None) or [])


def _response_text(response, parts: list) -> str:
    texts = [
        part.text for part in parts
        if isinstance(getattr(part, "text", None), str) and part.text and getattr(part, "thought", None) is not True
    ]
    if texts:
        return "".join(texts)
    # Fall back to the SDK's text view when parts are not exposed
    text = getattr(response, "text", None)
    return text if isinstance(text, str) else ""


def refusal_excerpt(text: str, limit: int = config.REFUSAL_EXCERPT_LENGTH) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def interpret_response(response) -> str:
    """
    Extract the generated image from a response

    Checked in order:
    1. first part carrying inline image data -> PNG-labelled data URL
    2. any text -> ModelRefusedError with a truncated excerpt
    3. nothing -> EmptyResponseError
    """
    parts = _response_parts(response)

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is None:
            continue
        data = getattr(inline_data, "data", None)
        if not data:
            continue
        if isinstance(data, (bytes, bytearray)):
            data = base64.b64encode(bytes(data)).decode("ascii")
        # Labelled PNG regardless of the reported mime type
        return f"data:image/png;base64,{data}"

    text = _response_text(response, parts)
    if text:
        logger.warning("Model returned text instead of an image: %s", text[:500])
        excerpt = refusal_excerpt(text)
        raise ModelRefusedError(f"The model could not produce an image. Response: {excerpt}", excerpt)

    raise EmptyResponseError("The model returned an empty response or no image. Please try again.")
