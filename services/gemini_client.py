"""
Gemini 3 Pro Image API Client
Sends one multimodal try-on request (garment, model, instruction) per call
"""

import asyncio
import logging
from typing import Callable, Optional

from google import genai
from google.genai import errors, types

import config
from services.errors import MissingCredentialError, PermissionDeniedError
from services.models import GenerationRequest, TransportPayload


logger = logging.getLogger(__name__)


# Only consulted when the error carries no structured status
PERMISSION_MARKERS = (
    "403",
    "PERMISSION_DENIED",
    "The caller does not have permission",
    "Requested entity was not found",
)


def is_permission_error(error: Exception) -> bool:
    """Classify a remote failure as an invalidated credential"""
    if isinstance(error, errors.APIError):
        if error.code == 403 or error.status == "PERMISSION_DENIED":
            return True
        if error.code == 404 and "Requested entity was not found" in (error.message or ""):
            return True
        if error.code or error.status:
            return False

    text = str(error)
    return any(marker in text for marker in PERMISSION_MARKERS)


class GeminiImageClient:
    """Client for Gemini image generation"""

    MODEL = config.GEMINI_IMAGE_MODEL

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client_factory: Optional[Callable[[str], genai.Client]] = None,
    ):
        self._api_key = api_key
        self.model = model or self.MODEL
        self._client_factory = client_factory or (lambda key: genai.Client(api_key=key))

    def check_credentials(self) -> str:
        """Return the API key or fail before any network activity"""
        api_key = self._api_key or config.get_api_key()
        if not api_key:
            raise MissingCredentialError("API key not found. Set API_KEY in the environment.")
        return api_key

    @staticmethod
    def _inline_part(payload: TransportPayload) -> types.Part:
        return types.Part.from_bytes(data=payload.data, mime_type=payload.mime_type)

    def build_contents(self, request: GenerationRequest) -> list:
        contents = []
        for part in request.parts():
            if isinstance(part, TransportPayload):
                contents.append(self._inline_part(part))
            else:
                contents.append(types.Part.from_text(text=part))
        return contents

    async def generate_content(self, request: GenerationRequest):
        """Send exactly one request; no retry, no fallback model"""
        client = self._client_factory(self.check_credentials())
        contents = self.build_contents(request)

        logger.info("Requesting fashion shot from %s", self.model)
        try:
            return await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_modalities=["TEXT", "IMAGE"],
                ),
            )
        except Exception as e:
            if is_permission_error(e):
                logger.warning("Gemini denied access: %s", e)
                raise PermissionDeniedError(
                    "Access denied (403). Select an API key from a paid project with billing enabled."
                ) from e
            logger.error("Gemini API error: %s", e)
            raise
