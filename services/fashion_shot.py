"""
Fashion Shot Generator
Normalizes both uploads concurrently, builds the request and interprets the response
"""

import asyncio
import logging
from typing import Optional

from services.errors import MissingInputError
from services.gemini_client import GeminiImageClient
from services.image_normalizer import ImageNormalizer
from services.models import GenerationRequest, SourceImage
from services.prompt_composer import compose
from services.response_interpreter import interpret_response


logger = logging.getLogger(__name__)


class FashionShotGenerator:
    """
    Runs one garment + model composite generation per call

    Calls are independent: nothing is cached between them and a failed
    call is never retried. The caller stamps successful results with a
    capture time.
    """

    def __init__(
        self,
        client: Optional[GeminiImageClient] = None,
        normalizer: Optional[ImageNormalizer] = None,
    ):
        self.client = client or GeminiImageClient()
        self.normalizer = normalizer or ImageNormalizer()

    async def generate(
        self,
        garment: Optional[SourceImage],
        model: Optional[SourceImage],
        pose: str = "",
        background: str = "",
    ) -> str:
        """
        Generate a fashion shot

        Args:
            garment: Garment photo (sent as the first image)
            model: Model photo (sent as the second image)
            pose: Free-text pose direction, default used when blank
            background: Free-text background direction, default used when blank

        Returns:
            data:image/png;base64 URL of the generated image
        """
        if garment is None or model is None:
            raise MissingInputError("Please upload both a garment photo and a model photo.")

        self.client.check_credentials()

        garment_payload, model_payload = await asyncio.gather(
            self.normalizer.normalize(garment),
            self.normalizer.normalize(model),
        )

        request = GenerationRequest(
            garment=garment_payload,
            model=model_payload,
            instruction=compose(pose, background),
        )

        try:
            response = await self.client.generate_content(request)
            return interpret_response(response)
        except Exception as e:
            logger.error("Fashion shot generation failed: %s", e)
            raise
