"""
Moda AI Studio configuration
Values are read from the environment (and an optional .env file)
"""

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


# Gemini image generation
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-3-pro-image-preview")

# Upload normalization
MAX_IMAGE_DIMENSION = int(os.getenv("MAX_IMAGE_DIMENSION", "1536"))
JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "85"))

# Characters of model text surfaced when no image comes back
REFUSAL_EXCERPT_LENGTH = int(os.getenv("REFUSAL_EXCERPT_LENGTH", "150"))

# Download filename prefix: <prefix>-<timestamp>.png
DOWNLOAD_PREFIX = os.getenv("DOWNLOAD_PREFIX", "moda-ai")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def get_api_key() -> Optional[str]:
    """Resolve the Gemini API key at call time."""
    return os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
