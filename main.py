"""
Moda AI Studio - AI Fashion Shot Generation
FastAPI Backend
"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routes.studio import router as studio_router
from services.credentials import CredentialProvider, resolve_credential_provider
from services.fashion_shot import FashionShotGenerator
from services.studio_state import StudioStore


def setup_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    generator: Optional[FashionShotGenerator] = None,
    credentials: Optional[CredentialProvider] = None,
) -> FastAPI:
    app = FastAPI(
        title="Moda AI Studio API",
        description="Garment + model photo to AI-generated fashion shot",
        version="1.0.0"
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.generator = generator or FashionShotGenerator()
    app.state.credentials = credentials or resolve_credential_provider()
    app.state.studio = StudioStore()

    app.include_router(studio_router, prefix="/api", tags=["studio"])

    @app.get("/")
    async def root():
        return {
            "name": "Moda AI Studio API",
            "version": "1.0.0",
            "status": "running"
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
