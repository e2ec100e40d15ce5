"""
Studio API Routes
Uploads, art direction, generation and download for the fashion shot studio
"""

import logging
from typing import Optional
from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

import config
from services.credentials import CredentialProvider
from services.errors import (
    CredentialSelectionError,
    DecodeError,
    EncodeError,
    FashionShotError,
    MissingCredentialError,
    MissingInputError,
    PermissionDeniedError,
)
from services.fashion_shot import FashionShotGenerator
from services.models import GeneratedImage, ImageRole, SourceImage
from services.studio_state import (
    ClearImage,
    GenerateAborted,
    GenerateFailed,
    GenerateSucceeded,
    SetBackground,
    SetPose,
    StartGenerate,
    StudioState,
    StudioStore,
    UploadImage,
)


router = APIRouter()
logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while generating the image."


class GenerationResultResponse(BaseModel):
    imageUrl: str
    timestamp: int


class CredentialStatusResponse(BaseModel):
    authorized: bool


class StudioStateResponse(BaseModel):
    has_garment: bool
    has_model: bool
    garment_preview: Optional[str] = None
    model_preview: Optional[str] = None
    pose: str
    background: str
    is_generating: bool
    result: Optional[GenerationResultResponse] = None
    error: Optional[str] = None


def _result_response(result: GeneratedImage) -> GenerationResultResponse:
    return GenerationResultResponse(imageUrl=result.image_url, timestamp=result.timestamp_ms)


def _state_response(state: StudioState) -> StudioStateResponse:
    return StudioStateResponse(
        has_garment=state.garment is not None,
        has_model=state.model is not None,
        garment_preview=state.garment.preview_url if state.garment else None,
        model_preview=state.model.preview_url if state.model else None,
        pose=state.pose,
        background=state.background,
        is_generating=state.is_generating,
        result=_result_response(state.result) if state.result else None,
        error=state.error,
    )


def _status_for(error: FashionShotError) -> int:
    if isinstance(error, MissingInputError):
        return 400
    if isinstance(error, (DecodeError, EncodeError)):
        return 422
    if isinstance(error, PermissionDeniedError):
        return 403
    if isinstance(error, MissingCredentialError):
        return 500
    return 502


def _error(status_code: int, code: str, message: str, reset_credentials: bool = False) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"code": code, "message": message, "reset_credentials": reset_credentials},
    )


def _generator(request: Request) -> FashionShotGenerator:
    return request.app.state.generator


def _credentials(request: Request) -> CredentialProvider:
    return request.app.state.credentials


def _store(request: Request) -> StudioStore:
    return request.app.state.studio


async def _source_image(upload: UploadFile) -> SourceImage:
    return SourceImage(
        data=await upload.read(),
        content_type=upload.content_type or "",
        filename=upload.filename,
    )


async def _generate(
    request: Request,
    garment: Optional[SourceImage],
    model: Optional[SourceImage],
    pose: str,
    background: str,
    store: Optional[StudioStore] = None,
) -> GeneratedImage:
    """
    Run one generation

    When a store is given the caller has already dispatched StartGenerate;
    the outcome is always recorded, so the studio never stays in flight.
    """
    credentials = _credentials(request)
    outcome = GenerateAborted()

    try:
        if not await credentials.has_selected_api_key():
            raise _error(403, PermissionDeniedError.code, "Select an API key to continue.", reset_credentials=True)

        try:
            image_url = await _generator(request).generate(garment, model, pose, background)

        except PermissionDeniedError as e:
            # Revoked key: reset credential state instead of reporting a generation error
            credentials.invalidate()
            raise _error(403, e.code, e.message, reset_credentials=True)

        except FashionShotError as e:
            outcome = GenerateFailed(e.message)
            raise _error(_status_for(e), e.code, e.message)

        except Exception as e:
            logger.error("Generation failed: %s", e, exc_info=True)
            outcome = GenerateFailed(str(e) or GENERIC_ERROR)
            raise _error(502, "remote_error", outcome.message)

        result = GeneratedImage.captured_now(image_url)
        outcome = GenerateSucceeded(result)
        return result

    finally:
        if store is not None:
            store.dispatch(outcome)


# ============================================
# CREDENTIALS
# ============================================

@router.get("/credentials", response_model=CredentialStatusResponse)
async def credential_status(request: Request):
    return CredentialStatusResponse(authorized=await _credentials(request).has_selected_api_key())


@router.post("/credentials/select", response_model=CredentialStatusResponse)
async def select_credentials(request: Request):
    credentials = _credentials(request)
    try:
        await credentials.open_select_key()
    except CredentialSelectionError as e:
        raise _error(502, e.code, e.message)
    return CredentialStatusResponse(authorized=await credentials.has_selected_api_key())


# ============================================
# STUDIO
# ============================================

@router.get("/studio", response_model=StudioStateResponse)
async def get_studio(request: Request):
    return _state_response(_store(request).state)


@router.post("/studio/images/{role}", response_model=StudioStateResponse)
async def upload_image(request: Request, role: ImageRole, file: UploadFile = File(...)):
    image = await _source_image(file)
    logger.info("Uploaded %s image %s (%s, %d bytes)", role.value, image.filename, image.content_type, len(image.data))
    return _state_response(_store(request).dispatch(UploadImage(role=role, image=image)))


@router.delete("/studio/images/{role}", response_model=StudioStateResponse)
async def clear_image(request: Request, role: ImageRole):
    return _state_response(_store(request).dispatch(ClearImage(role=role)))


@router.put("/studio/directions", response_model=StudioStateResponse)
async def set_directions(
    request: Request,
    pose: Optional[str] = Form(None),
    background: Optional[str] = Form(None),
):
    store = _store(request)
    if pose is not None:
        store.dispatch(SetPose(pose))
    if background is not None:
        store.dispatch(SetBackground(background))
    return _state_response(store.state)


@router.post("/studio/generate", response_model=GenerationResultResponse)
async def generate_studio_shot(request: Request):
    store = _store(request)
    state = store.state
    if state.is_generating:
        raise _error(409, "generation_in_progress", "A generation is already running.")

    # Claimed before the first await so concurrent requests see it
    store.dispatch(StartGenerate())
    result = await _generate(request, state.garment, state.model, state.pose, state.background, store=store)
    return _result_response(result)


@router.get("/studio/result/download")
async def download_result(request: Request):
    result = _store(request).state.result
    if result is None:
        raise HTTPException(status_code=404, detail="No generated image yet")

    filename = result.download_filename(config.DOWNLOAD_PREFIX)
    return Response(
        content=result.image_bytes(),
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================
# ONE-SHOT GENERATION
# ============================================

@router.post("/fashion-shot", response_model=GenerationResultResponse)
async def generate_fashion_shot(
    request: Request,
    pose: str = Form(""),
    background: str = Form(""),
    garment: Optional[UploadFile] = File(None),
    model: Optional[UploadFile] = File(None),
):
    """Generate a fashion shot without touching the studio state"""
    garment_image = await _source_image(garment) if garment else None
    model_image = await _source_image(model) if model else None

    result = await _generate(request, garment_image, model_image, pose, background)
    return _result_response(result)
