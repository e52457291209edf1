# 📄 File: app/modules/media/presentation/api/v1/uploads.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints the app calls to upload plant photos, or to just check whether a
# photo would be accepted.
# 🧪 Purpose (Technical Summary):
# FastAPI multipart endpoints over ImageUploadService. Routes are created by a factory
# so the application's slowapi Limiter (and its configured limit) is bound at startup.
# 🔗 Dependencies:
# FastAPI, slowapi, media application service, upload schemas
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

"""
Uploads API Endpoints

Endpoints:
- POST /images: Validate, normalize and store up to UPLOAD_MAX_FILES photos
- POST /validate: Run the upload gate on one photo without storing it
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from slowapi import Limiter

from app.modules.media.domain.models.upload import ImageFormat, UploadCandidate
from app.modules.media.application.upload_service import ImageUploadService
from app.modules.media.presentation.api.schemas.upload_schemas import (
    FOLDER_PATTERN,
    UploadResponse,
    ValidationResponse,
)
from app.modules.media.presentation.dependencies import get_upload_service
from app.shared.config.settings import Settings
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


async def _to_candidate(upload: UploadFile, max_file_size: int) -> UploadCandidate:
    """
    Read an upload into a candidate, at most one byte past the size limit.

    An oversized file keeps its real size and is rejected by the gate
    without its whole body being held in memory.
    """
    buffer = await upload.read(max_file_size + 1)
    return UploadCandidate(
        buffer=buffer,
        content_type=upload.content_type,
        filename=upload.filename or "",
        size=upload.size if upload.size is not None else len(buffer),
    )


def create_uploads_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Build the uploads router with the configured rate limit."""
    router = APIRouter()

    @router.post(
        "/images",
        response_model=UploadResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Upload plant photos",
        description="Validate, resize, re-encode and store photos, with optional thumbnails",
        responses={
            201: {"description": "Photos stored"},
            400: {"description": "Rejected upload"},
            413: {"description": "File too large"},
            415: {"description": "Unsupported file type"},
            429: {"description": "Too many uploads"},
            502: {"description": "Storage backend failure"},
        }
    )
    @limiter.limit(settings.UPLOAD_RATE_LIMIT)
    async def upload_images(
        request: Request,
        files: List[UploadFile] = File(..., description="Image files (JPEG, PNG or WEBP)"),
        create_thumbnail: bool = Form(True),
        folder: str = Form("uploads", pattern=FOLDER_PATTERN, max_length=128),
        max_width: Optional[int] = Form(None, ge=1, le=4096),
        max_height: Optional[int] = Form(None, ge=1, le=4096),
        quality: Optional[int] = Form(None, ge=1, le=100),
        format: Optional[ImageFormat] = Form(None),
        upload_service: ImageUploadService = Depends(get_upload_service),
    ) -> UploadResponse:
        candidates = [
            await _to_candidate(upload, upload_service.max_file_size) for upload in files
        ]

        logger.info(
            f"Upload request with {len(candidates)} file(s)",
            folder=folder,
            create_thumbnail=create_thumbnail,
        )

        results = await upload_service.process_uploads(
            candidates,
            create_thumbnail_image=create_thumbnail,
            folder=folder,
            max_width=max_width,
            max_height=max_height,
            quality=quality,
            format=format,
        )
        return UploadResponse(data=results)

    @router.post(
        "/validate",
        response_model=ValidationResponse,
        summary="Check a photo without storing it",
        description="Run the upload gate and report the first failed check, if any",
    )
    @limiter.limit(settings.UPLOAD_RATE_LIMIT)
    async def validate_image(
        request: Request,
        file: UploadFile = File(..., description="Image file to check"),
        upload_service: ImageUploadService = Depends(get_upload_service),
    ) -> ValidationResponse:
        result = await upload_service.validate(
            await _to_candidate(file, upload_service.max_file_size)
        )
        return ValidationResponse(data=result.to_dict())

    return router
