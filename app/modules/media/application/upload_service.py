# 📄 File: app/modules/media/application/upload_service.py
# 🧭 Purpose (Layman Explanation):
# Takes a photo the user sent, checks it, shrinks it, stores it, and makes a small
# square preview, then hands back the links to both.
# 🧪 Purpose (Technical Summary):
# Application service orchestrating validate -> optimize -> store -> thumbnail -> store.
# Blocking Pillow work runs in worker threads; storage is the injected ObjectStorage.
# Nothing is persisted until validation has fully passed.
# 🔗 Dependencies:
# asyncio, media domain services, app.shared.infrastructure.storage.ObjectStorage
# 🔄 Connected Modules / Calls From:
# app.modules.media.presentation.api.v1.uploads (via presentation.dependencies)

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union

from app.modules.media.domain.models.upload import ImageFormat, UploadCandidate, ValidationResult
from app.modules.media.domain.services.image_processor import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    THUMBNAIL_SIZE,
    create_thumbnail,
    process_and_optimize_image,
    resolve_format,
)
from app.modules.media.domain.services.upload_validator import (
    MAX_FILE_SIZE,
    inspect_upload,
    require_safe_filename,
    validate_uploaded_file,
)
from app.shared.config.settings import Settings
from app.shared.core.exceptions import NoFileProvidedError, TooManyFilesError
from app.shared.infrastructure.storage.base import ObjectStorage
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

MAX_FILES = 5
DEFAULT_FOLDER = "uploads"


class ImageUploadService:
    """
    Upload pipeline for plant photos.

    Limits and image defaults come from Settings when given, otherwise
    from the module constants of the domain services.
    """

    def __init__(self, storage: ObjectStorage, settings: Optional[Settings] = None):
        self.storage = storage

        if settings is not None:
            self.max_file_size = settings.UPLOAD_MAX_FILE_SIZE
            self.max_files = settings.UPLOAD_MAX_FILES
            self.thumbnail_size = settings.THUMBNAIL_SIZE
            self.defaults = settings.get_image_processing_defaults()
        else:
            self.max_file_size = MAX_FILE_SIZE
            self.max_files = MAX_FILES
            self.thumbnail_size = THUMBNAIL_SIZE
            self.defaults = {
                "max_width": DEFAULT_MAX_WIDTH,
                "max_height": DEFAULT_MAX_HEIGHT,
                "quality": DEFAULT_QUALITY,
                "format": ImageFormat.JPEG.value,
            }

    async def validate(self, candidate: Optional[UploadCandidate]) -> ValidationResult:
        """Run the upload gate without raising."""
        return await asyncio.to_thread(inspect_upload, candidate, self.max_file_size)

    async def process_file_upload(
        self,
        candidate: Optional[UploadCandidate],
        create_thumbnail_image: bool = True,
        folder: str = DEFAULT_FOLDER,
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
        quality: Optional[int] = None,
        format: Optional[Union[str, ImageFormat]] = None
    ) -> Dict[str, Any]:
        """
        Validate, normalize and store one upload.

        Returns:
            {"original_url", "thumbnail_url", "metadata"}; thumbnail_url is
            None when no thumbnail was requested.

        Raises:
            UploadValidationError subclasses before anything is stored,
            UnsupportedFormatError, ImageProcessingFailedError, StorageUploadError
        """
        image_format = resolve_format(format or self.defaults["format"])
        validation = await self._validate_strict(candidate)

        return await self._store(
            candidate,
            validation,
            create_thumbnail_image=create_thumbnail_image,
            folder=folder,
            max_width=max_width,
            max_height=max_height,
            quality=quality,
            image_format=image_format,
        )

    async def _validate_strict(self, candidate: Optional[UploadCandidate]) -> ValidationResult:
        if candidate is not None and candidate.buffer:
            candidate.filename = require_safe_filename(candidate)

        return await asyncio.to_thread(
            validate_uploaded_file, candidate, self.max_file_size
        )

    async def _store(
        self,
        candidate: UploadCandidate,
        validation: ValidationResult,
        create_thumbnail_image: bool,
        folder: str,
        max_width: Optional[int],
        max_height: Optional[int],
        quality: Optional[int],
        image_format: ImageFormat
    ) -> Dict[str, Any]:
        processed = await asyncio.to_thread(
            process_and_optimize_image,
            candidate.buffer,
            max_width or self.defaults["max_width"],
            max_height or self.defaults["max_height"],
            quality or self.defaults["quality"],
            image_format,
            candidate.filename,
        )

        original_url = await self.storage.upload(
            processed.buffer,
            processed.filename,
            folder=folder,
            content_type=processed.content_type,
        )

        thumbnail_url = None
        if create_thumbnail_image:
            # Built from the optimized output, not the raw upload
            thumbnail = await asyncio.to_thread(
                create_thumbnail, processed.buffer, self.thumbnail_size
            )
            thumbnail_url = await self.storage.upload(
                thumbnail.buffer,
                thumbnail.filename,
                folder=f"{folder.rstrip('/')}/thumbnails",
                content_type=thumbnail.content_type,
            )

        metadata = processed.metadata()
        metadata.update({
            "filename": processed.filename,
            "original_filename": candidate.filename,
            "original_width": validation.width,
            "original_height": validation.height,
            "original_size_bytes": candidate.size,
        })

        logger.info(
            f"Upload stored: {processed.filename}",
            backend=self.storage.backend_name,
            folder=folder,
            thumbnail=thumbnail_url is not None,
        )

        return {
            "original_url": original_url,
            "thumbnail_url": thumbnail_url,
            "metadata": metadata,
        }

    async def process_uploads(
        self,
        candidates: Sequence[UploadCandidate],
        create_thumbnail_image: bool = True,
        folder: str = DEFAULT_FOLDER,
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
        quality: Optional[int] = None,
        format: Optional[Union[str, ImageFormat]] = None
    ) -> List[Dict[str, Any]]:
        """
        Process a multi-file upload.

        Every file is validated before any file is stored, so one bad
        file rejects the whole batch with nothing persisted.
        """
        if not candidates:
            raise NoFileProvidedError()
        if len(candidates) > self.max_files:
            raise TooManyFilesError(self.max_files, len(candidates))

        image_format = resolve_format(format or self.defaults["format"])
        validations = [await self._validate_strict(candidate) for candidate in candidates]

        results = []
        for candidate, validation in zip(candidates, validations):
            results.append(await self._store(
                candidate,
                validation,
                create_thumbnail_image=create_thumbnail_image,
                folder=folder,
                max_width=max_width,
                max_height=max_height,
                quality=quality,
                image_format=image_format,
            ))
        return results
