# 📄 File: app/modules/media/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each upload request the photo pipeline wired to wherever photos are stored.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies resolving the ObjectStorage built by the application lifespan
# (app.state.storage) into a request-scoped ImageUploadService.
# 🔗 Dependencies:
# FastAPI, app.modules.media.application.upload_service
# 🔄 Connected Modules / Calls From:
# app.modules.media.presentation.api.v1.uploads

from fastapi import Depends, Request

from app.modules.media.application.upload_service import ImageUploadService
from app.shared.config.settings import Settings
from app.shared.core.exceptions import ServiceUnavailableError
from app.shared.infrastructure.storage.base import ObjectStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_object_storage(request: Request) -> ObjectStorage:
    """Storage backend owned by the application lifespan."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise ServiceUnavailableError("storage", "Object storage is not initialized")
    return storage


def get_upload_service(
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_app_settings),
) -> ImageUploadService:
    return ImageUploadService(storage, settings)
