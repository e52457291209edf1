from .upload_service import ImageUploadService

__all__ = ["ImageUploadService"]
