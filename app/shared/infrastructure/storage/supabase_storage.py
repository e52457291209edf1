# 📄 File: app/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# This file uploads plant photos and thumbnails to cloud storage
# and gives back the public link where each photo can be viewed.

# 🧪 Purpose (Technical Summary):
# Supabase Storage implementation of ObjectStorage. Holds one Supabase client created
# at startup, writes objects into the configured bucket in a worker thread (the storage
# client is synchronous) and returns the bucket's public URL for each object.

# 🔗 Dependencies:
# - supabase: Storage client
# - asyncio: offloading blocking client calls
# - app.shared.core.exceptions: StorageUploadError, ConfigurationError, ServiceUnavailableError

# 🔄 Connected Modules / Calls From:
# Built by app.shared.infrastructure.storage.create_object_storage when STORAGE_BACKEND=supabase
# Called by: app.modules.media.application.upload_service

import asyncio
from typing import Any, Dict, Optional

from supabase import Client, create_client

from app.shared.core.exceptions import (
    ConfigurationError,
    ServiceUnavailableError,
    StorageUploadError,
)
from app.shared.utils.logging import get_logger

from .base import ObjectStorage, build_object_path

logger = get_logger(__name__)


class SupabaseObjectStorage(ObjectStorage):
    """
    Supabase Storage client for GreenMate uploads.

    Handles:
    - Client creation against the project URL with the service role key
    - Object upload with content type and cache headers
    - Public URL generation
    """

    backend_name = "supabase"

    def __init__(
        self,
        supabase_url: Optional[str],
        service_key: Optional[str],
        bucket_name: str,
        client: Optional[Client] = None
    ):
        if client is None and not (supabase_url and service_key):
            raise ConfigurationError(
                "Supabase URL and service role key are required for the supabase storage backend",
                setting="SUPABASE_URL"
            )

        self.supabase_url = supabase_url
        self.service_key = service_key
        self.bucket_name = bucket_name
        self.client: Optional[Client] = client

    async def initialize(self) -> None:
        """Create the Supabase client."""
        if self.client is not None:
            return
        try:
            self.client = create_client(self.supabase_url, self.service_key)
            logger.info(f"Supabase Storage client initialized for bucket {self.bucket_name}")
        except Exception as e:
            logger.error(f"Failed to initialize Supabase Storage: {e}")
            raise ConfigurationError(f"Storage initialization failed: {e}") from e

    async def close(self) -> None:
        self.client = None

    def _upload_sync(self, object_path: str, data: bytes, content_type: str) -> str:
        bucket = self.client.storage.from_(self.bucket_name)
        bucket.upload(
            path=object_path,
            file=data,
            file_options={
                "content-type": content_type,
                "cache-control": "3600",
                "upsert": "false"
            }
        )
        return bucket.get_public_url(object_path)

    async def upload(
        self,
        data: bytes,
        filename: str,
        folder: str = "uploads",
        content_type: str = "application/octet-stream"
    ) -> str:
        if self.client is None:
            raise ServiceUnavailableError(
                "storage",
                "Supabase storage used before initialize() or after close()"
            )

        object_path = build_object_path(folder, filename)

        try:
            public_url = await asyncio.to_thread(
                self._upload_sync, object_path, data, content_type
            )
        except Exception as e:
            logger.error(f"File upload failed: {e}", path=object_path)
            raise StorageUploadError(
                f"Upload failed: {e}",
                path=object_path,
                backend=self.backend_name
            ) from e

        logger.info(f"File uploaded successfully: {object_path}", size_bytes=len(data))
        return public_url

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if self.client is not None else "unhealthy",
            "backend": self.backend_name,
            "bucket": self.bucket_name,
        }
