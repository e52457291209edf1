# 📄 File: app/shared/infrastructure/storage/base.py

# 🧭 Purpose (Layman Explanation):
# Describes what any place we keep photos must be able to do: take some bytes,
# put them in a folder, and hand back a link people can open.

# 🧪 Purpose (Technical Summary):
# Abstract object storage contract consumed by the upload service. Backends accept a
# byte buffer plus folder path and return a publicly addressable URL.

# 🔗 Dependencies:
# - abc: abstract base class

# 🔄 Connected Modules / Calls From:
# Implemented by: local_storage.LocalObjectStorage, supabase_storage.SupabaseObjectStorage
# Used by: app.modules.media.application.upload_service

from abc import ABC, abstractmethod
from typing import Any, Dict


class ObjectStorage(ABC):
    """Fire-and-return-URL object storage."""

    backend_name: str = "abstract"

    async def initialize(self) -> None:
        """Prepare the backend. Called once by the application lifespan."""

    async def close(self) -> None:
        """Release backend resources. Called once on shutdown."""

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        filename: str,
        folder: str = "uploads",
        content_type: str = "application/octet-stream"
    ) -> str:
        """
        Store ``data`` as ``{folder}/{filename}``.

        Returns:
            Public URL of the stored object

        Raises:
            StorageUploadError: when the backend rejects or fails the write
        """

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "backend": self.backend_name}


def build_object_path(folder: str, filename: str) -> str:
    """Join a folder and filename into a storage key without stray slashes."""
    folder = folder.strip("/")
    return f"{folder}/{filename}" if folder else filename
