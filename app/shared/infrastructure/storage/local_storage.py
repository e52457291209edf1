# 📄 File: app/shared/infrastructure/storage/local_storage.py

# 🧭 Purpose (Layman Explanation):
# Keeps uploaded photos in a folder on the server's own disk, which is handy
# for development and small deployments.

# 🧪 Purpose (Technical Summary):
# Filesystem-backed ObjectStorage. Writes under a root directory in a worker thread
# and returns URLs rooted at a configured public base URL.

# 🔗 Dependencies:
# - pathlib, asyncio
# - app.shared.core.exceptions.StorageUploadError

# 🔄 Connected Modules / Calls From:
# Built by app.shared.infrastructure.storage.create_object_storage when STORAGE_BACKEND=local

import asyncio
from pathlib import Path
from typing import Any, Dict, Union

from app.shared.core.exceptions import StorageUploadError
from app.shared.utils.logging import get_logger

from .base import ObjectStorage, build_object_path

logger = get_logger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Object storage on the local filesystem."""

    backend_name = "local"

    def __init__(self, root: Union[str, Path], public_base_url: str):
        self.root = Path(root).resolve()
        self.public_base_url = public_base_url.rstrip("/")

    async def initialize(self) -> None:
        await asyncio.to_thread(self.root.mkdir, parents=True, exist_ok=True)
        logger.info(f"Local object storage ready at {self.root}")

    def _resolve(self, object_path: str) -> Path:
        target = (self.root / object_path).resolve()
        if self.root != target and self.root not in target.parents:
            raise StorageUploadError(
                "Refusing to write outside the storage root",
                path=object_path,
                backend=self.backend_name
            )
        return target

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def upload(
        self,
        data: bytes,
        filename: str,
        folder: str = "uploads",
        content_type: str = "application/octet-stream"
    ) -> str:
        object_path = build_object_path(folder, filename)
        target = self._resolve(object_path)

        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            logger.error(f"Local upload failed for {object_path}: {e}")
            raise StorageUploadError(
                f"Upload failed: {e}",
                path=object_path,
                backend=self.backend_name
            ) from e

        url = f"{self.public_base_url}/{object_path}"
        logger.info(f"File stored locally: {object_path}", size_bytes=len(data))
        return url

    async def health_check(self) -> Dict[str, Any]:
        writable = self.root.is_dir()
        return {
            "status": "healthy" if writable else "unhealthy",
            "backend": self.backend_name,
            "root": str(self.root),
        }
