# 📄 File: app/shared/infrastructure/storage/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Sets up where uploaded plant photos are kept: either a local folder
# or Supabase cloud storage, depending on configuration.
#
# 🧪 Purpose (Technical Summary):
# Storage infrastructure package exporting the ObjectStorage contract, its backends,
# and the factory the application lifespan uses to build exactly one instance.
#
# 🔗 Dependencies:
# - app/shared/infrastructure/storage/base.py
# - app/shared/infrastructure/storage/local_storage.py
# - app/shared/infrastructure/storage/supabase_storage.py
#
# 🔄 Connected Modules / Calls From:
# - app.main (lifespan builds the backend and stores it on app.state)
# - app.modules.media (upload service)

"""
Storage Infrastructure Package

Backends:
- local: files under STORAGE_LOCAL_ROOT, URLs under STORAGE_PUBLIC_BASE_URL
- supabase: objects in SUPABASE_STORAGE_BUCKET, Supabase public URLs

Storage Organization:
- uploads/ - optimized images
- uploads/thumbnails/ - 300x300 JPEG thumbnails
"""

from app.shared.config.settings import Settings

from .base import ObjectStorage, build_object_path
from .local_storage import LocalObjectStorage
from .supabase_storage import SupabaseObjectStorage


def create_object_storage(settings: Settings) -> ObjectStorage:
    """Build the configured storage backend. Caller owns its lifecycle."""
    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseObjectStorage(
            supabase_url=settings.SUPABASE_URL,
            service_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            bucket_name=settings.SUPABASE_STORAGE_BUCKET,
        )
    return LocalObjectStorage(
        root=settings.STORAGE_LOCAL_ROOT,
        public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
    )


__all__ = [
    "ObjectStorage",
    "LocalObjectStorage",
    "SupabaseObjectStorage",
    "build_object_path",
    "create_object_storage",
]
