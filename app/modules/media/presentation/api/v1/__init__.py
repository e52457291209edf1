from .uploads import create_uploads_router

__all__ = ["create_uploads_router"]
