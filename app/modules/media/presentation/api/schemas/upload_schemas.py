# 📄 File: app/modules/media/presentation/api/schemas/upload_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the photo upload endpoints send back: links to the stored photo and
# its thumbnail, plus facts about the photo like its size.
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for the uploads API, wrapped in the standard
# {"success": true, "data": ...} envelope.
# 🔗 Dependencies:
# pydantic, app.modules.media.domain.models
# 🔄 Connected Modules / Calls From:
# app.modules.media.presentation.api.v1.uploads

"""
Upload API Schemas

Response Schemas:
- ImageMetadata: Dimensions and sizes of the stored image
- UploadResult: Stored image URL, thumbnail URL and metadata
- UploadResponse: Envelope around the per-file results
- ValidationResultSchema / ValidationResponse: Outcome of the upload gate
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.media.domain.models.upload import ImageFormat

# Nested folder names only; no traversal, no leading or trailing slash
FOLDER_PATTERN = r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$"


class ImageMetadata(BaseModel):
    """Post-encode facts about a stored image."""

    format: ImageFormat = Field(..., description="Stored encoding")
    width: int = Field(..., description="Stored width in pixels")
    height: int = Field(..., description="Stored height in pixels")
    size_bytes: int = Field(..., description="Stored size in bytes")
    filename: str = Field(..., description="Generated storage filename")
    original_filename: str = Field(..., description="Sanitized client filename")
    original_width: Optional[int] = Field(default=None, description="Uploaded width")
    original_height: Optional[int] = Field(default=None, description="Uploaded height")
    original_size_bytes: Optional[int] = Field(default=None, description="Uploaded size")


class UploadResult(BaseModel):
    original_url: str = Field(..., description="Public URL of the optimized image")
    thumbnail_url: Optional[str] = Field(
        default=None,
        description="Public URL of the 300x300 thumbnail, when requested"
    )
    metadata: ImageMetadata

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "original_url": "http://localhost:8000/static/uploads/1718000000000-1a2b3c4d-7f3e.jpg",
                "thumbnail_url": "http://localhost:8000/static/uploads/thumbnails/1718000000001-5e6f7a8b-9c0d.jpg",
                "metadata": {
                    "format": "jpeg",
                    "width": 1200,
                    "height": 900,
                    "size_bytes": 184233,
                    "filename": "1718000000000-1a2b3c4d-7f3e.jpg",
                    "original_filename": "monstera.jpg",
                    "original_width": 4000,
                    "original_height": 3000,
                    "original_size_bytes": 3145728
                }
            }
        }
    )


class UploadResponse(BaseModel):
    success: Literal[True] = True
    data: List[UploadResult]


class ValidationResultSchema(BaseModel):
    passed: bool
    failure: Optional[str] = Field(default=None, description="Error code of the failed check")
    message: Optional[str] = None
    detected_type: Optional[str] = Field(default=None, description="MIME type sniffed from the bytes")
    width: Optional[int] = None
    height: Optional[int] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ValidationResponse(BaseModel):
    success: Literal[True] = True
    data: ValidationResultSchema
