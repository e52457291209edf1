# 📄 File: app/modules/media/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules for what counts as an acceptable photo and how photos get resized.
# 🧪 Purpose (Technical Summary):
# Media domain layer: value objects plus the pure validator and image processor services.
# 🔗 Dependencies:
# Pillow
# 🔄 Connected Modules / Calls From:
# Media application and presentation layers

from .models import ImageFormat, ProcessedImage, UploadCandidate, ValidationResult
