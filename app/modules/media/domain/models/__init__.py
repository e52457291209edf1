from .upload import ImageFormat, ProcessedImage, UploadCandidate, ValidationResult

__all__ = ["ImageFormat", "ProcessedImage", "UploadCandidate", "ValidationResult"]
