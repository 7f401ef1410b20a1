from .models import ConversionFailure, ConversionResult, FailureCode, TargetFormat, UploadedImage
from .service import ConversionService, get_conversion_service

__all__ = [
    "ConversionService",
    "ConversionResult",
    "ConversionFailure",
    "FailureCode",
    "TargetFormat",
    "UploadedImage",
    "get_conversion_service",
]
