from .api import ConversionRequestError, ConversionResponse, ConverterClient
from .archive import bundle
from .downloads import DownloadError, decode_result, save_bundle, save_result
from .formatting import describe_savings, format_bytes
from .models import ClientFile, ClientResult, FailedFile
from .state import UploadState
from .validation import ValidationReport, validate_files

__all__ = [
    "ClientFile",
    "ClientResult",
    "ConversionRequestError",
    "ConversionResponse",
    "ConverterClient",
    "DownloadError",
    "FailedFile",
    "UploadState",
    "ValidationReport",
    "bundle",
    "decode_result",
    "describe_savings",
    "format_bytes",
    "save_bundle",
    "save_result",
    "validate_files",
]
