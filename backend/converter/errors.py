"""Request-level errors rendered by the API as {"error": ..., "code": ...}."""
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ConverterError(Exception):
    """Base exception for errors returned to the caller."""

    code: str = "internal_error"
    message: str = "Error processing files"
    status_code: int = 500
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass
class NoFilesError(ConverterError):
    code: str = "no_files"
    message: str = "No files provided"
    status_code: int = 400


@dataclass
class UnsupportedFormatError(ConverterError):
    code: str = "unsupported_format"
    message: str = "Unsupported target format"
    status_code: int = 400

    @classmethod
    def for_value(cls, value: Optional[str]) -> "UnsupportedFormatError":
        if not value:
            return cls(message="Target format is required")
        return cls(message=f"Unsupported target format: {value}")


@dataclass
class ConversionFailedError(ConverterError):
    """Every file in the request failed; details carry the per-file failures."""

    code: str = "conversion_failed"
    message: str = "Error processing files"
    status_code: int = 500
