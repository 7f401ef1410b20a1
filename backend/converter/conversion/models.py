"""Conversion request/response models."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from converter.errors import UnsupportedFormatError


class TargetFormat(str, Enum):
    WEBP = "webp"
    AVIF = "avif"
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"

    @property
    def encoder(self) -> str:
        """Pillow format name used to save."""
        return _ENCODERS[self]

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> "TargetFormat":
        """Resolve a form value (case-insensitive); raise UnsupportedFormatError otherwise."""
        normalized = (value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedFormatError.for_value((value or "").strip()) from None


_ENCODERS = {
    TargetFormat.WEBP: "WEBP",
    TargetFormat.AVIF: "AVIF",
    TargetFormat.JPG: "JPEG",
    TargetFormat.JPEG: "JPEG",
    TargetFormat.PNG: "PNG",
}

_MIME_TYPES = {
    TargetFormat.WEBP: "image/webp",
    TargetFormat.AVIF: "image/avif",
    TargetFormat.JPG: "image/jpeg",
    TargetFormat.JPEG: "image/jpeg",
    TargetFormat.PNG: "image/png",
}


class FailureCode(str, Enum):
    DECODE_FAILED = "decode_failed"
    FILE_TOO_LARGE = "file_too_large"
    TIMEOUT = "timeout"
    CONVERSION_FAILED = "conversion_failed"


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ConversionResult:
    name: str
    data: bytes
    mime_type: str
    original_size: int
    converted_size: int


@dataclass(frozen=True)
class ConversionFailure:
    filename: str
    code: FailureCode
    error: str


FileOutcome = Union[ConversionResult, ConversionFailure]
