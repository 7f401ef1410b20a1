"""Client-side records: files picked for upload and results returned by the server."""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ClientFile:
    name: str
    data: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ClientResult:
    name: str
    buffer: str  # base64
    mime_type: str
    original_size: int
    converted_size: int

    @classmethod
    def from_response(cls, item: dict[str, Any]) -> "ClientResult":
        """Build from one entry of the response's "files" array."""
        metadata = item.get("metadata") or {}
        return cls(
            name=item["name"],
            buffer=item["buffer"],
            mime_type=item.get("type") or "application/octet-stream",
            original_size=int((metadata.get("original") or {}).get("size", 0)),
            converted_size=int((metadata.get("converted") or {}).get("size", 0)),
        )


@dataclass(frozen=True)
class FailedFile:
    name: str
    code: str
    error: str
