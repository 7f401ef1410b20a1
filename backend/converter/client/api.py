"""HTTP client for the conversion endpoint."""
import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from converter.client.models import ClientFile, ClientResult, FailedFile
from converter.config import CLIENT_TIMEOUT_SECONDS, CONVERTER_API_URL

logger = logging.getLogger("converter.client")

GENERIC_ERROR = "Error converting files"


class ConversionRequestError(Exception):
    """The conversion request failed; message is the server's error text when it sent one."""

    def __init__(
        self,
        message: str = GENERIC_ERROR,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        failed: Optional[list[FailedFile]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.failed = failed or []


@dataclass
class ConversionResponse:
    message: str
    results: list[ClientResult] = field(default_factory=list)
    failed: list[FailedFile] = field(default_factory=list)


def _parse_failed(items) -> list[FailedFile]:
    return [
        FailedFile(name=i.get("name", ""), code=i.get("code", ""), error=i.get("error", ""))
        for i in items or []
    ]


class ConverterClient:
    """Submits files to POST /api/upload."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or CONVERTER_API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def health(self) -> dict:
        response = self.session.get(f"{self.base_url}/api/health", timeout=10)
        response.raise_for_status()
        return response.json()

    def formats(self) -> list[str]:
        response = self.session.get(f"{self.base_url}/api/formats", timeout=10)
        response.raise_for_status()
        return response.json()["output_image"]

    def convert(self, files: list[ClientFile], target_format: str) -> ConversionResponse:
        """Upload files for conversion. Raises ConversionRequestError on any failed request."""
        multipart = [("files", (f.name, f.data, f.content_type)) for f in files]
        try:
            response = self.session.post(
                f"{self.base_url}/api/upload",
                files=multipart,
                data={"targetFormat": target_format},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Upload to %s failed: %s", self.base_url, e)
            raise ConversionRequestError(GENERIC_ERROR) from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if response.status_code >= 400:
            raise ConversionRequestError(
                body.get("error") or GENERIC_ERROR,
                code=body.get("code"),
                status_code=response.status_code,
                failed=_parse_failed(body.get("failed")),
            )
        try:
            results = [ClientResult.from_response(item) for item in body["files"]]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Unexpected response from %s: %s", self.base_url, e)
            raise ConversionRequestError(GENERIC_ERROR, status_code=response.status_code) from e
        return ConversionResponse(
            message=body.get("message", ""),
            results=results,
            failed=_parse_failed(body.get("failed")),
        )
