"""Checks applied to every candidate file before it joins the pending set."""
import logging
from dataclasses import dataclass, field
from typing import Optional

from converter.client.models import ClientFile

logger = logging.getLogger("converter.client")

ACCEPTED_MIME_PREFIX = "image/"
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


@dataclass
class ValidationReport:
    accepted: list[ClientFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def check_file(candidate: ClientFile) -> Optional[str]:
    """Return the rejection message for a file, or None when it may be uploaded."""
    if not (candidate.content_type or "").startswith(ACCEPTED_MIME_PREFIX):
        return f"{candidate.name} is not an image file"
    if candidate.size > MAX_FILE_SIZE_BYTES:
        return f"{candidate.name} is too large (max 10MB)"
    return None


def validate_files(candidates: list[ClientFile]) -> ValidationReport:
    """Split candidates into accepted files and one message per rejected file."""
    report = ValidationReport()
    for candidate in candidates:
        error = check_file(candidate)
        if error:
            logger.debug("Rejected %s: %s", candidate.name, error)
            report.errors.append(error)
        else:
            report.accepted.append(candidate)
    return report
