"""API routes for upload and conversion."""
import asyncio
import base64
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from converter.config import (
    ACCEPTED_MIME_PREFIX,
    MAX_IMAGE_SIZE_BYTES,
    REQUEST_TIMEOUT_SECONDS,
)
from converter.conversion.models import (
    ConversionFailure,
    ConversionResult,
    TargetFormat,
    UploadedImage,
)
from converter.conversion.service import get_conversion_service
from converter.errors import ConversionFailedError, ConverterError, NoFilesError

logger = logging.getLogger("converter.api")
router = APIRouter(prefix="/api", tags=["converter"])


def _result_to_dict(result: ConversionResult) -> dict:
    return {
        "name": result.name,
        "buffer": base64.b64encode(result.data).decode("ascii"),
        "type": result.mime_type,
        "metadata": {
            "original": {"size": result.original_size},
            "converted": {"size": result.converted_size},
        },
    }


def _failure_to_dict(failure: ConversionFailure) -> dict:
    return {
        "name": failure.filename,
        "code": failure.code.value,
        "error": failure.error,
    }


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/formats")
def get_formats():
    return {
        "output_image": [f.value for f in TargetFormat],
        "mime_types": {f.value: f.mime_type for f in TargetFormat},
    }


@router.get("/limits")
def get_limits():
    """Return upload limits for the client."""
    return {
        "max_image_size_mb": MAX_IMAGE_SIZE_BYTES // (1024 * 1024),
        "max_image_size_bytes": MAX_IMAGE_SIZE_BYTES,
        "accepted_mime_prefix": ACCEPTED_MIME_PREFIX,
    }


@router.post("/upload")
async def upload_files(
    files: Optional[list[UploadFile]] = File(None),
    target_format: Optional[str] = Form(None, alias="targetFormat"),
):
    """Convert every uploaded file to targetFormat. Files that fail are listed under "failed"."""
    received = [f for f in files or [] if f.filename]
    if not received:
        raise NoFilesError()
    target = TargetFormat.parse(target_format)

    try:
        uploads: list[UploadedImage] = []
        for file in received:
            data = await file.read()
            uploads.append(UploadedImage(
                filename=file.filename,
                data=data,
                content_type=file.content_type or "application/octet-stream",
            ))
        logger.info("Converting %s file(s) to %s", len(uploads), target.value)

        svc = get_conversion_service()
        outcomes = await asyncio.to_thread(svc.convert_many, uploads, target, REQUEST_TIMEOUT_SECONDS)
    except ConverterError:
        raise
    except Exception as e:
        logger.exception("Error processing files: %s", e)
        raise ConverterError() from e
    finally:
        for file in received:
            await file.close()

    converted = [o for o in outcomes if isinstance(o, ConversionResult)]
    failed = [_failure_to_dict(o) for o in outcomes if isinstance(o, ConversionFailure)]
    if not converted:
        raise ConversionFailedError(details={"failed": failed})
    if failed:
        logger.warning("%s of %s file(s) failed to convert", len(failed), len(outcomes))
    return {
        "message": "Files converted successfully",
        "files": [_result_to_dict(r) for r in converted],
        "failed": failed,
    }
