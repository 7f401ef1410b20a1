"""Image conversion service with parallel execution and per-file error isolation."""
import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional

from converter.config import MAX_IMAGE_SIZE_BYTES, MAX_WORKERS
from converter.conversion import codec
from converter.conversion.models import (
    ConversionFailure,
    ConversionResult,
    FailureCode,
    FileOutcome,
    TargetFormat,
    UploadedImage,
)

logger = logging.getLogger("converter.service")


class ConversionService:
    """Converts uploaded images; one failed file never fails the others."""

    def __init__(self, max_workers: int = MAX_WORKERS, max_file_bytes: int = MAX_IMAGE_SIZE_BYTES):
        self.max_file_bytes = max_file_bytes
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="convert")
        logger.info("ConversionService initialized with max_workers=%s", max_workers)

    def convert(self, upload: UploadedImage, target: TargetFormat) -> FileOutcome:
        """Convert a single file. Codec errors are returned as a ConversionFailure."""
        if upload.size > self.max_file_bytes:
            logger.warning("Skipping %s: %s bytes exceeds limit", upload.filename, upload.size)
            return ConversionFailure(
                filename=upload.filename,
                code=FailureCode.FILE_TOO_LARGE,
                error=f"{upload.filename} is too large (max {self.max_file_bytes} bytes)",
            )
        started = time.perf_counter()
        try:
            data = codec.encode(upload.data, target)
        except codec.DecodeError as e:
            logger.warning("Could not decode %s: %s", upload.filename, e)
            return ConversionFailure(upload.filename, FailureCode.DECODE_FAILED, str(e))
        except Exception as e:
            logger.exception("Image conversion failed for %s: %s", upload.filename, e)
            return ConversionFailure(upload.filename, FailureCode.CONVERSION_FAILED, str(e) or "Conversion failed")
        result = ConversionResult(
            name=codec.output_name(upload.filename, target),
            data=data,
            mime_type=target.mime_type,
            original_size=upload.size,
            converted_size=len(data),
        )
        logger.info(
            "Converted %s -> %s (%s -> %s bytes, %.2fs)",
            upload.filename, result.name, result.original_size, result.converted_size,
            time.perf_counter() - started,
        )
        return result

    def convert_many(
        self,
        uploads: list[UploadedImage],
        target: TargetFormat,
        timeout: Optional[float] = None,
    ) -> list[FileOutcome]:
        """Convert files in parallel. Outcomes keep input order; files still running after timeout fail."""
        futures: list[Future] = [self._executor.submit(self.convert, upload, target) for upload in uploads]
        _, not_done = wait(futures, timeout=timeout)
        if not_done:
            logger.warning("%s of %s conversions did not finish within %ss", len(not_done), len(futures), timeout)
        outcomes: list[FileOutcome] = []
        for upload, future in zip(uploads, futures):
            if future in not_done:
                future.cancel()
                outcomes.append(ConversionFailure(
                    upload.filename, FailureCode.TIMEOUT, f"Conversion of {upload.filename} timed out",
                ))
                continue
            try:
                outcomes.append(future.result())
            except Exception as e:
                logger.exception("Task failed for %s: %s", upload.filename, e)
                outcomes.append(ConversionFailure(upload.filename, FailureCode.CONVERSION_FAILED, str(e)))
        return outcomes

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


# Singleton
_conversion_service: Optional[ConversionService] = None


def get_conversion_service() -> ConversionService:
    global _conversion_service
    if _conversion_service is None:
        _conversion_service = ConversionService()
    return _conversion_service
