"""Turn returned base64 buffers back into files on disk."""
import base64
import binascii
import logging
import os
import tempfile
from pathlib import Path

from converter.client.archive import bundle, numbered_name
from converter.client.models import ClientResult

logger = logging.getLogger("converter.client")

DEFAULT_BUNDLE_NAME = "converted-images.zip"

# MIME type -> extensions a saved file may carry (first one is used when fixing a name)
_MIME_TO_EXTENSIONS = {
    "image/webp": (".webp",),
    "image/avif": (".avif",),
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
}


class DownloadError(Exception):
    """A result could not be decoded or written."""


def decode_result(result: ClientResult) -> bytes:
    try:
        return base64.b64decode(result.buffer, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error("Error decoding %s: %s", result.name, e)
        raise DownloadError(f"Failed to download {result.name}") from e


def download_name(result: ClientResult) -> str:
    """Result filename without directory parts, with an extension matching its MIME type."""
    name = Path(result.name).name or "image"
    extensions = _MIME_TO_EXTENSIONS.get(result.mime_type.lower())
    if not extensions:
        return name
    path = Path(name)
    if path.suffix.lower() in extensions:
        return name
    logger.warning("%s does not match its type %s, saving as %s", name, result.mime_type, extensions[0])
    return f"{path.stem or 'image'}{extensions[0]}"


def _available_path(directory: Path, filename: str) -> Path:
    """directory/filename, or the first free "name (n).ext" when that file exists."""
    dest = directory / filename
    n = 0
    while dest.exists():
        n += 1
        dest = directory / numbered_name(filename, n)
    return dest


def _save_bytes(data: bytes, directory: Path, filename: str) -> Path:
    """Write through a temporary file in the target directory; the temp file never outlives the call."""
    tmp_name = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".download-")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        dest = _available_path(directory, Path(filename).name)
        os.replace(tmp_name, dest)
    except OSError as e:
        logger.error("Could not save %s in %s: %s", filename, directory, e)
        raise DownloadError(f"Failed to save {filename}: {e}") from e
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.info("Saved %s (%s bytes)", dest, len(data))
    return dest


def save_result(result: ClientResult, directory: Path) -> Path:
    """Save one result; an existing file of the same name is never overwritten."""
    return _save_bytes(decode_result(result), Path(directory), download_name(result))


def save_bundle(results: list[ClientResult], directory: Path, filename: str = DEFAULT_BUNDLE_NAME) -> Path:
    """Write every result into one zip archive, entries named by result filename."""
    try:
        archive = bundle([(download_name(r), decode_result(r)) for r in results])
    except DownloadError as e:
        raise DownloadError(f"Failed to create zip file: {e}") from e
    return _save_bytes(archive, Path(directory), filename)
