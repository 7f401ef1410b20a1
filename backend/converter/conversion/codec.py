"""Pillow-backed encode(bytes, target) -> bytes."""
import io
import logging
from pathlib import PurePosixPath, PureWindowsPath

from PIL import Image, UnidentifiedImageError

from converter.conversion.models import TargetFormat

logger = logging.getLogger("converter.codec")

# Modes each encoder can write without conversion
_JPEG_MODES = ("RGB", "L", "CMYK")
_DEFAULT_MODES = ("RGB", "RGBA")


class CodecError(Exception):
    """Image could be read but not encoded to the target format."""


class DecodeError(CodecError):
    """Input bytes are not a readable image."""


def output_name(filename: str, target: TargetFormat) -> str:
    """<basename up to the first dot>.<target>; directory parts from the client are dropped."""
    base = PureWindowsPath(PurePosixPath(filename or "").name).name
    stem = base.split(".", 1)[0].strip() or "image"
    return f"{stem}.{target.extension}"


def _prepare(img: Image.Image, target: TargetFormat) -> Image.Image:
    if target.encoder == "JPEG":
        if img.mode not in _JPEG_MODES:
            return img.convert("RGB")
        return img
    if img.mode in _DEFAULT_MODES:
        return img
    has_alpha = "A" in img.getbands() or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def encode(data: bytes, target: TargetFormat) -> bytes:
    """Decode image bytes and re-encode them with the target format's encoder defaults."""
    try:
        img = Image.open(io.BytesIO(data))
    except UnidentifiedImageError as e:
        raise DecodeError("File is not a recognized image") from e
    except Exception as e:
        raise DecodeError(f"Could not read image: {e}") from e

    with img:
        try:
            img.load()
        except Exception as e:
            raise DecodeError(f"Could not read image: {e}") from e
        try:
            out_img = _prepare(img, target)
            buf = io.BytesIO()
            out_img.save(buf, format=target.encoder)
        except KeyError as e:
            # Pillow raises KeyError for an encoder it was built without (e.g. AVIF)
            raise CodecError(f"{target.encoder} encoding is not available") from e
        except (OSError, ValueError) as e:
            raise CodecError(f"Could not encode {target.encoder}: {e}") from e
    out = buf.getvalue()
    logger.debug("Encoded %s bytes -> %s bytes (%s)", len(data), len(out), target.value)
    return out
