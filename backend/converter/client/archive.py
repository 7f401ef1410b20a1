"""Bundle converted files into one zip archive."""
import io
import logging
import zipfile
from pathlib import PurePath

logger = logging.getLogger("converter.client")


def numbered_name(name: str, n: int) -> str:
    """cat.webp, 1 -> "cat (1).webp"."""
    path = PurePath(name)
    return f"{path.stem} ({n}){path.suffix}"


def dedupe_names(names: list[str]) -> list[str]:
    """Keep the first occurrence of a name; later clashes become "name (1).ext", "name (2).ext"..."""
    taken: set[str] = set()
    unique: list[str] = []
    for name in names:
        candidate, n = name, 0
        while candidate in taken:
            n += 1
            candidate = numbered_name(name, n)
        taken.add(candidate)
        unique.append(candidate)
    return unique


def bundle(items: list[tuple[str, bytes]]) -> bytes:
    """Zip named byte buffers in memory; one entry per item, clashing names numbered."""
    names = dedupe_names([name for name, _ in items])
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, (_, data) in zip(names, items):
            zf.writestr(name, data)
    logger.info("Created zip with %s entries (%s bytes)", len(items), buf.tell())
    return buf.getvalue()
