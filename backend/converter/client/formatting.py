"""Human-readable sizes and savings for conversion results."""
from decimal import ROUND_HALF_UP, Decimal

_UNITS = ("Bytes", "KB", "MB", "GB")


def _round(value: Decimal, places: str) -> Decimal:
    # Ties go up (1.125 -> 1.13), not to the nearest even digit
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_bytes(size: int) -> str:
    """Binary (1024) scaling, at most two decimals: 1536 -> "1.5 KB", 1048576 -> "1 MB"."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = _round(Decimal(size) / Decimal(1024 ** exponent), "0.01")
    return f"{value:f}".rstrip("0").rstrip(".") + f" {_UNITS[exponent]}"


def describe_savings(original: int, converted: int) -> str:
    saved = original - converted
    if saved > 0:
        percent = _round(Decimal(saved) * 100 / Decimal(original), "0.1")
        return f"Saved {format_bytes(saved)} ({percent:f}%)"
    return f"Increased by {format_bytes(abs(saved))}"
