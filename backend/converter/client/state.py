"""Upload client state.

Each user action (drop/select, remove, format change, submit, reset) is a
function taking the current UploadState and returning a new one; nothing is
mutated in place.
"""
from dataclasses import dataclass, replace
from typing import Optional

from converter.client.models import ClientFile, ClientResult, FailedFile
from converter.client.validation import validate_files

SUPPORTED_FORMATS = ("webp", "avif", "jpg", "png")
GENERIC_SUBMIT_ERROR = "Error converting files"


@dataclass(frozen=True)
class UploadState:
    target_format: str = "webp"
    pending: tuple[ClientFile, ...] = ()
    results: tuple[ClientResult, ...] = ()
    failed: tuple[FailedFile, ...] = ()
    error: Optional[str] = None
    rejections: tuple[str, ...] = ()
    uploading: bool = False

    @property
    def can_submit(self) -> bool:
        return not self.uploading and bool(self.pending)


def add_files(state: UploadState, candidates: list[ClientFile]) -> UploadState:
    """Validate dropped/selected files; accepted ones join the pending set.

    Every rejected file keeps its own message in `rejections`; `error` joins them
    for display.
    """
    report = validate_files(candidates)
    return replace(
        state,
        pending=state.pending + tuple(report.accepted),
        rejections=tuple(report.errors),
        error="\n".join(report.errors) if report.errors else None,
    )


def remove_file(state: UploadState, index: int) -> UploadState:
    if not 0 <= index < len(state.pending):
        return state
    return replace(state, pending=state.pending[:index] + state.pending[index + 1:])


def select_format(state: UploadState, target_format: str) -> UploadState:
    fmt = target_format.strip().lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported target format: {target_format}")
    return replace(state, target_format=fmt)


def begin_submit(state: UploadState) -> UploadState:
    """Mark a submission in flight. Unchanged when one is running or nothing is pending."""
    if not state.can_submit:
        return state
    return replace(state, uploading=True, error=None, rejections=())


def submit_succeeded(
    state: UploadState,
    results: list[ClientResult],
    failed: Optional[list[FailedFile]] = None,
) -> UploadState:
    """Start a fresh run: results replace the previous ones and the pending set is cleared."""
    failed = tuple(failed or ())
    error = None
    if failed:
        error = "; ".join(f"{f.name}: {f.error}" for f in failed)
    return replace(
        state,
        pending=(),
        results=tuple(results),
        failed=failed,
        error=error,
        uploading=False,
    )


def submit_failed(state: UploadState, message: Optional[str] = None) -> UploadState:
    return replace(state, uploading=False, error=message or GENERIC_SUBMIT_ERROR)


def reset(state: UploadState) -> UploadState:
    return UploadState(target_format=state.target_format)
