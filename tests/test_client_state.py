"""Unit tests for the immutable upload state transitions."""

from dataclasses import FrozenInstanceError

import pytest

from converter.client import state as s
from converter.client.models import ClientFile, ClientResult, FailedFile

PNG = ClientFile("a.png", b"a", "image/png")
JPG = ClientFile("b.jpg", b"b", "image/jpeg")
TXT = ClientFile("c.txt", b"c", "text/plain")
RESULT = ClientResult("a.webp", "YQ==", "image/webp", 10, 5)


class TestUploadState:
    """Tests for UploadState transitions."""

    def test_state_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            s.UploadState().uploading = True

    def test_add_files_returns_new_state(self):
        before = s.UploadState()

        after = s.add_files(before, [PNG])

        assert before.pending == ()
        assert after.pending == (PNG,)

    def test_add_files_keeps_valid_and_reports_rejection(self):
        state = s.add_files(s.UploadState(), [PNG, TXT, JPG])

        assert state.pending == (PNG, JPG)
        assert state.error == "c.txt is not an image file"

    def test_add_files_keeps_every_rejection(self):
        too_big = ClientFile("huge.png", b"x" * (10 * 1024 * 1024 + 1), "image/png")

        state = s.add_files(s.UploadState(), [TXT, PNG, too_big])

        assert state.pending == (PNG,)
        assert state.rejections == ("c.txt is not an image file", "huge.png is too large (max 10MB)")
        assert state.error == "c.txt is not an image file\nhuge.png is too large (max 10MB)"

    def test_begin_submit_clears_rejections(self):
        state = s.begin_submit(s.add_files(s.UploadState(), [TXT, PNG]))

        assert state.rejections == ()
        assert state.error is None

    def test_add_files_appends_and_clears_error(self):
        state = s.add_files(s.UploadState(), [TXT])
        state = s.add_files(state, [PNG])

        assert state.pending == (PNG,)
        assert state.error is None

    def test_remove_file(self):
        state = s.add_files(s.UploadState(), [PNG, JPG])

        assert s.remove_file(state, 0).pending == (JPG,)
        assert s.remove_file(state, 5) is state

    def test_select_format(self):
        assert s.select_format(s.UploadState(), "PNG").target_format == "png"
        with pytest.raises(ValueError):
            s.select_format(s.UploadState(), "bmp")

    def test_begin_submit_requires_pending_files(self):
        empty = s.UploadState()

        assert s.begin_submit(empty) is empty

    def test_begin_submit_blocks_second_submission(self):
        running = s.begin_submit(s.add_files(s.UploadState(), [PNG]))

        assert running.uploading
        assert not running.can_submit
        assert s.begin_submit(running) is running

    def test_submit_succeeded_starts_fresh_run(self):
        running = s.begin_submit(s.add_files(s.UploadState(), [PNG]))

        done = s.submit_succeeded(running, [RESULT])

        assert done.results == (RESULT,)
        assert done.pending == ()
        assert not done.uploading
        assert done.error is None

    def test_submit_succeeded_with_failures_sets_error(self):
        running = s.begin_submit(s.add_files(s.UploadState(), [PNG, JPG]))

        done = s.submit_succeeded(running, [RESULT], [FailedFile("b.jpg", "decode_failed", "bad")])

        assert done.failed[0].name == "b.jpg"
        assert done.error == "b.jpg: bad"

    def test_submit_failed_uses_server_text_or_fallback(self):
        running = s.begin_submit(s.add_files(s.UploadState(), [PNG]))

        assert s.submit_failed(running, "No files provided").error == "No files provided"
        failed = s.submit_failed(running)
        assert failed.error == s.GENERIC_SUBMIT_ERROR
        assert not failed.uploading
        assert failed.pending == (PNG,)

    def test_reset_keeps_only_target_format(self):
        state = s.submit_succeeded(
            s.begin_submit(s.add_files(s.select_format(s.UploadState(), "avif"), [PNG])),
            [RESULT],
        )

        assert s.reset(state) == s.UploadState(target_format="avif")
