"""Tests for the write slot and the write debounce."""
import os
import time

import pytest

from benday.models.errors import CanvasDecodeError, ErrorKind, WriteTooSoon
from benday.services.write_guard import WriteGuard, ensure_settled


def test_reading_when_free():
    guard = WriteGuard()
    with guard.reading() as acquired:
        assert acquired
        assert guard.busy
    assert not guard.busy


def test_reading_skips_during_write():
    guard = WriteGuard()
    with guard.writing():
        with guard.reading() as acquired:
            assert not acquired
        assert guard.busy
    assert not guard.busy


def test_fresh_file_is_too_soon(tmp_path):
    path = tmp_path / "art.0x2.by.png"
    path.write_bytes(b"x")
    with pytest.raises(WriteTooSoon) as info:
        ensure_settled(path, 60)
    assert info.value.kind is ErrorKind.TOO_SOON
    assert info.value.kind.silent


def test_settled_file_passes(tmp_path):
    path = tmp_path / "art.0x2.by.png"
    path.write_bytes(b"x")
    past = time.time() - 10
    os.utime(path, (past, past))
    ensure_settled(path, 1.0)


def test_missing_file(tmp_path):
    with pytest.raises(CanvasDecodeError):
        ensure_settled(tmp_path / "gone.0x2.by.png", 1.0)
