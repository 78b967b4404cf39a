"""Tests for the watch session: polling, write policy and notifications."""
import numpy as np
import pytest

from benday.controllers.canvas_session import CanvasSession
from benday.models.errors import FileExistsRefusal
from benday.services.braille_codec import EMPTY_GLYPH
from benday.services.canvas_service import CanvasService

from tests.conftest import break_png_chunks, write_pixels


@pytest.fixture
def session(service, make_canvas):
    return CanvasSession(make_canvas(3, 2, 0, 2), service=service)


def test_refresh_decodes_and_ticks(session):
    assert session.refresh()
    assert session.grid == [[EMPTY_GLYPH] * 3] * 2
    assert session.view_error is None
    assert session.watch_ticker is True
    session.refresh()
    assert session.watch_ticker is False


def test_refresh_skipped_while_writing(session):
    with session.guard.writing():
        assert session.refresh() is False
    assert session.grid == []


def test_missing_file_closes_view(service, tmp_path):
    session = CanvasSession(tmp_path / "gone.0x2.by.png", service=service)
    session.refresh()
    assert session.closed
    assert session.fatal_message.startswith(f"Filename: {session.path}\n")
    assert session.toggle_padding() is False


def test_bad_geometry_keeps_watching(service, tmp_path):
    path = tmp_path / "odd.0x2.by.png"
    write_pixels(path, np.zeros((7, 6, 4), dtype=np.uint8))
    session = CanvasSession(path, service=service)
    session.refresh()
    assert session.view_error is not None
    assert not session.closed
    assert session.measurement() is None


def test_toggle_padding_notifies(session):
    session.refresh()
    assert session.unpadded is False
    assert session.toggle_padding()
    assert session.unpadded is True
    assert session.notification == "finished toggling the padding!"


def test_too_soon_is_silent(make_canvas):
    session = CanvasSession(make_canvas(3, 2, 0, 2), service=CanvasService(debounce_seconds=60))
    assert session.clean() is False
    assert not session.closed
    assert session.notification == ""


def test_resize_without_change(session):
    assert session.resize(0, 0) is False
    assert session.notification == ""


def test_resize_notifies(session):
    assert session.resize(1, 0)
    assert session.notification == "finished resizing the canvas!"
    assert len(session.grid[0]) == 4


@pytest.mark.parametrize(
    "remove_comments, message",
    [(False, "finished cleaning the canvas!"), (True, "finished CLEANING the canvas!")],
)
def test_clean_messages(session, remove_comments, message):
    assert session.clean(remove_comments)
    assert session.notification == message


def test_notification_expires(session):
    session.notification_seconds = 0
    session.toggle_padding()
    assert session.notification == ""


def test_export(session, tmp_path):
    session.refresh()
    target = tmp_path / "out.txt"
    session.export(target)
    assert target.read_text(encoding="utf-8") == "⠀⠀⠀\n⠀⠀⠀"
    assert session.notification == "finished exporting to file!"
    with pytest.raises(FileExistsRefusal):
        session.export(target)


def test_broken_png_closes_view_instead_of_raising(session):
    noise = np.random.default_rng(3).integers(0, 256, size=(12, 6, 4), dtype=np.uint8)
    write_pixels(session.path, noise)
    break_png_chunks(session.path)
    assert session.refresh()
    assert session.closed
    assert "Error reading the image" in session.fatal_message


def test_refused_toggle_keeps_watching(service, make_canvas):
    session = CanvasSession(make_canvas(4, 1, 1, 1), service=service)
    session.refresh()
    assert session.toggle_padding() is False
    assert not session.closed
    assert "read back with a different layout" in session.notification
    assert session.unpadded is False
    assert len(session.grid[0]) == 4
