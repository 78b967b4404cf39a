"""Tests for file name parsing and canvas geometry."""
import pytest

from benday.models.canvas_model import PaddingSpec
from benday.models.errors import (
    CanvasDecodeError,
    EmptyCanvasError,
    ErrorKind,
    FileNameError,
    GeometryError,
)
from benday.services.measure_service import (
    INVALID_FILE_NAME,
    INVALID_PADDING,
    canvas_file_name,
    measure,
    measure_file,
    parse_padding_spec,
    read_image_size,
)


def test_canvas_file_name():
    assert canvas_file_name("art", 0, 2) == "art.0x2.by.png"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("art.3x1.by.png", PaddingSpec(3, 1)),
        ("my.art.10x0.by.png", PaddingSpec(10, 0)),
        ("some/dir.with.dots/art.0x2.by.png", PaddingSpec(0, 2)),
    ],
)
def test_parse_padding_spec(name, expected):
    assert parse_padding_spec(name) == expected


@pytest.mark.parametrize(
    "name",
    ["art.by.png", "art.0x2.by.jpg", "art.0x2.xy.png", "art.0x2x3.by.png", "art.02.by.png", "art.png"],
)
def test_parse_rejects_bad_names(name):
    with pytest.raises(FileNameError) as info:
        parse_padding_spec(name)
    assert str(info.value) == INVALID_FILE_NAME
    assert info.value.kind is ErrorKind.FILE_NAME


@pytest.mark.parametrize("name", ["art.-1x2.by.png", "art.+1x2.by.png", "art.ax2.by.png", "art.1x.by.png"])
def test_parse_rejects_bad_padding(name):
    with pytest.raises(FileNameError) as info:
        parse_padding_spec(name)
    assert str(info.value) == INVALID_PADDING


def test_padded_canvas():
    m = measure(20, 24, 0, 2)
    assert (m.chars_x, m.chars_y) == (10, 4)
    assert (m.braille_w, m.braille_h) == (2, 6)
    assert m.padded and not m.unpadded
    assert m.guard == 0


def test_padding_decides_cell_step():
    m = measure(20, 24, 0, 0)
    assert (m.chars_x, m.chars_y) == (10, 6)
    assert (m.braille_w, m.braille_h) == (2, 4)
    assert m.padded


def test_unpadded_canvas():
    m = measure(7, 13, 0, 2)
    assert m.unpadded
    assert (m.chars_x, m.chars_y) == (3, 3)
    assert (m.braille_w, m.braille_h) == (2, 4)
    assert m.guard == 1


def test_padded_wins_when_both_fit():
    m = measure(3, 5, 1, 1)
    assert m.padded
    assert (m.chars_x, m.chars_y) == (1, 1)


def test_height_error_after_unpadded_fallback():
    with pytest.raises(GeometryError) as info:
        measure(21, 26, 0, 2)
    err = info.value
    assert (err.measure, err.divisor, err.on_x, err.unpadded) == (26, 4, False, True)
    assert str(err) == "Invalid image dimension. Expected height - 1 to be divisible by 4, but is instead 26 px."
    assert err.kind is ErrorKind.GEOMETRY


def test_width_error_after_unpadded_fallback():
    with pytest.raises(GeometryError) as info:
        measure(20, 25, 0, 2)
    assert str(info.value) == "Invalid image dimension. Expected width - 1 to be divisible by 2, but is instead 20 px."


def test_zero_cells_rejected():
    with pytest.raises(EmptyCanvasError) as info:
        measure(1, 1, 0, 0)
    assert info.value.kind is ErrorKind.GEOMETRY


def test_measure_file(make_canvas):
    path = make_canvas(3, 2, 0, 2)
    assert read_image_size(path) == (6, 12)
    m = measure_file(path)
    assert (m.chars_x, m.chars_y, m.unpadded) == (3, 2, False)


def test_read_image_size_missing(tmp_path):
    with pytest.raises(CanvasDecodeError, match="File does not exist."):
        read_image_size(tmp_path / "nothing.0x2.by.png")


def test_read_image_size_not_an_image(tmp_path):
    path = tmp_path / "junk.0x2.by.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(CanvasDecodeError, match="Error reading the image"):
        read_image_size(path)
