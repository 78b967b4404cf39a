"""Shared fixtures: temporary canvases and a service without the write debounce."""
from __future__ import annotations

import struct
import zlib
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from benday.services.canvas_service import CanvasService


def read_pixels(path: Path) -> np.ndarray:
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def write_pixels(path: Path, pixels: np.ndarray) -> None:
    Image.fromarray(pixels.astype(np.uint8)).save(path, format="PNG")


def _png_chunk(chunk_type: bytes, body: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + body) & 0xFFFFFFFF
    return struct.pack(">I", len(body)) + chunk_type + body + struct.pack(">I", crc)


def break_png_chunks(path: Path) -> None:
    """Splits every IDAT chunk in two and puts a chunk with an invalid type between the halves."""
    data = path.read_bytes()
    out, pos = [data[:8]], 8
    while pos < len(data):
        (length,) = struct.unpack(">I", data[pos:pos + 4])
        chunk_type = data[pos + 4:pos + 8]
        end = pos + 12 + length
        if chunk_type == b"IDAT":
            body = data[pos + 8:pos + 8 + length]
            half = len(body) // 2
            out.append(_png_chunk(b"IDAT", body[:half]))
            out.append(struct.pack(">I", 0) + b"\x00\x01!!" + b"\x00" * 4)
            out.append(_png_chunk(b"IDAT", body[half:]))
        else:
            out.append(data[pos:end])
        pos = end
    path.write_bytes(b"".join(out))


def paint(path: Path, points, color) -> None:
    pixels = read_pixels(path)
    for x, y in points:
        pixels[y, x] = color
    write_pixels(path, pixels)


@pytest.fixture
def service() -> CanvasService:
    return CanvasService(debounce_seconds=0)


@pytest.fixture
def make_canvas(tmp_path: Path, service: CanvasService) -> Callable[..., Path]:
    def _make(chars_x: int = 3, chars_y: int = 2, padding_x: int = 0, padding_y: int = 2, name: str = "art") -> Path:
        return service.create(tmp_path / name, chars_x, chars_y, padding_x, padding_y)

    return _make
