"""8-bit palettised BMP images: loading, saving and simple pixel filters."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Sequence, Union

HEADER_SIZE = 54
PALETTE_SIZE = 1024
INFO_SIZE = 40
COLOR_DEPTH = 8

_PathType = Union[str, "PathLike[str]"]


class Bmp8Error(ValueError):
    """Raised when a file is not a readable 8-bit BMP image."""


def _grayscale_palette() -> bytes:
    return bytes(value for level in range(256) for value in (level, level, level, 0))


def _clamp(value: float) -> int:
    return int(min(255, max(0, value)))


@dataclass
class Bmp8Image:
    """An 8-bit image: one palette index per pixel, rows stored as in the file."""

    width: int
    height: int
    pixels: bytearray = field(default_factory=bytearray)
    palette: bytes = field(default_factory=_grayscale_palette)
    color_depth: int = COLOR_DEPTH

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        if not self.pixels:
            self.pixels = bytearray(self.data_size)
        self.pixels = bytearray(self.pixels)
        if len(self.pixels) != self.data_size:
            raise ValueError(
                f"expected {self.data_size} pixels, got {len(self.pixels)}"
            )
        self.palette = bytes(self.palette)
        if len(self.palette) != PALETTE_SIZE:
            raise ValueError(f"palette must be {PALETTE_SIZE} bytes long")

    @property
    def data_size(self) -> int:
        """Number of pixel bytes in the image."""
        return self.width * self.height

    @classmethod
    def load(cls, path: _PathType) -> "Bmp8Image":
        """Read an 8-bit BMP file."""
        with open(path, "rb") as stream:
            header = stream.read(HEADER_SIZE)
            if len(header) < HEADER_SIZE:
                raise Bmp8Error("file is too short to hold a BMP header")
            if header[:2] != b"BM":
                raise Bmp8Error("file is not in BMP format")
            width, height = struct.unpack_from("<II", header, 18)
            (color_depth,) = struct.unpack_from("<H", header, 28)
            if color_depth != COLOR_DEPTH:
                raise Bmp8Error("image is not 8 bits per pixel")
            palette = stream.read(PALETTE_SIZE)
            if len(palette) < PALETTE_SIZE:
                raise Bmp8Error("file is too short to hold a palette")
            size = width * height
            pixels = stream.read(size)
            if len(pixels) < size:
                raise Bmp8Error("file is too short to hold the pixel data")
        return cls(
            width=width,
            height=height,
            pixels=bytearray(pixels),
            palette=palette,
            color_depth=color_depth,
        )

    def save(self, path: _PathType) -> None:
        """Write the image as an 8-bit BMP file."""
        header = bytearray(HEADER_SIZE)
        header[0:2] = b"BM"
        offset = HEADER_SIZE + PALETTE_SIZE
        struct.pack_into("<I", header, 2, offset + self.data_size)
        struct.pack_into("<I", header, 10, offset)
        struct.pack_into("<I", header, 14, INFO_SIZE)
        struct.pack_into("<II", header, 18, self.width, self.height)
        struct.pack_into("<HH", header, 26, 1, self.color_depth)
        struct.pack_into("<I", header, 34, self.data_size)
        Path(path).write_bytes(bytes(header) + self.palette + bytes(self.pixels))

    def info(self) -> str:
        """Describe the image dimensions and sizes."""
        return "\n".join(
            [
                "Image Info:",
                f"Width: {self.width}",
                f"Height: {self.height}",
                f"Color Depth: {self.color_depth}",
                f"Data Size: {self.data_size}",
            ]
        )

    def negative(self) -> None:
        """Invert every pixel value."""
        self.pixels = bytearray(255 - value for value in self.pixels)

    def brightness(self, value: int) -> None:
        """Add value to every pixel, clamping to 0..255."""
        self.pixels = bytearray(_clamp(pixel + value) for pixel in self.pixels)

    def threshold(self, threshold: int) -> None:
        """Set pixels at or above threshold to 255 and the rest to 0."""
        self.pixels = bytearray(255 if pixel >= threshold else 0 for pixel in self.pixels)

    def apply_filter(self, kernel: Sequence[Sequence[float]]) -> None:
        """Convolve with a square, odd-sized kernel; border pixels are left as they are."""
        size = len(kernel)
        if size % 2 == 0:
            raise ValueError("kernel size must be odd")
        if any(len(row) != size for row in kernel):
            raise ValueError("kernel must be square")
        n = size // 2
        source = bytes(self.pixels)
        width = self.width
        for y in range(n, self.height - n):
            for x in range(n, width - n):
                total = 0.0
                for i, kernel_row in enumerate(kernel, start=-n):
                    row_start = (y + i) * width + x - n
                    window = source[row_start:row_start + size]
                    total += sum(p * k for p, k in zip(window, kernel_row))
                self.pixels[y * width + x] = _clamp(total)