"""24-bit BMP images: header structures, loading, saving and colour filters."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import ClassVar, List, Optional, Union

BMP_TYPE = 0x4D42
HEADER_SIZE = 14
INFO_SIZE = 40
DEFAULT_DEPTH = 24

_PathType = Union[str, "PathLike[str]"]


class Bmp24Error(ValueError):
    """Raised when a file is not a readable 24-bit BMP image."""


@dataclass(frozen=True)
class Pixel:
    """An RGB colour."""

    red: int = 0
    green: int = 0
    blue: int = 0


@dataclass
class BmpHeader:
    """The 14-byte BMP file header."""

    type: int = BMP_TYPE
    size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset: int = HEADER_SIZE + INFO_SIZE

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<HIHHI")

    def pack(self) -> bytes:
        return self._STRUCT.pack(
            self.type, self.size, self.reserved1, self.reserved2, self.offset
        )

    @classmethod
    def unpack(cls, data: bytes) -> "BmpHeader":
        if len(data) < cls._STRUCT.size:
            raise Bmp24Error("data is too short for a BMP file header")
        return cls(*cls._STRUCT.unpack_from(data))


@dataclass
class BmpInfo:
    """The 40-byte BMP information header."""

    size: int = INFO_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bits: int = DEFAULT_DEPTH
    compression: int = 0
    image_size: int = 0
    x_resolution: int = 0
    y_resolution: int = 0
    ncolors: int = 0
    important_colors: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<IiiHHIIiiII")

    def pack(self) -> bytes:
        return self._STRUCT.pack(
            self.size,
            self.width,
            self.height,
            self.planes,
            self.bits,
            self.compression,
            self.image_size,
            self.x_resolution,
            self.y_resolution,
            self.ncolors,
            self.important_colors,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "BmpInfo":
        if len(data) < cls._STRUCT.size:
            raise Bmp24Error("data is too short for a BMP info header")
        return cls(*cls._STRUCT.unpack_from(data))


def _row_size(width: int) -> int:
    """Bytes per stored row, padded to a multiple of four."""
    return (width * 3 + 3) // 4 * 4


def _clamp(value: int) -> int:
    return min(255, max(0, value))


@dataclass
class Bmp24Image:
    """A 24-bit image; data[y][x] with y = 0 at the top."""

    width: int
    height: int
    color_depth: int = DEFAULT_DEPTH
    data: Optional[List[List[Pixel]]] = None
    header: BmpHeader = field(default_factory=BmpHeader)
    header_info: BmpInfo = field(default_factory=BmpInfo)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        if self.data is None:
            self.data = [[Pixel() for _ in range(self.width)] for _ in range(self.height)]
        if len(self.data) != self.height or any(len(row) != self.width for row in self.data):
            raise ValueError("pixel data does not match the image dimensions")

    @classmethod
    def blank(cls, width: int, height: int, color_depth: int) -> "Bmp24Image":
        """Create a black image of the given size."""
        return cls(
            width=width,
            height=height,
            color_depth=color_depth,
            header_info=BmpInfo(width=width, height=height, bits=color_depth),
        )

    @classmethod
    def load(cls, path: _PathType) -> "Bmp24Image":
        """Read a 24-bit BMP file stored bottom-up in BGR order."""
        raw = Path(path).read_bytes()
        header = BmpHeader.unpack(raw[:HEADER_SIZE])
        if header.type != BMP_TYPE:
            raise Bmp24Error("file is not in BMP format")
        info = BmpInfo.unpack(raw[HEADER_SIZE:HEADER_SIZE + INFO_SIZE])
        width, height = info.width, info.height
        if width < 0 or height < 0:
            raise Bmp24Error("unsupported image dimensions")
        row_size = _row_size(width)
        if len(raw) < header.offset + row_size * height:
            raise Bmp24Error("file is too short to hold the pixel data")
        rows = []
        for row_index in range(height):
            start = header.offset + row_index * row_size
            row = raw[start:start + width * 3]
            rows.append(
                [
                    Pixel(red=r, green=g, blue=b)
                    for b, g, r in zip(row[0::3], row[1::3], row[2::3])
                ]
            )
        rows.reverse()
        return cls(
            width=width,
            height=height,
            color_depth=info.bits,
            data=rows,
            header=header,
            header_info=info,
        )

    def save(self, path: _PathType) -> None:
        """Write the image as a 24-bit BMP file, updating the headers to match."""
        row_size = _row_size(self.width)
        padding = bytes(row_size - self.width * 3)
        image_size = row_size * self.height
        self.header.offset = HEADER_SIZE + INFO_SIZE
        self.header.size = HEADER_SIZE + INFO_SIZE + image_size
        self.header_info.image_size = image_size
        self.header_info.width = self.width
        self.header_info.height = self.height
        self.header_info.bits = self.color_depth
        body = b"".join(
            bytes(value for pixel in row for value in (pixel.blue, pixel.green, pixel.red))
            + padding
            for row in reversed(self.data)
        )
        Path(path).write_bytes(self.header.pack() + self.header_info.pack() + body)

    def _map(self, transform) -> None:
        self.data = [[transform(pixel) for pixel in row] for row in self.data]

    def negative(self) -> None:
        """Invert every colour channel."""
        self._map(lambda p: Pixel(255 - p.red, 255 - p.green, 255 - p.blue))

    def grayscale(self) -> None:
        """Replace each pixel by the mean of its channels."""

        def to_gray(p: Pixel) -> Pixel:
            gray = (p.red + p.green + p.blue) // 3
            return Pixel(gray, gray, gray)

        self._map(to_gray)

    def brightness(self, value: int) -> None:
        """Add value to every channel, clamping to 0..255."""
        self._map(
            lambda p: Pixel(
                _clamp(p.red + value), _clamp(p.green + value), _clamp(p.blue + value)
            )
        )