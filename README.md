# bmpedit

A small library for reading, editing and writing uncompressed BMP images.
It handles two kinds of bitmap:

* **8-bit palettised** images with a 1024-byte (256-entry) palette, in `bmpedit.bmp8`
* **24-bit colour** images stored bottom-up as BGR triples, in `bmpedit.bmp24`

It uses only the standard library.

## Installation

```
pip install bmpedit
```

## 8-bit images

```python
from bmpedit.bmp8 import Bmp8Image, Bmp8Error

try:
    img = Bmp8Image.load("lena_gray.bmp")
except Bmp8Error as exc:
    print(f"cannot load image: {exc}")
else:
    print(img.info())       # width, height, colour depth and data size

    img.negative()          # invert every pixel
    img.brightness(40)      # add 40, clamped to 0..255
    img.threshold(128)      # pixels >= 128 become 255, others 0

    # Convolution with an odd-sized square kernel; border pixels are left unchanged.
    box_blur = [[1 / 9] * 3 for _ in range(3)]
    img.apply_filter(box_blur)

    img.save("lena_edited.bmp")
```

`Bmp8Image` holds `width`, `height`, `pixels` (a `bytearray` of
`width * height` bytes, in file order), `palette` (1024 bytes) and
`color_depth`; `data_size` is `width * height`. Constructed directly, an image
starts black with a grayscale palette:

```python
img = Bmp8Image(width=16, height=16)
```

`Bmp8Image.load` raises `Bmp8Error` when the file does not start with `BM`,
is not 8 bits per pixel, or is too short for its header, palette or pixel
data. `apply_filter` raises `ValueError` for an even-sized or non-square
kernel.

## 24-bit colour images

```python
from bmpedit.bmp24 import Bmp24Image, Bmp24Error, Pixel

img = Bmp24Image.load("flowers.bmp")
img.grayscale()      # each pixel becomes the mean of its channels
img.brightness(-30)  # darken, clamped per channel
img.negative()
img.save("flowers_edited.bmp")

# Start from a blank (black) image and draw on it
canvas = Bmp24Image.blank(4, 2, 24)
canvas.data[0][0] = Pixel(red=255, green=0, blue=0)
canvas.save("canvas.bmp")
```

Pixels are `Pixel` values with `red`, `green` and `blue` components, held in
`data[y][x]` with `y = 0` at the top of the image. Rows are read and written
with their padding to a multiple of four bytes. `save` updates the file size,
image size, dimensions and bit depth in the headers before writing.

The file and info headers are available as the `BmpHeader` and `BmpInfo`
dataclasses; `pack()` gives their on-disk bytes and `unpack(data)` reads them
back. `Bmp24Image.load` raises `Bmp24Error` when the file is not a BMP, has
negative dimensions, or is too short for its headers or pixel data.

## What it does not do

* There is no command-line tool; the package is used from Python only.
* Compressed BMPs, top-down (negative-height) 24-bit images and bit depths
  other than 8 and 24 are not supported.
* 8-bit images are read and written as `width * height` bytes with no row
  padding, so 8-bit files whose width is not a multiple of four are not
  handled correctly.

## Running the tests

```
pip install -e ".[test]"
pytest
```