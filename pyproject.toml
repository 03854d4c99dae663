[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bmpedit"
version = "0.1.0"
description = "Load, edit and save 8-bit palettised and 24-bit colour BMP images"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "bitmap", "image", "grayscale", "filter", "convolution"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bmpedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
