[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jpegdec"
version = "0.1.0"
description = "Baseline JPEG decoder producing PGM and PPM images"
requires-python = ">=3.10"
dependencies = []
keywords = ["jpeg", "decoder", "huffman", "idct", "pgm", "ppm", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
jpegdec = "jpegdec.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jpegdec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
