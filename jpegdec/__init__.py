"""Baseline JPEG decoder writing PGM and PPM images."""

__version__ = "0.1.0"

__all__ = [
    "bitstream",
    "cli",
    "color",
    "decoder",
    "header",
    "image_writer",
    "quantization",
    "transform",
]