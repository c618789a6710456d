"""Assembly of decoded blocks into PGM (P5) and PPM (P6) images."""

from __future__ import annotations

from pathlib import Path

BLOCK_SIDE = 8
MAX_VALUE = 255


def _check(planes, height, width):
    planes = [list(plane) for plane in planes]
    if len(planes) not in (1, 3):
        raise ValueError(f"an image has 1 or 3 channels, not {len(planes)}")
    if height <= 0 or width <= 0:
        raise ValueError("image dimensions must be positive")
    blocks_per_row = (width + BLOCK_SIDE - 1) // BLOCK_SIDE
    block_rows = (height + BLOCK_SIDE - 1) // BLOCK_SIDE
    needed = blocks_per_row * block_rows
    if any(len(plane) < needed for plane in planes):
        raise ValueError(f"each channel needs {needed} blocks for a {width}x{height} image")
    return planes, blocks_per_row


def assemble_pixels(planes, height, width):
    """Return the interleaved pixel bytes of an image cropped to ``height`` x ``width``.

    Each plane is a list of 8x8 blocks laid out row by row over the image
    padded to whole blocks.
    """
    planes, blocks_per_row = _check(planes, height, width)
    out = bytearray()
    for y in range(height):
        block_row, i = divmod(y, BLOCK_SIDE)
        for x in range(width):
            k, j = divmod(x, BLOCK_SIDE)
            index = block_row * blocks_per_row + k
            out.extend(plane[index][i][j] for plane in planes)
    return bytes(out)


def encode_pnm(planes, height, width):
    """Return a complete binary PGM (one plane) or PPM (three planes) file."""
    pixels = assemble_pixels(planes, height, width)
    magic = "P5" if len(planes) == 1 else "P6"
    header = f"{magic}\n{width} {height}\n{MAX_VALUE}\n".encode("ascii")
    return header + pixels + b"\n"


def write_pnm(path, planes, height, width):
    """Write the image to ``path`` and return that path."""
    path = Path(path)
    path.write_bytes(encode_pnm(planes, height, width))
    return path