"""Conversion of decoded YCbCr samples to RGB."""

from __future__ import annotations

import math

BLOCK_SIDE = 8


def ycbcr_to_rgb(y, cb, cr):
    """Return the unclamped ``(r, g, b)`` values for one YCbCr sample."""
    r = y + 1.402 * (cr - 128)
    g = y - 0.34414 * (cb - 128) - 0.71414 * (cr - 128)
    b = y + 1.772 * (cb - 128)
    return r, g, b


def saturate(value):
    """Clamp ``value`` to 0..255 and round it to the nearest integer."""
    clamped = min(max(float(value), 0.0), 255.0)
    return int(math.floor(clamped + 0.5))


def _convert_block(y_block, cb_block, cr_block):
    red, green, blue = [], [], []
    for y_row, cb_row, cr_row in zip(y_block, cb_block, cr_block):
        rgb_row = [
            tuple(saturate(v) for v in ycbcr_to_rgb(y, cb, cr))
            for y, cb, cr in zip(y_row, cb_row, cr_row)
        ]
        red.append([pixel[0] for pixel in rgb_row])
        green.append([pixel[1] for pixel in rgb_row])
        blue.append([pixel[2] for pixel in rgb_row])
    return red, green, blue


def convert_blocks(y_blocks, cb_blocks, cr_blocks):
    """Convert matching lists of 8x8 Y, Cb and Cr blocks to saturated RGB.

    Returns ``[red_blocks, green_blocks, blue_blocks]``.
    """
    y_blocks = list(y_blocks)
    cb_blocks = list(cb_blocks)
    cr_blocks = list(cr_blocks)
    if not len(y_blocks) == len(cb_blocks) == len(cr_blocks):
        raise ValueError("Y, Cb and Cr must hold the same number of blocks")
    planes = [[], [], []]
    for y_block, cb_block, cr_block in zip(y_blocks, cb_blocks, cr_blocks):
        for plane, converted in zip(planes, _convert_block(y_block, cb_block, cr_block)):
            plane.append(converted)
    return planes