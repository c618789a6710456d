"""Block reordering and the inverse discrete cosine transform."""

from __future__ import annotations

import math

BLOCK_SIZE = 64
BLOCK_SIDE = 8


def _zigzag_order():
    """Yield ``(row, col)`` positions in the order zigzag-coded values are stored."""
    for diagonal in range(2 * BLOCK_SIDE - 1):
        low = max(0, diagonal - (BLOCK_SIDE - 1))
        high = min(diagonal, BLOCK_SIDE - 1)
        rows = range(low, high + 1)
        if diagonal % 2 == 0:
            rows = reversed(rows)
        for row in rows:
            yield row, diagonal - row


ZIGZAG_ORDER = tuple(_zigzag_order())


def _scale(index: int) -> float:
    return 1.0 / math.sqrt(2.0) if index == 0 else 1.0


# _BASIS[x][u] = C(u) * cos((2x + 1) * u * pi / 16)
_BASIS = tuple(
    tuple(
        _scale(u) * math.cos((2.0 * x + 1.0) * u * math.pi / 16.0)
        for u in range(BLOCK_SIDE)
    )
    for x in range(BLOCK_SIDE)
)


def _check_square(block) -> list[list[float]]:
    rows = [list(row) for row in block]
    if len(rows) != BLOCK_SIDE or any(len(row) != BLOCK_SIDE for row in rows):
        raise ValueError(f"a block is a {BLOCK_SIDE}x{BLOCK_SIDE} matrix")
    return rows


def inverse_zigzag(vector):
    """Arrange 64 values given in zigzag order into an 8x8 matrix."""
    values = list(vector)
    if len(values) != BLOCK_SIZE:
        raise ValueError(f"a zigzag vector holds {BLOCK_SIZE} values")
    matrix = [[0] * BLOCK_SIDE for _ in range(BLOCK_SIDE)]
    for value, (row, col) in zip(values, ZIGZAG_ORDER):
        matrix[row][col] = value
    return matrix


def idct(block):
    """Return the 8x8 inverse DCT of a matrix of frequency coefficients."""
    coefficients = _check_square(block)
    # Separable evaluation: first along columns (mu), then along rows (lambda).
    partial = [
        [
            sum(basis_y[mu] * coefficients[lam][mu] for mu in range(BLOCK_SIDE))
            for basis_y in _BASIS
        ]
        for lam in range(BLOCK_SIDE)
    ]
    return [
        [
            0.25 * sum(basis_x[lam] * partial[lam][j] for lam in range(BLOCK_SIDE))
            for j in range(BLOCK_SIDE)
        ]
        for basis_x in _BASIS
    ]


def _to_sample(value: float) -> int:
    shifted = min(max(value + 128.0, 0.0), 255.0)
    return int(math.floor(shifted + 0.5))


def to_samples(block):
    """Level-shift by 128, clamp to 0..255 and round each value of an 8x8 block."""
    return [[_to_sample(value) for value in row] for row in _check_square(block)]


def reconstruct_block(coefficients):
    """Turn 64 dequantized zigzag-ordered coefficients into 8x8 samples."""
    return to_samples(idct(inverse_zigzag(coefficients)))