"""Huffman decoding of the blocks of a baseline scan."""

from __future__ import annotations

from dataclasses import dataclass

from jpegdec.bitstream import BitReader, magnitude_to_coefficient

BLOCK_SIZE = 64
MAX_CODE_LENGTH = 16


@dataclass(frozen=True)
class ScanComponent:
    """A component taking part in a scan, with its sampling and table choice."""

    identifier: int
    h_samp: int = 1
    v_samp: int = 1
    dc_index: int = 0
    ac_index: int = 0


def padded_size(height, width):
    """Return ``(height, width)`` rounded up to whole 8x8 blocks."""
    return ((height + 7) // 8) * 8, ((width + 7) // 8) * 8


def _read_symbol(reader, table, kind):
    bits = ""
    while True:
        bits += "1" if reader.read_bit() else "0"
        symbol = table.match(bits)
        if symbol is not None:
            return symbol
        if len(bits) >= MAX_CODE_LENGTH:
            raise ValueError(
                f"Huffman {kind} code longer than {MAX_CODE_LENGTH} bits: corrupt JPEG data"
            )


def decode_block(reader, dc_table, ac_table, prev_dc):
    """Decode one block of 64 coefficients in zigzag order.

    Returns ``(coefficients, dc)`` where ``dc`` is the absolute DC value to
    use as prediction for the next block of the same component. Decoding
    stops early, leaving zeros, when the bits run out.
    """
    block = [0] * BLOCK_SIZE
    try:
        magnitude = _read_symbol(reader, dc_table, "DC")
        prev_dc += magnitude_to_coefficient(magnitude, reader.read_bits(magnitude))
        block[0] = prev_dc
        position = 1
        while position < BLOCK_SIZE:
            symbol = _read_symbol(reader, ac_table, "AC")
            if symbol == 0x00:
                break
            run, magnitude = symbol >> 4, symbol & 0x0F
            value = magnitude_to_coefficient(magnitude, reader.read_bits(magnitude))
            position = min(position + run, BLOCK_SIZE)
            if position < BLOCK_SIZE:
                block[position] = value
                position += 1
    except EOFError:
        pass
    return block, prev_dc


def _table(tables, index, kind):
    try:
        return tables[index]
    except (KeyError, IndexError):
        raise ValueError(f"missing Huffman {kind} table {index}") from None


def decode_mcus(scan_data, components, dc_tables, ac_tables, height, width):
    """Decode every block of an interleaved scan.

    Returns one list of blocks per component; within a component, blocks are
    laid out row by row over the whole (padded) component plane.
    """
    components = list(components)
    if not components:
        raise ValueError("a scan needs at least one component")
    first = components[0]
    mcu_cols = (width + 8 * first.h_samp - 1) // (8 * first.h_samp)
    mcu_rows = (height + 8 * first.v_samp - 1) // (8 * first.v_samp)
    total = mcu_cols * mcu_rows

    tables = [
        (_table(dc_tables, c.dc_index, "DC"), _table(ac_tables, c.ac_index, "AC"))
        for c in components
    ]
    planes = [
        [[0] * BLOCK_SIZE for _ in range(total * c.h_samp * c.v_samp)]
        for c in components
    ]
    predictions = [0] * len(components)
    reader = scan_data if isinstance(scan_data, BitReader) else BitReader(scan_data)

    for my in range(mcu_rows):
        for mx in range(mcu_cols):
            for c, comp in enumerate(components):
                dc_table, ac_table = tables[c]
                row_length = mcu_cols * comp.h_samp
                for v in range(comp.v_samp):
                    for h in range(comp.h_samp):
                        index = (my * comp.v_samp + v) * row_length + mx * comp.h_samp + h
                        planes[c][index], predictions[c] = decode_block(
                            reader, dc_table, ac_table, predictions[c]
                        )
    return planes