"""Inverse quantization of decoded coefficient blocks."""

from __future__ import annotations

BLOCK_SIZE = 64


def dequantize(coefficients, table):
    """Multiply a 64-coefficient block, element by element, by a quantization table."""
    coefficients = list(coefficients)
    table = list(table)
    if len(coefficients) != BLOCK_SIZE or len(table) != BLOCK_SIZE:
        raise ValueError(f"blocks and quantization tables hold {BLOCK_SIZE} values")
    return [value * factor for value, factor in zip(coefficients, table)]


def dequantize_components(blocks, quant_tables, table_ids):
    """Dequantize every block of every component.

    ``blocks`` holds one list of blocks per component, and ``table_ids`` the
    quantization table index used by each component.
    """
    blocks = list(blocks)
    table_ids = list(table_ids)
    if len(table_ids) < len(blocks):
        raise ValueError("a quantization table index is needed for every component")
    result = []
    for component_blocks, table_id in zip(blocks, table_ids):
        try:
            table = quant_tables[table_id]
        except (KeyError, IndexError):
            raise ValueError(f"missing quantization table {table_id}") from None
        if table is None:
            raise ValueError(f"missing quantization table {table_id}")
        result.append([dequantize(block, table) for block in component_blocks])
    return result