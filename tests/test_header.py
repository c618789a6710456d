from fractions import Fraction

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from jpegdec.header import (
    ComponentSpec,
    FrameHeader,
    HuffmanCode,
    HuffmanTable,
    build_huffman_table,
    read_frame_header,
    read_huffman_specs,
    read_huffman_tables,
    read_quant_tables,
)

SOI = b"\xff\xd8"
EOI = b"\xff\xd9"

DC_COUNTS = (0, 1, 5, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0)
DC_SYMBOLS = tuple(range(12))


def segment(marker, payload):
    return bytes((0xFF, marker)) + (len(payload) + 2).to_bytes(2, "big") + payload


def app0():
    return segment(0xE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")


def sof0(height, width, components):
    payload = bytes([8]) + height.to_bytes(2, "big") + width.to_bytes(2, "big")
    payload += bytes([len(components)])
    for ident, h, v, q in components:
        payload += bytes([ident, (h << 4) | v, q])
    return segment(0xC0, payload)


def dqt(*tables):
    payload = b""
    for index, precision, values in tables:
        payload += bytes([(precision << 4) | index])
        if precision == 1:
            payload += b"".join(v.to_bytes(2, "big") for v in values)
        else:
            payload += bytes(values)
    return segment(0xDB, payload)


def dht(*tables):
    payload = b""
    for table_class, index, counts, symbols in tables:
        payload += bytes([(table_class << 4) | index]) + bytes(counts) + bytes(symbols)
    return segment(0xC4, payload)


def sos():
    return segment(0xDA, bytes([1, 1, 0x00, 0, 63, 0]))


def test_frame_header_reads_dimensions_and_components():
    data = SOI + app0() + sof0(17, 33, [(1, 2, 1, 0), (2, 1, 1, 1), (3, 1, 1, 1)]) + EOI
    header = read_frame_header(data)
    assert header == FrameHeader(
        8,
        17,
        33,
        (
            ComponentSpec(1, 2, 1, 0),
            ComponentSpec(2, 1, 1, 1),
            ComponentSpec(3, 1, 1, 1),
        ),
    )
    assert header.component_count == 3


def test_frame_header_requires_soi():
    with pytest.raises(ValueError):
        read_frame_header(app0() + sof0(8, 8, [(1, 1, 1, 0)]))


def test_frame_header_requires_marker_after_soi():
    with pytest.raises(ValueError):
        read_frame_header(SOI + b"\x00\x00")


def test_frame_header_requires_sof0():
    with pytest.raises(ValueError):
        read_frame_header(SOI + app0() + EOI)


def test_frame_header_rejects_zero_components():
    with pytest.raises(ValueError):
        read_frame_header(SOI + app0() + sof0(8, 8, []))


def test_frame_header_truncated():
    data = SOI + app0() + sof0(8, 8, [(1, 1, 1, 0)])
    with pytest.raises(ValueError):
        read_frame_header(data[:-2])


def test_quant_tables_8_and_16_bit():
    low = list(range(1, 65))
    high = [300 + k for k in range(64)]
    data = SOI + app0() + dqt((0, 0, low)) + dqt((1, 1, high)) + EOI
    tables = read_quant_tables(data)
    assert tables == {0: tuple(low), 1: tuple(high)}


def test_quant_tables_several_in_one_segment():
    first = [2] * 64
    second = [5] * 64
    tables = read_quant_tables(SOI + dqt((0, 0, first), (1, 0, second)) + EOI)
    assert tables[0] == tuple(first)
    assert tables[1] == tuple(second)


def test_quant_table_index_out_of_range():
    with pytest.raises(ValueError):
        read_quant_tables(SOI + dqt((5, 0, [1] * 64)) + EOI)


def test_quant_table_inconsistent_length():
    bad = bytes((0xFF, 0xDB)) + (2 + 1 + 40).to_bytes(2, "big") + bytes([0]) + bytes(40)
    with pytest.raises(ValueError):
        read_quant_tables(SOI + bad + bytes(40) + EOI)


def test_standard_dc_table_codes():
    table = build_huffman_table(DC_COUNTS, DC_SYMBOLS)
    assert len(table) == 12
    assert table.codes[0].bits == "00"
    assert table.codes[1].bits == "010"
    assert table.codes[6].bits == "1110"
    assert table.match("00") == 0
    assert table.match("1110") == 6


def test_match_unknown_bits_returns_none():
    table = build_huffman_table(DC_COUNTS, DC_SYMBOLS)
    assert table.match("1" * 16) is None
    assert table.match("0") is None


def test_huffman_code_bits_keeps_leading_zeros():
    assert HuffmanCode(symbol=7, code=1, length=4).bits == "0001"


def test_huffman_table_from_codes():
    table = HuffmanTable((HuffmanCode(0x11, 0, 1), HuffmanCode(0x22, 2, 2)))
    assert table.match("0") == 0x11
    assert table.match("10") == 0x22
    assert table.match("11") is None


def test_build_rejects_symbol_count_mismatch():
    with pytest.raises(ValueError):
        build_huffman_table(DC_COUNTS, DC_SYMBOLS[:-1])


def test_build_rejects_wrong_counts_length():
    with pytest.raises(ValueError):
        build_huffman_table(DC_COUNTS[:15], DC_SYMBOLS)


def test_build_rejects_overfull_counts():
    counts = (3,) + (0,) * 15
    with pytest.raises(ValueError):
        build_huffman_table(counts, (1, 2, 3))


@given(st.lists(st.integers(min_value=0, max_value=3), min_size=8, max_size=8))
def test_canonical_codes_are_prefix_free_and_matchable(head):
    counts = tuple(head) + (0,) * 8
    assume(sum(Fraction(c, 2**length) for length, c in enumerate(counts, 1)) <= 1)
    symbols = tuple(range(sum(counts)))
    table = build_huffman_table(counts, symbols)
    bits = [code.bits for code in table.codes]
    assert [code.symbol for code in table.codes] == list(symbols)
    assert [len(b) for b in bits] == sorted(len(b) for b in bits)
    for i, a in enumerate(bits):
        assert table.match(a) == table.codes[i].symbol
        for b in bits[i + 1 :]:
            assert not b.startswith(a)


def test_huffman_specs_round_trip():
    ac_counts = (0, 2, 1, 3) + (0,) * 12
    ac_symbols = (0x01, 0x02, 0x03, 0x00, 0x04, 0x11)
    data = SOI + dht((0, 0, DC_COUNTS, DC_SYMBOLS), (1, 0, ac_counts, ac_symbols)) + sos()
    specs = read_huffman_specs(data)
    assert specs == {
        (0, 0): (DC_COUNTS, DC_SYMBOLS),
        (1, 0): (ac_counts, ac_symbols),
    }


def test_huffman_specs_ignore_tables_after_scan():
    late_counts = (1,) + (0,) * 15
    data = (
        SOI
        + dht((0, 0, DC_COUNTS, DC_SYMBOLS))
        + sos()
        + dht((0, 1, late_counts, (5,)))
        + EOI
    )
    assert set(read_huffman_specs(data)) == {(0, 0)}


def test_huffman_specs_reject_bad_class():
    with pytest.raises(ValueError):
        read_huffman_specs(SOI + dht((2, 0, DC_COUNTS, DC_SYMBOLS)) + sos())


def test_huffman_specs_reject_bad_index():
    with pytest.raises(ValueError):
        read_huffman_specs(SOI + dht((0, 4, DC_COUNTS, DC_SYMBOLS)) + sos())


def test_read_huffman_tables_splits_dc_and_ac():
    ac_counts = (0, 2) + (0,) * 14
    data = (
        SOI
        + app0()
        + dht((0, 0, DC_COUNTS, DC_SYMBOLS))
        + dht((1, 1, ac_counts, (0x00, 0x01)))
        + sos()
        + EOI
    )
    dc_tables, ac_tables = read_huffman_tables(data)
    assert set(dc_tables) == {0}
    assert set(ac_tables) == {1}
    assert dc_tables[0] == build_huffman_table(DC_COUNTS, DC_SYMBOLS)
    assert ac_tables[1].match("00") == 0x00
    assert ac_tables[1].match("01") == 0x01