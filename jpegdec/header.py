"""Parsing of the JPEG header segments: frame, quantization and Huffman tables."""

from __future__ import annotations

from dataclasses import dataclass, field

SOI = 0xD8
APP0 = 0xE0
SOF0 = 0xC0
DQT = 0xDB
DHT = 0xC4
SOS = 0xDA

BLOCK_SIZE = 64
MAX_CODE_LENGTH = 16
MAX_TABLE_INDEX = 3


@dataclass(frozen=True)
class ComponentSpec:
    """One colour component as declared in the frame header."""

    identifier: int
    h_samp: int
    v_samp: int
    qt_index: int


@dataclass(frozen=True)
class FrameHeader:
    """Content of a baseline start-of-frame segment."""

    precision: int
    height: int
    width: int
    components: tuple[ComponentSpec, ...]

    @property
    def component_count(self) -> int:
        return len(self.components)


@dataclass(frozen=True)
class HuffmanCode:
    """A symbol and the canonical code assigned to it."""

    symbol: int
    code: int
    length: int

    @property
    def bits(self) -> str:
        """The code as a string of '0' and '1' characters."""
        return format(self.code, f"0{self.length}b")


@dataclass
class HuffmanTable:
    """A canonical Huffman table, searchable by code bits."""

    codes: tuple[HuffmanCode, ...]
    _lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.codes = tuple(self.codes)
        self._lookup = {code.bits: code.symbol for code in self.codes}

    def __len__(self) -> int:
        return len(self.codes)

    def match(self, bits):
        """Return the symbol whose code is exactly ``bits``, or None."""
        return self._lookup.get(bits)


def _u16(data: bytes, pos: int) -> int:
    if pos + 2 > len(data):
        raise ValueError("truncated JPEG data")
    return (data[pos] << 8) | data[pos + 1]


def _byte(data: bytes, pos: int) -> int:
    if pos >= len(data):
        raise ValueError("truncated JPEG data")
    return data[pos]


def _find_marker(data: bytes, marker: int, start: int, stop: int | None = None):
    """Return the offset just after the next ``FF marker`` pair, or None."""
    i = start
    n = len(data)
    while i < n:
        current = data[i]
        i += 1
        if current != 0xFF:
            continue
        if i >= n:
            return None
        found = data[i]
        i += 1
        if stop is not None and found == stop:
            return None
        if found == marker:
            return i
    return None


def read_frame_header(data):
    """Parse the SOI, optional APP0 and the first SOF0 segment of ``data``."""
    data = bytes(data)
    if data[:2] != bytes((0xFF, SOI)):
        raise ValueError("missing start-of-image marker")
    if len(data) < 4 or data[2] != 0xFF:
        raise ValueError("expected a marker after start-of-image")
    pos = 4
    if data[3] == APP0:
        pos = 4 + _u16(data, 4)

    start = _find_marker(data, SOF0, pos)
    if start is None:
        raise ValueError("no baseline start-of-frame segment found")

    precision = _byte(data, start + 2)
    height = _u16(data, start + 3)
    width = _u16(data, start + 5)
    count = _byte(data, start + 7)
    if not 1 <= count <= 4:
        raise ValueError(f"invalid number of colour components: {count}")

    components = []
    pos = start + 8
    for _ in range(count):
        identifier = _byte(data, pos)
        sampling = _byte(data, pos + 1)
        qt_index = _byte(data, pos + 2)
        components.append(
            ComponentSpec(
                identifier=identifier,
                h_samp=(sampling >> 4) & 0x0F,
                v_samp=sampling & 0x0F,
                qt_index=qt_index,
            )
        )
        pos += 3
    return FrameHeader(precision, height, width, tuple(components))


def read_quant_tables(data):
    """Return every quantization table of ``data`` as ``{index: 64 values}``."""
    data = bytes(data)
    tables: dict[int, tuple[int, ...]] = {}
    pos = 0
    while (start := _find_marker(data, DQT, pos)) is not None:
        end = start + _u16(data, start)
        p = start + 2
        while p < end:
            info = _byte(data, p)
            p += 1
            index = info & 0x0F
            if index > MAX_TABLE_INDEX:
                raise ValueError(f"quantization table index {index} out of range")
            wide = info >> 4 == 1
            size = BLOCK_SIZE * (2 if wide else 1)
            if p + size > end:
                raise ValueError("quantization segment length is inconsistent")
            if p + size > len(data):
                raise ValueError("truncated JPEG data")
            if wide:
                values = tuple(_u16(data, p + 2 * k) for k in range(BLOCK_SIZE))
            else:
                values = tuple(data[p : p + BLOCK_SIZE])
            tables[index] = values
            p += size
        pos = end
    return tables


def read_huffman_specs(data):
    """Return raw Huffman specifications found before the first scan.

    Keys are ``(table_class, index)`` with class 0 for DC and 1 for AC;
    values are ``(counts, symbols)`` where ``counts`` holds the number of
    codes of each length from 1 to 16.
    """
    data = bytes(data)
    specs: dict[tuple[int, int], tuple[tuple[int, ...], tuple[int, ...]]] = {}
    pos = 0
    while (start := _find_marker(data, DHT, pos, stop=SOS)) is not None:
        end = start + _u16(data, start)
        p = start + 2
        while p < end:
            info = _byte(data, p)
            table_class = (info >> 4) & 0x0F
            index = info & 0x0F
            if table_class not in (0, 1):
                raise ValueError(f"invalid Huffman table class {table_class}")
            if index > MAX_TABLE_INDEX:
                raise ValueError(f"Huffman table index {index} out of range")
            p += 1
            if p + MAX_CODE_LENGTH > len(data):
                raise ValueError("truncated JPEG data")
            counts = tuple(data[p : p + MAX_CODE_LENGTH])
            p += MAX_CODE_LENGTH
            total = sum(counts)
            if p + total > end or p + total > len(data):
                raise ValueError("Huffman segment length is inconsistent")
            symbols = tuple(data[p : p + total])
            p += total
            specs[(table_class, index)] = (counts, symbols)
        pos = end
    return specs


def build_huffman_table(counts, symbols):
    """Assign canonical codes to ``symbols`` given the per-length ``counts``."""
    counts = tuple(counts)
    symbols = tuple(symbols)
    if len(counts) != MAX_CODE_LENGTH:
        raise ValueError(f"expected {MAX_CODE_LENGTH} code-length counts")
    if sum(counts) != len(symbols):
        raise ValueError("number of symbols does not match the code counts")

    codes = []
    remaining = iter(symbols)
    code = 0
    for length, count in enumerate(counts, start=1):
        for _ in range(count):
            if code >= 1 << length:
                raise ValueError("code counts do not describe a valid Huffman table")
            codes.append(HuffmanCode(next(remaining), code, length))
            code += 1
        code <<= 1
    return HuffmanTable(tuple(codes))


def read_huffman_tables(data):
    """Build the DC and AC Huffman tables of ``data``, each keyed by index."""
    dc_tables: dict[int, HuffmanTable] = {}
    ac_tables: dict[int, HuffmanTable] = {}
    for (table_class, index), (counts, symbols) in read_huffman_specs(data).items():
        target = dc_tables if table_class == 0 else ac_tables
        target[index] = build_huffman_table(counts, symbols)
    return dc_tables, ac_tables