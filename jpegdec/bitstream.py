"""Access to the entropy-coded scan of a JPEG file, bit by bit."""

from __future__ import annotations

SOS = 0xDA


class BitReader:
    """Reads bits, most significant first, from a byte string."""

    def __init__(self, data):
        self._data = bytes(data)
        self._position = 0

    @property
    def remaining(self) -> int:
        """Number of bits not read yet."""
        return len(self._data) * 8 - self._position

    def read_bit(self):
        """Return the next bit as 0 or 1; raise EOFError when none is left."""
        byte_index, offset = divmod(self._position, 8)
        if byte_index >= len(self._data):
            raise EOFError("end of scan data")
        self._position += 1
        return (self._data[byte_index] >> (7 - offset)) & 1

    def read_bits(self, count):
        """Return the next ``count`` bits as an unsigned integer."""
        value = 0
        for _ in range(count):
            value = (value << 1) | self.read_bit()
        return value


def _find_sos(data: bytes) -> int:
    """Return the offset of the length field of the first SOS segment."""
    i = 0
    n = len(data)
    while i < n:
        current = data[i]
        i += 1
        if current != 0xFF:
            continue
        if i >= n:
            break
        found = data[i]
        i += 1
        if found == SOS:
            return i
    raise ValueError("no start-of-scan segment found")


def read_scan_components(data):
    """Return ``{component id: (dc_index, ac_index)}`` from the first scan header."""
    data = bytes(data)
    start = _find_sos(data)
    if start + 3 > len(data):
        raise ValueError("truncated JPEG data")
    count = data[start + 2]
    pos = start + 3
    if pos + 2 * count > len(data):
        raise ValueError("truncated JPEG data")
    selectors = {}
    for _ in range(count):
        identifier = data[pos]
        tables = data[pos + 1]
        selectors[identifier] = ((tables >> 4) & 0x0F, tables & 0x0F)
        pos += 2
    return selectors


def extract_scan_data(data):
    """Return the entropy-coded bytes of the first scan, with byte stuffing removed.

    Reading stops at the first marker (``FF`` followed by anything but ``00``)
    or at the end of the data.
    """
    data = bytes(data)
    start = _find_sos(data)
    if start + 2 > len(data):
        raise ValueError("truncated JPEG data")
    pos = start + ((data[start] << 8) | data[start + 1])
    out = bytearray()
    n = len(data)
    while pos < n:
        current = data[pos]
        if current != 0xFF:
            out.append(current)
            pos += 1
            continue
        if pos + 1 < n and data[pos + 1] == 0x00:
            out.append(0xFF)
            pos += 2
            continue
        break
    return bytes(out)


def magnitude_to_coefficient(magnitude, index):
    """Turn a magnitude class and an index within it into a signed coefficient."""
    if magnitude == 0:
        return 0
    half = 1 << (magnitude - 1)
    if index < half:
        return index - ((1 << magnitude) - 1)
    return index