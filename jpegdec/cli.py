"""Command-line decoding of baseline JPEG files to PGM or PPM images."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from jpegdec.bitstream import extract_scan_data, read_scan_components
from jpegdec.color import convert_blocks
from jpegdec.decoder import ScanComponent, decode_mcus, padded_size
from jpegdec.header import read_frame_header, read_huffman_tables, read_quant_tables
from jpegdec.image_writer import write_pnm
from jpegdec.quantization import dequantize_components
from jpegdec.transform import reconstruct_block


def _scan_components(header, selectors):
    components = []
    for position, spec in enumerate(header.components):
        default = 0 if position == 0 else 1
        dc_index, ac_index = selectors.get(spec.identifier, (default, default))
        components.append(
            ScanComponent(
                identifier=spec.identifier,
                h_samp=spec.h_samp,
                v_samp=spec.v_samp,
                dc_index=dc_index,
                ac_index=ac_index,
            )
        )
    return components


def decode_image(data):
    """Decode a baseline JPEG; return ``(planes, height, width)``.

    ``planes`` holds one list of 8x8 sample blocks per output channel:
    one for greyscale images, red, green and blue for colour ones.
    """
    data = bytes(data)
    header = read_frame_header(data)
    dc_tables, ac_tables = read_huffman_tables(data)
    quant_tables = read_quant_tables(data)
    components = _scan_components(header, read_scan_components(data))

    padded_height, padded_width = padded_size(header.height, header.width)
    coefficients = decode_mcus(
        extract_scan_data(data),
        components,
        dc_tables,
        ac_tables,
        padded_height,
        padded_width,
    )
    dequantized = dequantize_components(
        coefficients, quant_tables, [spec.qt_index for spec in header.components]
    )
    planes = [[reconstruct_block(block) for block in blocks] for blocks in dequantized]
    if len(planes) == 3:
        planes = convert_blocks(*planes)
    return planes, header.height, header.width


def output_path(source, channels):
    """Return the image path next to ``source``: .pgm for one channel, else .ppm."""
    suffix = ".pgm" if channels == 1 else ".ppm"
    return Path(source).with_suffix(suffix)


def main(argv=None):
    """Decode the JPEG named on the command line and write the resulting image."""
    parser = argparse.ArgumentParser(
        prog="jpegdec", description="Decode a baseline JPEG file to PGM or PPM."
    )
    parser.add_argument("jpeg_file", help="JPEG file to decode")
    parser.add_argument("-o", "--output", help="path of the image to write")
    args = parser.parse_args(argv)

    try:
        data = Path(args.jpeg_file).read_bytes()
        planes, height, width = decode_image(data)
        target = args.output or output_path(args.jpeg_file, len(planes))
        written = write_pnm(target, planes, height, width)
    except (OSError, ValueError) as error:
        print(f"jpegdec: {error}", file=sys.stderr)
        return 1
    print(written)
    return 0


if __name__ == "__main__":
    sys.exit(main())