# jpegdec

A small baseline JPEG decoder in pure Python, with no third-party
dependencies. It reads a sequential, Huffman-coded JPEG file and writes the
decoded picture as a binary PGM (greyscale) or PPM (colour) image.

## Installation

```
pip install .
```

## Command line

```
jpegdec picture.jpg
jpegdec picture.jpg -o decoded.ppm
```

A one-component (greyscale) image is written as a `.pgm` file and a
three-component (Y/Cb/Cr) image as a `.ppm` file. Unless `-o/--output` is
given, the output file takes the name of the input file with the suffix
changed. The command prints the path it wrote. If the input cannot be read or
decoded, it prints an error to standard error and exits with status 1.

The output has the width and height recorded in the frame header. When those
are not multiples of 8, the padding added to fill whole blocks is cropped
away.

## Library use

Each decoding stage has its own module:

- `jpegdec.header`: `read_frame_header` returns a `FrameHeader` (precision,
  height, width and a `ComponentSpec` per component). `read_quant_tables`
  returns the quantisation tables keyed by index, and both 8-bit and 16-bit
  tables are accepted. `read_huffman_specs`, `build_huffman_table` and
  `read_huffman_tables` build canonical `HuffmanTable` objects made of
  `HuffmanCode` entries, and `HuffmanTable.match(bits)` looks a code up.
- `jpegdec.bitstream`: `extract_scan_data` returns the entropy-coded bytes of
  the first scan with byte stuffing removed. `read_scan_components` returns
  the DC/AC table selectors of each component in the scan. `BitReader` reads
  that data bit by bit, and `magnitude_to_coefficient` turns a magnitude class
  and an index into a signed value.
- `jpegdec.decoder`: `decode_block` decodes one block of 64 zig-zag
  coefficients and `decode_mcus` decodes a whole interleaved scan of
  `ScanComponent`s. `padded_size` rounds dimensions up to whole blocks.
- `jpegdec.quantization`: `dequantize` and `dequantize_components` do the
  inverse quantisation.
- `jpegdec.transform`: `inverse_zigzag`, `idct`, `to_samples` and
  `reconstruct_block` reorder the coefficients, apply the inverse DCT and
  produce 8-bit samples.
- `jpegdec.color`: `ycbcr_to_rgb`, `saturate` and `convert_blocks` convert to
  RGB.
- `jpegdec.image_writer`: `assemble_pixels`, `encode_pnm` and `write_pnm`
  assemble the blocks into cropped pixel rows and encode them as PGM or PPM.

`jpegdec.cli.decode_image` runs the whole pipeline:

```python
from pathlib import Path

from jpegdec.cli import decode_image, output_path
from jpegdec.image_writer import write_pnm

source = Path("picture.jpg")
planes, height, width = decode_image(source.read_bytes())
write_pnm(output_path(source, len(planes)), planes, height, width)
```

`decode_image` returns one list of 8×8 blocks per output channel: one for
greyscale, and red, green and blue for colour.

## Limitations

- Only baseline sequential (SOF0) JPEG is read. Progressive and
  arithmetic-coded files are rejected because no baseline frame header is
  found.
- Only the first scan is decoded. Restart markers are not handled, and decoding
  stops at the first marker inside the scan data.
- Colour images must have all three components at the same sampling (4:4:4).
  Chroma subsampling is not supported for output.
- Only one or three components can be written out.

## Running the tests

```
pip install ".[test]"
pytest
```