# -*- coding: utf-8 -*-
"""
PNG IO Tests - Unit tests for PngReader and PngWriter.

Tests uint8 grayscale and RGB round-trips, float rounding and clipping
on write, mode conversion on read, and error handling.

Dependencies
------------
pytest
Pillow

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-11

Modified
--------
2026-10-17
"""

import warnings

import numpy as np
import pytest

try:
    from PIL import Image
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

pytestmark = pytest.mark.skipif(
    not _HAS_PIL, reason="Pillow not installed"
)


class TestPngWriter:
    """PNG write tests."""

    def test_write_uint8_grayscale_roundtrip(self, tmp_path):
        """Write uint8 grayscale, read back with Pillow, verify equality."""
        from shiftreg.IO.png import PngWriter

        data = np.random.randint(0, 256, (32, 48), dtype=np.uint8)
        filepath = tmp_path / "gray.png"

        with PngWriter(filepath) as writer:
            writer.write(data)

        result = np.array(Image.open(str(filepath)))
        np.testing.assert_array_equal(result, data)

    def test_write_uint8_rgb_roundtrip(self, tmp_path):
        """Write uint8 RGB, read back, verify equality."""
        from shiftreg.IO.png import PngWriter

        data = np.random.randint(0, 256, (32, 48, 3), dtype=np.uint8)
        filepath = tmp_path / "rgb.png"

        with PngWriter(filepath) as writer:
            writer.write(data)

        result = np.array(Image.open(str(filepath)))
        np.testing.assert_array_equal(result, data)

    def test_single_band_written_as_grayscale(self, tmp_path):
        """(rows, cols, 1) is written as mode L."""
        from shiftreg.IO.png import PngWriter

        data = np.full((8, 8, 1), 42, dtype=np.uint8)
        filepath = tmp_path / "one_band.png"
        with PngWriter(filepath) as writer:
            writer.write(data)

        with Image.open(str(filepath)) as img:
            assert img.mode == 'L'
            assert img.size == (8, 8)

    def test_rgba_roundtrip(self, tmp_path):
        """Four bands are written as RGBA."""
        from shiftreg.IO.png import PngWriter

        data = np.random.randint(0, 256, (6, 5, 4), dtype=np.uint8)
        filepath = tmp_path / "rgba.png"
        with PngWriter(filepath) as writer:
            writer.write(data)

        with Image.open(str(filepath)) as img:
            assert img.mode == 'RGBA'
            np.testing.assert_array_equal(np.array(img), data)

    def test_float_in_range_is_rounded_without_warning(self, tmp_path):
        """Float data inside [0, 255] is rounded, no warning."""
        from shiftreg.IO.png import PngWriter

        data = np.array([[0.2, 1.6], [127.5, 254.9]], dtype=np.float32)
        filepath = tmp_path / "float.png"

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            with PngWriter(filepath) as writer:
                writer.write(data)
            assert len(w) == 0

        result = np.array(Image.open(str(filepath)))
        np.testing.assert_array_equal(result, np.rint(data).astype(np.uint8))

    def test_float_out_of_range_is_clipped_with_warning(self, tmp_path):
        """Values outside [0, 255] are clipped and reported."""
        from shiftreg.IO.png import PngWriter

        data = np.array([[-20.0, 100.0], [300.0, 255.0]])
        filepath = tmp_path / "clipped.png"

        with pytest.warns(UserWarning, match="clipped"):
            with PngWriter(filepath) as writer:
                writer.write(data)

        result = np.array(Image.open(str(filepath)))
        np.testing.assert_array_equal(result, [[0, 100], [255, 255]])

    @pytest.mark.parametrize("shape", [(4,), (4, 4, 5), (2, 2, 2, 2)])
    def test_invalid_shape_raises(self, tmp_path, shape):
        """Shapes without a PNG mode raise ValidationError."""
        from shiftreg.IO.png import PngWriter
        from shiftreg.exceptions import ValidationError

        with PngWriter(tmp_path / "bad.png") as writer:
            with pytest.raises(ValidationError, match="1-4"):
                writer.write(np.zeros(shape, dtype=np.uint8))

    def test_implements_image_writer(self, tmp_path):
        """PngWriter is an ImageWriter subclass."""
        from shiftreg.IO.base import ImageWriter
        from shiftreg.IO.png import PngWriter

        assert isinstance(PngWriter(tmp_path / "test.png"), ImageWriter)


class TestPngReader:
    """PNG read tests."""

    def test_read_grayscale(self, tmp_path):
        from shiftreg.IO.png import PngReader

        data = np.random.randint(0, 256, (10, 12), dtype=np.uint8)
        filepath = tmp_path / "gray.png"
        Image.fromarray(data).save(str(filepath))

        with PngReader(filepath) as reader:
            assert reader.get_shape() == (10, 12)
            assert reader.get_dtype() == np.uint8
            np.testing.assert_array_equal(reader.read_full(), data)

    def test_read_rgb(self, tmp_path):
        from shiftreg.IO.png import PngReader

        data = np.random.randint(0, 256, (10, 12, 3), dtype=np.uint8)
        filepath = tmp_path / "rgb.png"
        Image.fromarray(data).save(str(filepath))

        with PngReader(filepath) as reader:
            assert reader.get_shape() == (10, 12, 3)
            assert reader.metadata['mode'] == 'RGB'
            np.testing.assert_array_equal(reader.read_full(), data)

    def test_palette_converted_to_rgb(self, tmp_path):
        """Palette images are expanded to RGB."""
        from shiftreg.IO.png import PngReader

        img = Image.new('P', (4, 3))
        img.putpalette([0, 0, 0, 10, 20, 30] + [0] * (256 * 3 - 6))
        img.putpixel((1, 2), 1)
        filepath = tmp_path / "palette.png"
        img.save(str(filepath))

        with PngReader(filepath) as reader:
            data = reader.read_full()
        assert data.shape == (3, 4, 3)
        np.testing.assert_array_equal(data[2, 1], [10, 20, 30])
        np.testing.assert_array_equal(data[0, 0], [0, 0, 0])

    def test_missing_file(self, tmp_path):
        from shiftreg.IO.png import PngReader

        with pytest.raises(FileNotFoundError):
            PngReader(tmp_path / "missing.png")

    def test_bilevel_read_as_single_band(self, tmp_path):
        """Mode '1' images stay one band, as 0/255 uint8."""
        from shiftreg.IO.png import PngReader

        img = Image.new('1', (40, 30))
        img.putpixel((5, 7), 255)
        filepath = tmp_path / "bilevel.png"
        img.save(str(filepath))

        with PngReader(filepath) as reader:
            assert reader.metadata['mode'] == 'L'
            assert reader.get_shape() == (30, 40)
            data = reader.read_full()
        assert data.shape == (30, 40)
        assert data.dtype == np.uint8
        assert data[7, 5] == 255
        assert data.sum() == 255

    def test_palette_with_transparency_keeps_alpha(self, tmp_path):
        from shiftreg.IO.png import PngReader

        img = Image.new('P', (4, 3))
        img.putpalette([0, 0, 0, 10, 20, 30] + [0] * (256 * 3 - 6))
        img.putpixel((1, 2), 1)
        filepath = tmp_path / "palette_alpha.png"
        img.save(str(filepath), transparency=0)

        with PngReader(filepath) as reader:
            data = reader.read_full()
        assert data.shape == (3, 4, 4)
        assert data[0, 0, 3] == 0
        np.testing.assert_array_equal(data[2, 1], [10, 20, 30, 255])

    def test_converted_modes_keep_channel_count(self):
        from shiftreg.IO.png import _CONVERTED_MODES

        assert _CONVERTED_MODES['1'] == 'L'
        assert _CONVERTED_MODES['PA'] == 'RGBA'
        assert _CONVERTED_MODES['I;16B'] == 'I'

    def test_undecodable_file(self, tmp_path):
        from shiftreg.IO.png import PngReader
        from shiftreg.exceptions import ValidationError

        filepath = tmp_path / "garbage.png"
        filepath.write_bytes(b"this is not an image")

        with pytest.raises(ValidationError, match="Failed to decode"):
            PngReader(filepath)
