# -*- coding: utf-8 -*-
"""
PNG Reader/Writer - 8-bit raster images through Pillow.

Reads PNG (and the other 8-bit formats Pillow decodes, such as JPEG and
BMP) into ``(rows, cols)`` or ``(rows, cols, bands)`` arrays, and writes
grayscale, gray+alpha, RGB and RGBA arrays to PNG. Float data is rounded
and clipped to ``[0, 255]`` on write, with a warning when clipping
changes any value.

Dependencies
------------
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

# Standard library
import logging
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

try:
    from PIL import Image, UnidentifiedImageError
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

# shiftreg internal
from shiftreg.IO.base import ImageReader, ImageWriter
from shiftreg.exceptions import DependencyError, ValidationError

logger = logging.getLogger(__name__)

# Pillow modes kept as-is. Modes in _CONVERTED_MODES map to their native
# equivalent; anything else (palette, CMYK, ...) becomes RGB or RGBA.
_NATIVE_MODES = {
    'L': 'uint8',
    'LA': 'uint8',
    'RGB': 'uint8',
    'RGBA': 'uint8',
    'I;16': 'uint16',
    'I': 'int32',
    'F': 'float32',
}

# Non-native modes with a channel-preserving native equivalent.
_CONVERTED_MODES = {
    '1': 'L',
    'PA': 'RGBA',
    'La': 'LA',
    'RGBa': 'RGBA',
    'I;16B': 'I',
    'I;16L': 'I',
    'I;16N': 'I',
}

_MODES_BY_BANDS = {1: 'L', 2: 'LA', 3: 'RGB', 4: 'RGBA'}


def _require_pil() -> None:
    if not _HAS_PIL:
        raise DependencyError(
            "Pillow is required for PNG IO. "
            "Install with: pip install Pillow"
        )


class PngReader(ImageReader):
    """Read 8-bit raster images with Pillow.

    Parameters
    ----------
    filepath : str or Path
        Path to a PNG, JPEG or BMP file.

    Raises
    ------
    DependencyError
        If Pillow is not installed.
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If Pillow cannot decode the file.

    Examples
    --------
    >>> from shiftreg.IO.png import PngReader
    >>> with PngReader('left.png') as reader:
    ...     data = reader.read_full()
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_pil()
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Read size and mode from the image header."""
        try:
            with Image.open(self.filepath) as img:
                mode = img.mode
                cols, rows = img.size
                file_format = img.format
                has_transparency = 'transparency' in img.info
        except (UnidentifiedImageError, OSError) as e:
            raise ValidationError(
                f"Failed to decode image {self.filepath}: {e}"
            ) from e

        if mode not in _NATIVE_MODES:
            default = 'RGBA' if has_transparency else 'RGB'
            mode = _CONVERTED_MODES.get(mode, default)

        self.metadata = {
            'format': file_format,
            'mode': mode,
            'rows': rows,
            'cols': cols,
            'bands': len(mode) if mode in ('L', 'LA', 'RGB', 'RGBA') else 1,
            'dtype': _NATIVE_MODES[mode],
        }

    def read_full(self) -> np.ndarray:
        """Decode the whole image.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` for single-band modes, otherwise
            ``(rows, cols, bands)``.
        """
        with Image.open(self.filepath) as img:
            if img.mode != self.metadata['mode']:
                img = img.convert(self.metadata['mode'])
            data = np.asarray(img)
        logger.debug("Read %s with shape %s", self.filepath, data.shape)
        return data


class PngWriter(ImageWriter):
    """Write grayscale, gray+alpha, RGB or RGBA arrays to PNG files.

    Parameters
    ----------
    filepath : str or Path
        Output PNG file path.
    metadata : Dict[str, Any], optional
        Not embedded in the PNG; kept for writer bookkeeping.

    Raises
    ------
    DependencyError
        If Pillow is not installed.

    Examples
    --------
    >>> from shiftreg.IO.png import PngWriter
    >>> with PngWriter('aligned.png') as writer:
    ...     writer.write(aligned)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        _require_pil()
        super().__init__(filepath, metadata)

    def write(self, data: np.ndarray) -> None:
        """Write image data to a PNG file.

        Parameters
        ----------
        data : np.ndarray
            ``(rows, cols)`` or ``(rows, cols, bands)`` with 1 to 4 bands.
            Non-uint8 data is rounded and clipped to ``[0, 255]``.

        Raises
        ------
        ValidationError
            If the array shape has no PNG mode.
        """
        if data.ndim == 3 and data.shape[2] == 1:
            data = data[:, :, 0]
        bands = 1 if data.ndim == 2 else (data.shape[2] if data.ndim == 3 else 0)
        if bands not in _MODES_BY_BANDS:
            raise ValidationError(
                f"Expected (rows, cols) or (rows, cols, bands) with 1-4 "
                f"bands, got shape {data.shape}"
            )

        if data.dtype != np.uint8:
            rounded = np.rint(data) if np.issubdtype(data.dtype, np.floating) else data
            clipped = np.clip(rounded, 0, 255)
            if np.any(clipped != rounded):
                warnings.warn(
                    f"Values outside [0, 255] clipped for PNG output "
                    f"(dtype={data.dtype}).",
                    UserWarning,
                    stacklevel=2,
                )
            data = clipped.astype(np.uint8)

        img = Image.fromarray(np.ascontiguousarray(data))
        img.save(str(self.filepath), format='PNG')
        logger.debug("Wrote %s (%s, %dx%d)", self.filepath,
                     _MODES_BY_BANDS[bands], data.shape[1], data.shape[0])
