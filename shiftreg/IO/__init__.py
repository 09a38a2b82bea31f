# -*- coding: utf-8 -*-
"""
IO Module - Reading and writing images for registration.

Codec layer around the co-registration core. Readers are picked from
the file extension; every format returns ``(rows, cols)`` or
``(rows, cols, bands)`` arrays. ``read_image`` normalizes any of them to
a ``(rows, cols, bands)`` float32 array, the form the registration CLI
works on.

Dependencies
------------
Pillow
rasterio (optional, for TIFF)

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-01-30

Modified
--------
2026-10-17
"""

# Standard library
import importlib
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.IO.base import ImageReader, ImageWriter
from shiftreg.coregistration.sampling import as_bands
from shiftreg.exceptions import ValidationError


# Format registries: format -> (module_path, class_name). Imports are
# lazy so optional codec libraries are only needed when used.
_READER_REGISTRY: Dict[str, tuple] = {
    'geotiff': ('shiftreg.IO.geotiff', 'GeoTIFFReader'),
    'numpy': ('shiftreg.IO.numpy_io', 'NumpyReader'),
    'png': ('shiftreg.IO.png', 'PngReader'),
}

_WRITER_REGISTRY: Dict[str, tuple] = {
    'geotiff': ('shiftreg.IO.geotiff', 'GeoTIFFWriter'),
    'numpy': ('shiftreg.IO.numpy_io', 'NumpyWriter'),
    'png': ('shiftreg.IO.png', 'PngWriter'),
}

_EXTENSION_MAP: Dict[str, str] = {
    '.tif': 'geotiff',
    '.tiff': 'geotiff',
    '.npy': 'numpy',
    '.png': 'png',
}

# Decoded by Pillow but never written.
_READ_ONLY_EXTENSIONS: Dict[str, str] = {
    '.jpg': 'png',
    '.jpeg': 'png',
    '.bmp': 'png',
}


def _load_class(registry: Dict[str, tuple], format: str) -> type:
    module_path, class_name = registry[format]
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def _format_from_extension(path: Path, mapping: Dict[str, str]) -> str:
    ext = path.suffix.lower()
    if ext not in mapping:
        raise ValidationError(
            f"Cannot determine image format from extension '{ext}'. "
            f"Supported extensions: {sorted(mapping.keys())}."
        )
    return mapping[ext]


def get_writer(
    format: str,
    filepath: Union[str, Path],
    metadata: Optional[Dict[str, Any]] = None,
) -> ImageWriter:
    """Create an ImageWriter for the given format.

    Parameters
    ----------
    format : str
        One of ``'geotiff'``, ``'numpy'``, ``'png'``.
    filepath : str or Path
        Output file path.
    metadata : Dict[str, Any], optional
        Passed to the writer constructor.

    Returns
    -------
    ImageWriter

    Raises
    ------
    ValidationError
        If *format* is not recognized.
    """
    key = format.lower()
    if key not in _WRITER_REGISTRY:
        raise ValidationError(
            f"Unknown writer format: {format!r}. "
            f"Supported formats: {sorted(_WRITER_REGISTRY.keys())}"
        )
    writer_cls = _load_class(_WRITER_REGISTRY, key)
    return writer_cls(filepath, metadata=metadata)


def write(
    data: np.ndarray,
    path: Union[str, Path],
    metadata: Optional[Dict[str, Any]] = None,
    format: Optional[str] = None,
) -> None:
    """Write array data to a file, picking the format from the extension.

    Parameters
    ----------
    data : np.ndarray
        Image data, ``(rows, cols)`` or ``(rows, cols, bands)``.
    path : str or Path
        Output file path.
    metadata : Dict[str, Any], optional
        Passed to the writer.
    format : str, optional
        Format override. If None, detected from the file extension.

    Raises
    ------
    ValidationError
        If *format* is None and the extension is not recognized.

    Examples
    --------
    >>> from shiftreg.IO import write
    >>> write(aligned, 'aligned.png')
    >>> write(aligned, 'aligned.dat', format='numpy')
    """
    path = Path(path)
    if format is None:
        format = _format_from_extension(path, _EXTENSION_MAP)

    with get_writer(format, path, metadata=metadata) as writer:
        writer.write(data)


def open_image(filepath: Union[str, Path]) -> ImageReader:
    """Open an image file with the reader matching its extension.

    Parameters
    ----------
    filepath : str or Path
        ``.png``, ``.jpg``, ``.jpeg``, ``.bmp``, ``.tif``, ``.tiff`` or
        ``.npy`` file.

    Returns
    -------
    ImageReader

    Raises
    ------
    ValidationError
        If the extension is not supported or the file cannot be decoded.
    FileNotFoundError
        If the file does not exist.

    Examples
    --------
    >>> from shiftreg.IO import open_image
    >>> with open_image('left.png') as reader:
    ...     data = reader.read_full()
    """
    filepath = Path(filepath)
    format = _format_from_extension(
        filepath, {**_EXTENSION_MAP, **_READ_ONLY_EXTENSIONS}
    )
    reader_cls = _load_class(_READER_REGISTRY, format)
    return reader_cls(filepath)


def read_image(filepath: Union[str, Path]) -> np.ndarray:
    """Read an image as a ``(rows, cols, bands)`` float32 array.

    Parameters
    ----------
    filepath : str or Path
        Any file accepted by ``open_image``.

    Returns
    -------
    np.ndarray
        Samples converted to float32 without rescaling.
    """
    with open_image(filepath) as reader:
        data = reader.read_full()
    return as_bands(data).astype(np.float32)


__all__ = [
    'ImageReader',
    'ImageWriter',
    'get_writer',
    'write',
    'open_image',
    'read_image',
]
