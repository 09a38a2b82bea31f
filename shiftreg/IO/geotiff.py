# -*- coding: utf-8 -*-
"""
GeoTIFF Reader/Writer - Lossless multi-band TIFF through rasterio.

TIFF is the natural container for real-valued, multi-channel sample
buffers: float32 data round-trips exactly, with any number of bands.
Rasterio stores bands first; this module converts to and from the
``(rows, cols, bands)`` layout used everywhere else.

Dependencies
------------
rasterio

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
2026-02-09

Modified
--------
2026-10-17
"""

# Standard library
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

try:
    import rasterio
    from rasterio.errors import RasterioIOError
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

# shiftreg internal
from shiftreg.IO.base import ImageReader, ImageWriter
from shiftreg.exceptions import DependencyError, ValidationError

logger = logging.getLogger(__name__)


def _require_rasterio() -> None:
    if not _HAS_RASTERIO:
        raise DependencyError(
            "rasterio is required for GeoTIFF IO. "
            "Install with: pip install rasterio"
        )


class GeoTIFFReader(ImageReader):
    """Read single- or multi-band TIFF images.

    Parameters
    ----------
    filepath : str or Path
        Path to the TIFF file.

    Attributes
    ----------
    dataset : rasterio.DatasetReader
        Open rasterio dataset.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file cannot be opened as a TIFF.

    Examples
    --------
    >>> from shiftreg.IO.geotiff import GeoTIFFReader
    >>> with GeoTIFFReader('left.tif') as reader:
    ...     data = reader.read_full()
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_rasterio()
        self.dataset = None
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Open the dataset and record its dimensions."""
        try:
            self.dataset = rasterio.open(str(self.filepath))
        except RasterioIOError as e:
            raise ValidationError(
                f"Failed to open TIFF {self.filepath}: {e}"
            ) from e

        self.metadata = {
            'format': 'GeoTIFF',
            'rows': self.dataset.height,
            'cols': self.dataset.width,
            'bands': self.dataset.count,
            'dtype': str(self.dataset.dtypes[0]),
        }

    def read_full(self) -> np.ndarray:
        """Read every band.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` for one band, otherwise
            ``(rows, cols, bands)``.
        """
        data = self.dataset.read()
        logger.debug("Read %s with %d band(s)", self.filepath, data.shape[0])
        if data.shape[0] == 1:
            return data[0]
        return np.moveaxis(data, 0, -1)

    def close(self) -> None:
        """Close the rasterio dataset."""
        if self.dataset is not None:
            self.dataset.close()
            self.dataset = None


class GeoTIFFWriter(ImageWriter):
    """Write arrays to a TIFF file with one TIFF band per channel.

    Parameters
    ----------
    filepath : str or Path
        Output file path.
    metadata : Dict[str, Any], optional
        Written as TIFF tags.

    Raises
    ------
    DependencyError
        If rasterio is not installed.

    Examples
    --------
    >>> from shiftreg.IO.geotiff import GeoTIFFWriter
    >>> with GeoTIFFWriter('aligned.tif') as writer:
    ...     writer.write(aligned.astype(np.float32))
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        _require_rasterio()
        super().__init__(filepath, metadata)

    def write(self, data: np.ndarray) -> None:
        """Write image data.

        Parameters
        ----------
        data : np.ndarray
            ``(rows, cols)`` or ``(rows, cols, bands)``. The dtype is kept.

        Raises
        ------
        ValidationError
            If *data* is not 2D or 3D.
        """
        if data.ndim == 2:
            bands_first = data[np.newaxis, :, :]
        elif data.ndim == 3:
            bands_first = np.moveaxis(data, -1, 0)
        else:
            raise ValidationError(
                f"Expected (rows, cols) or (rows, cols, bands), "
                f"got shape {data.shape}"
            )

        count, rows, cols = bands_first.shape
        profile = {
            'driver': 'GTiff',
            'height': rows,
            'width': cols,
            'count': count,
            'dtype': str(data.dtype),
        }
        with rasterio.open(str(self.filepath), 'w', **profile) as dst:
            dst.write(np.ascontiguousarray(bands_first))
            if self.metadata:
                dst.update_tags(**{k: str(v) for k, v in self.metadata.items()})
        logger.debug("Wrote %s (%d band(s), %dx%d)", self.filepath,
                     count, cols, rows)
