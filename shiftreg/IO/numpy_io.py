# -*- coding: utf-8 -*-
"""
NumPy Reader/Writer - Arrays stored in NumPy ``.npy`` files.

The ``.npy`` format stores any ``(rows, cols, bands)`` array with its
exact dtype, which makes it a convenient lossless container for float
images in tests and scripted pipelines. The writer also emits a JSON
sidecar with shape, dtype and any extra metadata.

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
import json
import logging
from typing import Any, Dict

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.IO.base import ImageReader, ImageWriter
from shiftreg.exceptions import ValidationError

logger = logging.getLogger(__name__)


class NumpyReader(ImageReader):
    """Read an image array from a ``.npy`` file.

    The array header is read with memory mapping, so opening the reader
    does not load the pixels.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file is not a ``.npy`` array of rank 2 or 3.
    """

    def _load_metadata(self) -> None:
        """Read shape and dtype from the ``.npy`` header."""
        try:
            header = np.load(str(self.filepath), mmap_mode='r', allow_pickle=False)
        except (ValueError, EOFError) as e:
            raise ValidationError(
                f"Failed to read NumPy array {self.filepath}: {e}"
            ) from e
        if header.ndim not in (2, 3):
            raise ValidationError(
                f"Expected (rows, cols) or (rows, cols, bands) array in "
                f"{self.filepath}, got shape {header.shape}"
            )
        self.metadata = {
            'format': 'numpy',
            'rows': header.shape[0],
            'cols': header.shape[1],
            'bands': header.shape[2] if header.ndim == 3 else 1,
            'dtype': str(header.dtype),
        }
        del header

    def read_full(self) -> np.ndarray:
        """Load the whole array into memory."""
        data = np.load(str(self.filepath), allow_pickle=False)
        logger.debug("Read %s with shape %s", self.filepath, data.shape)
        return data


class NumpyWriter(ImageWriter):
    """Write an image array to a ``.npy`` file with a JSON sidecar.

    The sidecar is written to ``<filepath>.json`` and records ``shape``,
    ``dtype`` and the contents of *metadata*.

    Examples
    --------
    >>> from shiftreg.IO.numpy_io import NumpyWriter
    >>> with NumpyWriter('aligned.npy', metadata={'dx': 3, 'dy': -2}) as writer:
    ...     writer.write(aligned)
    """

    def write(self, data: np.ndarray) -> None:
        """Write *data* to the ``.npy`` file and its sidecar."""
        # np.save appends '.npy' to bare names; write through a handle
        # so the file lands exactly at self.filepath.
        with open(self.filepath, 'wb') as f:
            np.save(f, data, allow_pickle=False)
        self._write_sidecar(data)
        logger.debug("Wrote %s with shape %s", self.filepath, data.shape)

    def _write_sidecar(self, data: np.ndarray) -> None:
        sidecar: Dict[str, Any] = {
            'shape': list(data.shape),
            'dtype': str(data.dtype),
        }
        sidecar.update(self.metadata)
        sidecar_path = self.filepath.with_suffix(
            self.filepath.suffix + '.json'
        )
        with open(sidecar_path, 'w') as f:
            json.dump(sidecar, f, indent=2, default=str)
