# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for image readers and writers.

Defines the abstract reader and writer that every codec implements.
Readers return arrays in ``(rows, cols)`` or ``(rows, cols, bands)``
layout, the layout the co-registration code works in.

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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np


class ImageReader(ABC):
    """
    Abstract base class for all image readers.

    Attributes
    ----------
    filepath : Path
        Path to the image file
    metadata : Dict[str, Any]
        Metadata extracted from the file; at least ``format``, ``rows``,
        ``cols``, ``bands`` and ``dtype``
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the image reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the image file

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self.metadata: Dict[str, Any] = {}
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """
        Populate ``self.metadata`` from the file header.
        """
        pass

    @abstractmethod
    def read_full(self) -> np.ndarray:
        """
        Read the entire image.

        Returns
        -------
        np.ndarray
            Image data with shape (rows, cols) for single-band or
            (rows, cols, bands) for multi-band imagery
        """
        pass

    def get_shape(self) -> Tuple[int, ...]:
        """
        Get the shape of the image.

        Returns
        -------
        Tuple[int, ...]
            (rows, cols) for single-band or (rows, cols, bands) for
            multi-band imagery
        """
        if self.metadata['bands'] == 1:
            return (self.metadata['rows'], self.metadata['cols'])
        return (
            self.metadata['rows'],
            self.metadata['cols'],
            self.metadata['bands'],
        )

    def get_dtype(self) -> np.dtype:
        """
        Get the data type of the image.

        Returns
        -------
        np.dtype
            NumPy data type of the image pixels
        """
        return np.dtype(self.metadata['dtype'])

    def close(self) -> None:
        """
        Close the reader and release resources.

        Default implementation does nothing. Override if the reader
        keeps open file handles.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for all image writers.

    Attributes
    ----------
    filepath : Path
        Path where the image will be written
    metadata : Dict[str, Any]
        Extra metadata recorded by writers that support it
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Initialize the image writer.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path where the image will be written
        metadata : Optional[Dict[str, Any]], default=None
            Metadata to include in the output, where the format allows
        """
        self.filepath = Path(filepath)
        self.metadata = metadata or {}

    @abstractmethod
    def write(self, data: np.ndarray) -> None:
        """
        Write image data to file.

        Parameters
        ----------
        data : np.ndarray
            Image data, (rows, cols) or (rows, cols, bands)

        Raises
        ------
        ValidationError
            If data shape is incompatible with the output format
        """
        pass

    def close(self) -> None:
        """
        Close the writer and release resources.

        Default implementation does nothing.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
