# -*- coding: utf-8 -*-
"""
Bounded Sampling - Zero-padded pixel access shared by all co-registration code.

Every pixel lookup in the reducer, the distance evaluator and the
translator goes through ``bounded_sample``, so all of them see the same
edge behavior: any coordinate outside the image reads as exactly zero.

Images are ``(rows, cols, bands)`` arrays. Coordinates follow the
``(i, j)`` = ``(column, row)`` order used throughout the package.

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
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
from typing import Optional, Union

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.exceptions import ValidationError


def as_bands(image: np.ndarray) -> np.ndarray:
    """Return *image* as a ``(rows, cols, bands)`` array.

    Parameters
    ----------
    image : np.ndarray
        Shape ``(rows, cols)`` or ``(rows, cols, bands)``.

    Returns
    -------
    np.ndarray
        A view with a trailing band axis of length 1 for 2D input,
        otherwise *image* itself.

    Raises
    ------
    ValidationError
        If *image* is not 2D or 3D.
    """
    image = np.asarray(image)
    if image.ndim == 2:
        return image[:, :, np.newaxis]
    if image.ndim != 3:
        raise ValidationError(
            f"Expected image of shape (rows, cols) or (rows, cols, bands), "
            f"got shape {image.shape}"
        )
    return image


def bounded_sample(
    image: np.ndarray,
    i: Union[int, np.ndarray],
    j: Union[int, np.ndarray],
    band: Optional[int] = None,
) -> Union[np.ndarray, np.generic]:
    """Read pixel values, returning zero outside the image domain.

    Parameters
    ----------
    image : np.ndarray
        Image of shape ``(rows, cols, bands)``.
    i : int or np.ndarray
        Horizontal (column) coordinates. Broadcast against *j*.
    j : int or np.ndarray
        Vertical (row) coordinates.
    band : int, optional
        Channel to read. If None, all channels are returned along a
        trailing axis. A band outside ``[0, bands)`` reads as zero.

    Returns
    -------
    np.ndarray or scalar
        Sampled values with the broadcast shape of ``(i, j)``, plus a
        trailing band axis when *band* is None. Scalar coordinates with an
        explicit *band* give a NumPy scalar.
    """
    rows, cols, bands = image.shape
    i, j = np.broadcast_arrays(np.asarray(i), np.asarray(j))
    inside = (i >= 0) & (i < cols) & (j >= 0) & (j < rows)

    # Clamp so indexing is always legal; masked samples are zeroed below.
    ii = np.clip(i, 0, max(cols - 1, 0))
    jj = np.clip(j, 0, max(rows - 1, 0))

    if band is None:
        values = image[jj, ii, :]
        return np.where(inside[..., np.newaxis], values, image.dtype.type(0))

    if band < 0 or band >= bands:
        return np.zeros(inside.shape, dtype=image.dtype)[()]
    values = image[jj, ii, band]
    return np.where(inside, values, image.dtype.type(0))[()]
