# -*- coding: utf-8 -*-
"""
Co-Registration Utilities - Distance metric and translation resampling.

Provides the normalized RMS distance used to score candidate
displacements, and the integer translation that applies a displacement
to an image. Both read pixels through ``bounded_sample``.

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
2026-02-06

Modified
--------
2026-10-17
"""

# Standard library
from typing import Tuple, Union

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.coregistration.base import Displacement
from shiftreg.coregistration.sampling import as_bands, bounded_sample
from shiftreg.exceptions import ValidationError

# Fraction of each dimension excluded at every border by the distance.
CROP_DIVISOR = 16


def crop_margins(width: int, height: int) -> Tuple[int, int]:
    """Border widths ``(woff, hoff)`` excluded from the distance window."""
    return width // CROP_DIVISOR, height // CROP_DIVISOR


def displacement_distance(
    fixed: np.ndarray,
    moving: np.ndarray,
    displacement: Union[Displacement, Tuple[int, int]],
) -> float:
    """Normalized L2 distance between *fixed* and displaced *moving*.

    Compares ``fixed(i, j)`` with ``moving(i - dx, j - dy)`` over a
    centered window that drops ``width // 16`` columns and
    ``height // 16`` rows at each border, where zero padding would
    otherwise dominate. Squares are summed in extended precision and
    divided by the exact number of samples before the square root. The
    result is rounded to single precision, so candidates whose scores
    agree to float32 compare equal.

    Parameters
    ----------
    fixed : np.ndarray
        Reference image, ``(rows, cols)`` or ``(rows, cols, bands)``.
    moving : np.ndarray
        Image of the same shape as *fixed*.
    displacement : Displacement or Tuple[int, int]
        Candidate ``(dx, dy)``.

    Returns
    -------
    float
        RMS difference over the window, >= 0, at float32 precision.

    Raises
    ------
    ValidationError
        If the cropped window contains no samples.
    """
    fixed = as_bands(fixed)
    moving = as_bands(moving)
    dx, dy = Displacement.coerce(displacement)
    rows, cols, bands = fixed.shape

    woff, hoff = crop_margins(cols, rows)
    npoints = (cols - 2 * woff) * (rows - 2 * hoff) * bands
    if npoints <= 0:
        raise ValidationError(
            f"Distance window is empty for image shape {fixed.shape}"
        )

    j, i = np.mgrid[hoff:rows - hoff, woff:cols - woff]
    a = bounded_sample(fixed, i, j).astype(np.longdouble)
    b = bounded_sample(moving, i - dx, j - dy).astype(np.longdouble)
    diff = a - b
    total = np.sum(diff * diff, dtype=np.longdouble)
    return float(np.float32(np.sqrt(total / npoints)))


def apply_translation(
    image: np.ndarray,
    displacement: Union[Displacement, Tuple[int, int]],
) -> np.ndarray:
    """Shift an image by an integer displacement.

    ``out(i, j) = image(i - dx, j - dy)``: content moves by ``+d`` in the
    output frame and samples brought in from outside the image are 0.

    Parameters
    ----------
    image : np.ndarray
        Input of shape ``(rows, cols)`` or ``(rows, cols, bands)``.
    displacement : Displacement or Tuple[int, int]
        Shift ``(dx, dy)``.

    Returns
    -------
    np.ndarray
        Translated image with the shape and dtype of *image*.
    """
    source = as_bands(image)
    dx, dy = Displacement.coerce(displacement)
    rows, cols, _ = source.shape

    j, i = np.mgrid[0:rows, 0:cols]
    result = bounded_sample(source, i - dx, j - dy)
    return result.reshape(np.shape(image))
