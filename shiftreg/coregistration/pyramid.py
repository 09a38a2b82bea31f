# -*- coding: utf-8 -*-
"""
Pyramid Reduction - Half-resolution box-filter downsampling.

Each output pixel is the mean of a non-overlapping 2x2 block of input
pixels. Odd-sized inputs are read through ``bounded_sample``, so the last
row or column is averaged against implicit zeros and comes out darker at
the border.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.coregistration.sampling import as_bands, bounded_sample
from shiftreg.exceptions import ValidationError


def half_size(n: int) -> int:
    """Ceiling of ``n / 2``."""
    return (n + 1) // 2


def zoom_out_by_factor_two(
    image: np.ndarray,
    output_shape: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """Downsample an image by 2 using 2x2 box averaging.

    Parameters
    ----------
    image : np.ndarray
        Input of shape ``(rows, cols)`` or ``(rows, cols, bands)``.
    output_shape : Tuple[int, int], optional
        Requested ``(rows, cols)`` of the result. Must agree with the
        ceiling-halving rule; computed from the input when omitted.

    Returns
    -------
    np.ndarray
        float64 array of shape ``(ceil(rows/2), ceil(cols/2), bands)``.

    Raises
    ------
    ValidationError
        If *output_shape* is not within one pixel of half the input size.
    """
    image = as_bands(image)
    rows, cols, _ = image.shape
    if output_shape is None:
        output_shape = (half_size(rows), half_size(cols))

    out_rows, out_cols = output_shape
    if abs(2 * out_cols - cols) >= 2 or abs(2 * out_rows - rows) >= 2:
        raise ValidationError(
            f"Output shape {tuple(output_shape)} is not half of input "
            f"shape {(rows, cols)}"
        )

    source = image.astype(np.float64, copy=False)
    j, i = np.mgrid[0:out_rows, 0:out_cols]
    total = (
        bounded_sample(source, 2 * i, 2 * j)
        + bounded_sample(source, 2 * i + 1, 2 * j)
        + bounded_sample(source, 2 * i, 2 * j + 1)
        + bounded_sample(source, 2 * i + 1, 2 * j + 1)
    )
    return total / 4
