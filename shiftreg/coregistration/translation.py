# -*- coding: utf-8 -*-
"""
Translation Co-Registration - Coarse-to-fine integer shift estimation.

Finds the integer displacement that minimizes the normalized L2
distance between two same-sized images. The search builds a box-filter
pyramid recursively, starts from ``(0, 0)`` at the coarsest level, and
at every level doubles the coarser estimate and takes a single greedy
step over its 3x3 neighborhood.

Each search level logs ``"<width>x<height>: <dx> <dy>"`` at INFO level
on this module's logger.

Dependencies
------------
numpy

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
import logging
from typing import Annotated, Any, List, Optional, Tuple

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.coregistration.base import (
    CoRegistration,
    Displacement,
    RegistrationResult,
)
from shiftreg.coregistration.pyramid import half_size, zoom_out_by_factor_two
from shiftreg.coregistration.sampling import as_bands
from shiftreg.coregistration.utils import apply_translation, displacement_distance
from shiftreg.exceptions import ValidationError
from shiftreg.params import Desc, Range

logger = logging.getLogger(__name__)

DEFAULT_LEVELS = 10

# Candidate offsets as (dx, dy). Order decides ties: the first strict
# minimum wins.
NEIGHBORHOOD: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 0), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


def refine_displacement(
    fixed: np.ndarray,
    moving: np.ndarray,
    center: Displacement,
) -> Tuple[Displacement, float]:
    """Best displacement among the 3x3 neighbors of *center*.

    A single greedy pass: candidates are scored in ``NEIGHBORHOOD`` order
    and a later candidate replaces the current best only when its
    distance is strictly smaller.

    Returns
    -------
    Tuple[Displacement, float]
        Winning displacement and its distance.

    Raises
    ------
    ValidationError
        If any candidate distance is NaN or infinite.
    """
    best = center
    best_distance = np.inf
    for offset in NEIGHBORHOOD:
        candidate = center + offset
        distance = displacement_distance(fixed, moving, candidate)
        if not np.isfinite(distance):
            raise ValidationError(
                f"Distance at displacement {tuple(candidate)} is not finite; "
                f"images must not contain NaN or inf samples"
            )
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return best, best_distance


def find_displacement(
    fixed: np.ndarray,
    moving: np.ndarray,
    levels: int = DEFAULT_LEVELS,
    trace: Optional[List[Tuple[int, int, int, int]]] = None,
) -> Displacement:
    """Estimate the shift that aligns *moving* onto *fixed*.

    With ``levels > 1`` both images are halved, the search recurses on the
    half-resolution pair, and the result is doubled. With ``levels <= 1``
    the starting point is ``(0, 0)``. Either way one neighborhood
    refinement follows at the current resolution.

    Parameters
    ----------
    fixed : np.ndarray
        Reference image, ``(rows, cols)`` or ``(rows, cols, bands)``.
    moving : np.ndarray
        Image to align, same shape as *fixed* (not checked).
    levels : int
        Number of pyramid levels, including this one.
    trace : list, optional
        If given, ``(width, height, dx, dy)`` is appended for each level,
        coarsest first.

    Returns
    -------
    Displacement
    """
    fixed = as_bands(fixed)
    moving = as_bands(moving)
    rows, cols, _ = fixed.shape

    if levels > 1:
        shape = (half_size(rows), half_size(cols))
        fixed_small = zoom_out_by_factor_two(fixed, shape)
        moving_small = zoom_out_by_factor_two(moving, shape)
        try:
            coarse = find_displacement(
                fixed_small, moving_small, levels - 1, trace
            )
        finally:
            del fixed_small, moving_small
        d = coarse.scaled(2)
    else:
        d = Displacement(0, 0)

    d, _ = refine_displacement(fixed, moving, d)
    logger.info("%dx%d: %d %d", cols, rows, d.dx, d.dy)
    if trace is not None:
        trace.append((cols, rows, d.dx, d.dy))
    return d


class TranslationCoRegistration(CoRegistration):
    """Integer translation co-registration by multiscale L2 search.

    Suited to camera-rig or burst captures where the misregistration is
    a pure shift. There is no sub-pixel estimate and no handling of
    rotation, occlusion or illumination change.

    Parameters
    ----------
    levels : int
        Pyramid depth of the search, default 10. Not adapted to image
        size; once an image is 1x1 further levels simply repeat the
        terminal refinement.

    Examples
    --------
    >>> coreg = TranslationCoRegistration(levels=6)
    >>> result = coreg.estimate(left, right)
    >>> aligned = coreg.apply(right, result)
    """

    levels: Annotated[int, Range(min=1), Desc('Number of pyramid levels searched')] = DEFAULT_LEVELS

    def estimate(
        self,
        fixed: np.ndarray,
        moving: np.ndarray,
        **kwargs: Any,
    ) -> RegistrationResult:
        """Run the pyramid search.

        Parameters
        ----------
        fixed : np.ndarray
            Reference image.
        moving : np.ndarray
            Image to align onto *fixed*.
        **kwargs
            ``levels`` override for this call.

        Returns
        -------
        RegistrationResult
        """
        params = self._resolve_params(kwargs)
        trace: List[Tuple[int, int, int, int]] = []
        displacement = find_displacement(
            fixed, moving, levels=params['levels'], trace=trace
        )
        return RegistrationResult(
            displacement=displacement,
            distance=displacement_distance(fixed, moving, displacement),
            levels=params['levels'],
            trace=trace,
            metadata={'method': 'pyramid_l2_translation'},
        )

    def apply(
        self,
        moving: np.ndarray,
        result: RegistrationResult,
    ) -> np.ndarray:
        """Translate *moving* by the estimated displacement."""
        return apply_translation(moving, result.displacement)


def register(
    left: np.ndarray,
    right: np.ndarray,
    levels: int = DEFAULT_LEVELS,
) -> np.ndarray:
    """Register *right* onto *left* by an integer translation.

    Parameters
    ----------
    left : np.ndarray
        Reference image.
    right : np.ndarray
        Image to register, same shape as *left*.
    levels : int
        Pyramid depth of the search.

    Returns
    -------
    np.ndarray
        *right* translated into the frame of *left*.
    """
    coreg = TranslationCoRegistration(levels=levels)
    return coreg.apply(right, coreg.estimate(left, right))
