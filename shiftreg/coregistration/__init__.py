# -*- coding: utf-8 -*-
"""
Co-Registration Module - Integer translation alignment of image pairs.

Estimates the integer pixel shift that best aligns a moving image onto a
fixed (reference) image of the same size, and resamples the moving image
with it. The search is coarse-to-fine over a 2x2 box-filter pyramid,
scored by an RMS distance over a centrally cropped window.

Key Classes
-----------
- CoRegistration: Abstract base class for co-registration algorithms
- RegistrationResult: Estimated displacement, distance and per-level trace
- Displacement: Integer ``(dx, dy)`` shift
- TranslationCoRegistration: Pyramid L2 translation search

Usage
-----
    >>> from shiftreg.coregistration import TranslationCoRegistration
    >>> coreg = TranslationCoRegistration()
    >>> result = coreg.estimate(left, right)
    >>> aligned = coreg.apply(right, result)

or in one call:

    >>> from shiftreg.coregistration import register
    >>> aligned = register(left, right)

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
2026-02-06

Modified
--------
2026-10-17
"""

from shiftreg.coregistration.base import (
    CoRegistration,
    Displacement,
    RegistrationResult,
)
from shiftreg.coregistration.sampling import as_bands, bounded_sample
from shiftreg.coregistration.pyramid import half_size, zoom_out_by_factor_two
from shiftreg.coregistration.utils import (
    apply_translation,
    crop_margins,
    displacement_distance,
)
from shiftreg.coregistration.translation import (
    DEFAULT_LEVELS,
    NEIGHBORHOOD,
    TranslationCoRegistration,
    find_displacement,
    refine_displacement,
    register,
)

__all__ = [
    'CoRegistration',
    'Displacement',
    'RegistrationResult',
    'TranslationCoRegistration',
    'as_bands',
    'bounded_sample',
    'half_size',
    'zoom_out_by_factor_two',
    'apply_translation',
    'crop_margins',
    'displacement_distance',
    'DEFAULT_LEVELS',
    'NEIGHBORHOOD',
    'find_displacement',
    'refine_displacement',
    'register',
]
