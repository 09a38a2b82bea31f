# -*- coding: utf-8 -*-
"""
Shiftreg - Integer translation registration for image pairs.

Aligns two same-sized multi-channel images, such as frames from a
camera rig or a burst capture, where the misregistration is a pure
shift. The shift is found by a coarse-to-fine L2 search over a box-filter
pyramid and applied by zero-padded resampling.

Dependencies
------------
numpy
Pillow

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from shiftreg.exceptions import (
    ShiftregError,
    ValidationError,
    DependencyError,
)
from shiftreg.coregistration import (
    CoRegistration,
    Displacement,
    RegistrationResult,
    TranslationCoRegistration,
    apply_translation,
    displacement_distance,
    find_displacement,
    register,
)

__all__ = [
    'ShiftregError',
    'ValidationError',
    'DependencyError',
    'CoRegistration',
    'Displacement',
    'RegistrationResult',
    'TranslationCoRegistration',
    'apply_translation',
    'displacement_distance',
    'find_displacement',
    'register',
]
