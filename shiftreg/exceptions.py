# -*- coding: utf-8 -*-
"""
Shiftreg Exception Hierarchy - Domain-specific exceptions for shiftreg.

Lets callers catch shiftreg errors distinctly from Python built-in
exceptions. Every shiftreg exception subclasses both ``ShiftregError``
and the matching built-in exception, so existing ``except ValueError``
handlers keep working.

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
2026-10-17

Modified
--------
2026-10-17
"""


class ShiftregError(Exception):
    """Base exception for all shiftreg errors."""


class ValidationError(ShiftregError, ValueError):
    """Invalid input data, parameters, or files.

    Raised for unsupported array ranks, out-of-range tunable parameters,
    pyramid sizes that break the ceiling-halving rule, empty distance
    windows, and image files that cannot be decoded.
    """


class DependencyError(ShiftregError, ImportError):
    """Missing optional dependency required for a specific codec.

    Raised when a reader or writer needs an optional package (Pillow,
    rasterio) that is not installed.
    """
