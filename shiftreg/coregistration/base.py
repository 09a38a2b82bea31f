# -*- coding: utf-8 -*-
"""
Co-Registration Base Classes - Abstract interface and result types.

Defines the integer ``Displacement`` value type, the
``RegistrationResult`` container returned by every estimator, and the
``CoRegistration`` ABC. A displacement ``(dx, dy)`` is the shift that,
applied to the moving image, lays it onto the fixed (reference) image.

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
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# Third-party
import numpy as np

# shiftreg internal
from shiftreg.params import ParamSpec, collect_param_specs, make_init, resolve_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Displacement:
    """Integer pixel translation.

    Attributes
    ----------
    dx : int
        Horizontal (column) shift.
    dy : int
        Vertical (row) shift.
    """

    dx: int = 0
    dy: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'dx', int(self.dx))
        object.__setattr__(self, 'dy', int(self.dy))

    def __add__(self, other: Union['Displacement', Tuple[int, int]]) -> 'Displacement':
        ox, oy = other
        return Displacement(self.dx + ox, self.dy + oy)

    def __iter__(self) -> Iterator[int]:
        yield self.dx
        yield self.dy

    def scaled(self, factor: int) -> 'Displacement':
        """Displacement expressed at a resolution *factor* times finer."""
        return Displacement(self.dx * factor, self.dy * factor)

    @classmethod
    def coerce(cls, value: Union['Displacement', Tuple[int, int]]) -> 'Displacement':
        """Accept a ``Displacement`` or any ``(dx, dy)`` pair."""
        if isinstance(value, cls):
            return value
        dx, dy = value
        return cls(dx, dy)


class RegistrationResult:
    """Result of a translation co-registration estimate.

    Parameters
    ----------
    displacement : Displacement
        Shift that aligns the moving image onto the fixed image.
    distance : float
        Normalized RMS distance between the fixed image and the moving
        image at *displacement*.
    levels : int
        Number of pyramid levels the search ran with.
    trace : List[Tuple[int, int, int, int]], optional
        Per-level ``(width, height, dx, dy)`` records, coarsest first.
    metadata : Dict[str, Any], optional
        Algorithm-specific metadata.
    """

    def __init__(
        self,
        displacement: Displacement,
        distance: float,
        levels: int,
        trace: Optional[List[Tuple[int, int, int, int]]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.displacement = Displacement.coerce(displacement)
        self.distance = distance
        self.levels = levels
        self.trace = trace or []
        self.metadata = metadata or {}

    @property
    def transform_matrix(self) -> np.ndarray:
        """Equivalent (2, 3) affine matrix in (row, col) convention.

        Maps moving image coordinates to fixed image coordinates.
        """
        return np.array([
            [1.0, 0.0, float(self.displacement.dy)],
            [0.0, 1.0, float(self.displacement.dx)],
        ])

    def __repr__(self) -> str:
        d = self.displacement
        return (
            f"RegistrationResult(dx={d.dx}, dy={d.dy}, "
            f"distance={self.distance:.4f}, levels={self.levels})"
        )


class CoRegistration(ABC):
    """Abstract base class for co-registration algorithms.

    The two-step interface separates estimation (``estimate``) from
    application (``apply``), so one estimate can be applied to several
    images or bands.

    Subclasses declare tunable settings as ``typing.Annotated`` class
    fields with markers from :mod:`shiftreg.params`. They are collected
    into ``__param_specs__`` and, unless the subclass defines its own
    ``__init__``, a keyword-only validating constructor is generated.
    """

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = make_init(cls.__param_specs__)
        logger.debug(
            "Registered %s with params %s",
            cls.__qualname__, [s.name for s in cls.__param_specs__],
        )

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance settings with per-call overrides from *kwargs*."""
        return resolve_params(self, type(self).__param_specs__, kwargs)

    @abstractmethod
    def estimate(
        self,
        fixed: np.ndarray,
        moving: np.ndarray,
        **kwargs: Any,
    ) -> RegistrationResult:
        """Estimate the transform that aligns moving to fixed.

        Parameters
        ----------
        fixed : np.ndarray
            Reference image, ``(rows, cols)`` or ``(rows, cols, bands)``.
        moving : np.ndarray
            Image to be registered. Must have the same shape as *fixed*;
            this is not checked.
        **kwargs
            Per-call overrides for tunable parameters.

        Returns
        -------
        RegistrationResult
        """
        ...

    @abstractmethod
    def apply(
        self,
        moving: np.ndarray,
        result: RegistrationResult,
    ) -> np.ndarray:
        """Resample the moving image with an estimated transform.

        Parameters
        ----------
        moving : np.ndarray
            Image to warp.
        result : RegistrationResult
            Result of a previous ``estimate`` call.

        Returns
        -------
        np.ndarray
            Image aligned to the fixed image frame, same shape and dtype
            as *moving*; samples brought in from outside are 0.
        """
        ...
