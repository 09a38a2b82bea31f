# -*- coding: utf-8 -*-
"""
Tunable Parameter Tests - Annotated settings on CoRegistration subclasses.

Tests constraint markers, spec collection, generated ``__init__``
validation, inheritance, and per-call parameter resolution.

Dependencies
------------
pytest

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

import inspect
from typing import Annotated

import numpy as np
import pytest

from shiftreg.coregistration.base import CoRegistration, RegistrationResult
from shiftreg.exceptions import ValidationError
from shiftreg.params import (
    Desc,
    ParamSpec,
    Range,
    collect_param_specs,
    resolve_params,
)


class _ShiftOnly(CoRegistration):
    """Minimal estimator with a required and an optional setting."""

    step: Annotated[int, Range(min=1, max=8), Desc('Search step')] = 1
    weight: Annotated[float, Range(min=0.0, max=1.0), Desc('Blend weight')]

    def estimate(self, fixed, moving, **kwargs):
        params = self._resolve_params(kwargs)
        return RegistrationResult((params['step'], 0), params['weight'], 1)

    def apply(self, moving, result):
        return moving


class _ShiftWithLimit(_ShiftOnly):
    """Subclass adding a setting after the inherited ones."""

    limit: Annotated[int, Range(min=0)] = 32


class TestMarkers:

    def test_range_repr(self):
        assert repr(Range(min=1)) == "Range(min=1)"
        assert repr(Range(min=0.0, max=1.0)) == "Range(min=0.0, max=1.0)"

    def test_desc_repr(self):
        assert repr(Desc('levels')) == "Desc('levels')"


class TestCollectParamSpecs:

    def test_collects_in_declaration_order(self):
        specs = collect_param_specs(_ShiftOnly)
        assert [s.name for s in specs] == ['step', 'weight']

    def test_spec_fields(self):
        step, weight = collect_param_specs(_ShiftOnly)
        assert step.param_type is int
        assert step.default == 1
        assert not step.required
        assert step.description == 'Search step'
        assert (step.min_value, step.max_value) == (1, 8)
        assert weight.required
        assert weight.default is None

    def test_inherited_fields_come_first(self):
        names = [s.name for s in _ShiftWithLimit.__param_specs__]
        assert names == ['step', 'weight', 'limit']

    def test_plain_annotations_are_ignored(self):
        class Plain:
            name: str = 'x'
            count: Annotated[int, 'not a marker'] = 2
            depth: Annotated[int, Range(min=0)] = 3

        assert [s.name for s in collect_param_specs(Plain)] == ['depth']

    def test_repr(self):
        text = repr(_ShiftOnly.__param_specs__[0])
        assert "name='step'" in text
        assert "default=1" in text
        assert "max_value=8" in text


class TestParamSpecValidate:

    @pytest.fixture
    def spec(self):
        return ParamSpec('ratio', float, 0.5, True, '', 0.0, 1.0)

    def test_accepts_int_for_float(self, spec):
        spec.validate(1)

    def test_rejects_bool(self, spec):
        with pytest.raises(ValidationError, match="must be float"):
            spec.validate(True)

    def test_rejects_string(self, spec):
        with pytest.raises(ValidationError, match="got str"):
            spec.validate('0.5')

    def test_bounds_are_inclusive(self, spec):
        spec.validate(0.0)
        spec.validate(1.0)
        with pytest.raises(ValidationError, match="below minimum"):
            spec.validate(-0.1)
        with pytest.raises(ValidationError, match="above maximum"):
            spec.validate(1.5)

    def test_validation_error_is_value_error(self, spec):
        with pytest.raises(ValueError):
            spec.validate(2.0)


class TestGeneratedInit:

    def test_defaults_and_required(self):
        est = _ShiftOnly(weight=0.25)
        assert est.step == 1
        assert est.weight == 0.25

    def test_missing_required(self):
        with pytest.raises(TypeError, match="missing required"):
            _ShiftOnly()

    def test_unexpected_keyword(self):
        with pytest.raises(TypeError, match="unexpected keyword arguments: bogus"):
            _ShiftOnly(weight=0.1, bogus=3)

    def test_out_of_range(self):
        with pytest.raises(ValidationError, match="above maximum"):
            _ShiftOnly(step=9, weight=0.1)

    def test_signature_is_keyword_only(self):
        sig = inspect.signature(_ShiftOnly.__init__)
        params = list(sig.parameters.values())
        assert [p.name for p in params] == ['self', 'step', 'weight']
        assert all(p.kind is inspect.Parameter.KEYWORD_ONLY for p in params[1:])
        assert sig.parameters['step'].default == 1
        assert sig.parameters['weight'].default is inspect.Parameter.empty

    def test_subclass_gets_own_init(self):
        est = _ShiftWithLimit(weight=0.5, limit=4)
        assert (est.step, est.weight, est.limit) == (1, 0.5, 4)

    def test_custom_init_is_kept(self):
        class Custom(_ShiftOnly):
            def __init__(self):
                self.step = 2
                self.weight = 0.0

        assert Custom().step == 2


class TestResolveParams:

    def test_override_wins_and_instance_untouched(self):
        est = _ShiftOnly(step=2, weight=0.5)
        resolved = resolve_params(est, _ShiftOnly.__param_specs__, {'step': 4})
        assert resolved == {'step': 4, 'weight': 0.5}
        assert est.step == 2

    def test_unknown_overrides_ignored(self):
        est = _ShiftOnly(weight=0.5)
        resolved = resolve_params(est, _ShiftOnly.__param_specs__, {'other': 1})
        assert 'other' not in resolved

    def test_override_is_validated(self):
        est = _ShiftOnly(weight=0.5)
        with pytest.raises(ValidationError):
            est.estimate(np.zeros((4, 4)), np.zeros((4, 4)), weight=3.0)

    def test_estimate_uses_override(self):
        est = _ShiftOnly(weight=0.5)
        result = est.estimate(np.zeros((4, 4)), np.zeros((4, 4)), step=3)
        assert result.displacement.dx == 3
