# -*- coding: utf-8 -*-
"""
Parameter and Versioning Tests - Annotated parameters, generated
constructors, @processor_version, @processor_tags, and @globalprocessor.

Tests parameter collection and validation, keyword-only construction,
the missing-version warning, tag stamping, and collection of pre-pass
methods into __global_callbacks__ with inheritance.

Dependencies
------------
pytest

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import warnings
from typing import Annotated

import numpy as np
import pytest

from pixelfx.exceptions import ValidationError
from pixelfx.processing.base import PixelMapFilter
from pixelfx.processing.filters import (
    GaussianBlur,
    GlassEffect,
    GrayWorld,
    IncreaseBrightness,
    Invert,
    LinearCorrection,
    Sepia,
)
from pixelfx.processing.filters.statistical import (
    ChannelMeans,
    StatisticalFilter,
)
from pixelfx.processing.params import Desc, Options, Range, collect_param_specs
from pixelfx.processing.versioning import (
    globalprocessor,
    processor_tags,
    processor_version,
)
from pixelfx.vocabulary import FilterCategory


class TestParamCollection:
    """Tests for ParamSpec collection from Annotated fields."""

    def test_specs_in_declaration_order(self):
        """GaussianBlur declares radius then sigma."""
        names = [s.name for s in GaussianBlur.__param_specs__]
        assert names == ['radius', 'sigma']

    def test_spec_metadata(self):
        spec = GaussianBlur.__param_specs__[1]
        assert spec.param_type is float
        assert spec.default == 2.0
        assert spec.min_value == 0.01
        assert spec.description == 'Gaussian standard deviation'
        assert spec.required is False

    def test_inherited_param(self):
        """Statistical filters inherit on_degenerate."""
        spec, = LinearCorrection.__param_specs__
        assert spec.name == 'on_degenerate'
        assert spec.choices == ('passthrough', 'raise')

    def test_range_and_options_exclusive(self):
        class Bad:
            x: Annotated[int, Range(min=0), Options(1, 2)] = 1

        with pytest.raises(TypeError, match='mutually exclusive'):
            collect_param_specs(Bad)

    def test_empty_options_rejected(self):
        with pytest.raises(ValueError):
            Options()

    def test_plain_annotations_ignored(self):
        class Plain:
            x: int = 3
            y: Annotated[int, 'not a marker'] = 4

        assert collect_param_specs(Plain) == ()


class TestGeneratedInit:
    """Tests for the generated keyword-only __init__."""

    def test_defaults(self):
        f = GaussianBlur()
        assert f.radius == 3
        assert f.sigma == 2.0

    def test_override(self):
        f = GaussianBlur(radius=1, sigma=0.5)
        assert f.params == {'radius': 1, 'sigma': 0.5}
        assert f.kernel.width == 3

    def test_int_accepted_for_float(self):
        assert GaussianBlur(sigma=1).sigma == 1

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="radius"):
            GaussianBlur(radius='3')

    def test_bool_rejected_for_int(self):
        with pytest.raises(TypeError):
            IncreaseBrightness(delta=True)

    def test_below_minimum(self):
        with pytest.raises(ValidationError, match='below minimum'):
            GaussianBlur(sigma=0.0)

    def test_above_maximum(self):
        with pytest.raises(ValidationError, match='above maximum'):
            IncreaseBrightness(delta=300)

    def test_choices(self):
        with pytest.raises(ValidationError, match='allowed choices'):
            LinearCorrection(on_degenerate='ignore')

    def test_optional_param(self):
        """Optional[int] accepts None and ints, rejects strings."""
        assert GlassEffect().seed is None
        assert GlassEffect(seed=7).seed == 7
        with pytest.raises(TypeError):
            GlassEffect(seed='7')

    def test_unexpected_keyword(self):
        with pytest.raises(TypeError, match='unexpected'):
            Sepia(strength=3)

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            Sepia(10)

    def test_post_init_runs(self):
        """Kernels are built from parameters during construction."""
        assert GaussianBlur(radius=2).kernel.width == 5


class TestEqualityAndRepr:
    """Tests for parameter-based equality."""

    def test_equal_params_equal_filters(self):
        assert GaussianBlur(radius=2) == GaussianBlur(radius=2)
        assert hash(GaussianBlur(radius=2)) == hash(GaussianBlur(radius=2))

    def test_different_params(self):
        assert GaussianBlur(radius=2) != GaussianBlur(radius=3)

    def test_different_types(self):
        assert Sepia() != Invert()

    def test_repr(self):
        assert repr(GaussianBlur(radius=2)) == 'GaussianBlur(radius=2, sigma=2.0)'


class TestProcessorVersion:
    """Tests for @processor_version and the missing-version warning."""

    def test_explicit_version(self):
        assert Invert.__processor_version__ == '1.0.0'

    def test_default_version_is_string(self):
        @processor_version()
        class Defaulted(PixelMapFilter):
            def evaluate(self, source, xs, ys):
                return source.data[ys, xs]

        assert isinstance(Defaulted.__processor_version__, str)
        assert Defaulted.__processor_version__

    def test_missing_version_warns(self):
        class Unversioned(PixelMapFilter):
            def evaluate(self, source, xs, ys):
                return source.data[ys, xs]

        with pytest.warns(UserWarning, match='processor version'):
            Unversioned()

    def test_warns_only_once(self):
        class Unversioned(PixelMapFilter):
            def evaluate(self, source, xs, ys):
                return source.data[ys, xs]

        with pytest.warns(UserWarning):
            Unversioned()
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            Unversioned()

    def test_versioned_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            Invert()


class TestProcessorTags:
    """Tests for @processor_tags."""

    def test_tags_stamped(self):
        tags = GrayWorld.__processor_tags__
        assert tags['category'] is FilterCategory.STATISTICAL
        assert tags['description']

    def test_invalid_category(self):
        with pytest.raises(TypeError, match='FilterCategory'):
            processor_tags(category='pointwise')


class TestGlobalProcessor:
    """Tests for @globalprocessor collection."""

    def test_decorator_sets_flag(self):
        @globalprocessor
        def sweep(self, source):
            pass

        assert sweep.__is_global_callback__ is True

    def test_decorator_returns_same_function(self):
        def sweep(self, source):
            pass

        assert globalprocessor(sweep) is sweep

    def test_statistical_filters_have_global_pass(self):
        assert GrayWorld.__global_callbacks__ == ('compute_statistics',)
        assert GrayWorld().has_global_pass is True
        assert LinearCorrection().has_global_pass is True

    def test_pointwise_has_no_global_pass(self):
        assert Invert.__global_callbacks__ == ()
        assert Invert().has_global_pass is False

    def test_inherited_and_extended(self):
        """Subclasses keep parent callbacks first and add their own."""
        @processor_version('1.0.0')
        class Extended(GrayWorld):
            @globalprocessor
            def extra_sweep(self, source):
                return None

        assert Extended.__global_callbacks__ == (
            'compute_statistics', 'extra_sweep',
        )

    def test_override_not_duplicated(self):
        @processor_version('1.0.0')
        class Overridden(GrayWorld):
            @globalprocessor
            def compute_statistics(self, source):
                means = np.ones(3)
                return ChannelMeans(means=means, overall=1.0)

        assert Overridden.__global_callbacks__ == ('compute_statistics',)
        assert issubclass(Overridden, StatisticalFilter)
