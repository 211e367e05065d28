import math

import numpy as np
import pytest
from hypothesis import given, strategies as st

from diffusionmap.config import MIN_YEAR, MAX_YEAR
from diffusionmap.model.entities import REGISTRY
from diffusionmap.model.errors import InvalidCatalog, InvalidTime, UnknownEntity
from diffusionmap.model.intensity import (
    IntensityModel, SchoolRule, SchoolsCurve, SyndromesCurve, intensity
)
from diffusionmap.model.layers import Layer

years = st.integers(min_value=MIN_YEAR, max_value=MAX_YEAR)
entities = st.sampled_from(REGISTRY.list())
layers = st.sampled_from(list(Layer))


def test_suzhou_reference_values():
    suzhou = REGISTRY.get("suzhou")
    assert intensity(suzhou, 1746, Layer.SCHOOLS) == 1.0
    assert intensity(suzhou, 1950, Layer.SCHOOLS) == 0.6


@pytest.mark.parametrize("key, year, expected", [
    ("suzhou", 1700, 0.6),      # window is open at both ends
    ("suzhou", 1701, 1.0),
    ("suzhou", 1899, 1.0),
    ("suzhou", 1900, 0.6),
    ("huaian", 1780, 0.3),
    ("huaian", 1781, 0.9),
    ("huaian", 1880, 0.3),
    ("changzhou", 1820, 0.3),
    ("changzhou", 1821, 0.95),
    ("changzhou", 2024, 0.95),
    ("yangzhou", 1644, 0.7),
    ("yangzhou", 2024, 0.7),
    ("xuzhou", 1800, 0.3),
    ("nanjing", 1800, 0.3),
])
def test_schools_rule_table(key, year, expected):
    assert intensity(REGISTRY.get(key), year, Layer.SCHOOLS) == expected


@pytest.mark.parametrize("key, base, amp", [
    ("suzhou", 0.5, 0.4),
    ("nantong", 0.5, 0.4),
    ("xuzhou", 0.3, 0.2),
    ("huaian", 0.3, 0.2),
])
@pytest.mark.parametrize("year", [1644, 1700, 1746, 1850, 2024])
def test_syndromes_formula(key, base, amp, year):
    expected = base + math.sin(year / 20) * amp
    assert intensity(REGISTRY.get(key), year, Layer.SYNDROMES) == pytest.approx(expected)


def test_layer_accepts_plain_string():
    suzhou = REGISTRY.get("suzhou")
    assert intensity(suzhou, 1746, "schools") == 1.0


@given(entities, years, layers)
def test_intensity_stays_in_unit_range(entity, year, layer):
    assert 0.0 <= intensity(entity, year, layer) <= 1.0


@given(entities, years, layers)
def test_intensity_is_deterministic(entity, year, layer):
    first = intensity(entity, year, layer)
    second = intensity(entity, year, layer)
    assert first == second
    assert type(first) is float


def test_overshooting_curve_is_clamped():
    # baseline + amplitude > 1 leaves the unit range for part of every period
    model = IntensityModel(curves={
        Layer.SCHOOLS: SchoolsCurve(),
        Layer.SYNDROMES: SyndromesCurve(south_baseline=0.9, south_amplitude=0.4, baseline=-0.1, amplitude=0.2),
    })
    suzhou = REGISTRY.get("suzhou")
    xuzhou = REGISTRY.get("xuzhou")
    south_values = [model.intensity(suzhou, y, Layer.SYNDROMES) for y in range(MIN_YEAR, MAX_YEAR + 1)]
    north_values = [model.intensity(xuzhou, y, Layer.SYNDROMES) for y in range(MIN_YEAR, MAX_YEAR + 1)]
    assert max(south_values) == 1.0
    assert min(north_values) == 0.0
    assert all(0.0 <= v <= 1.0 for v in south_values + north_values)


def test_series_matches_scalar_path():
    model = IntensityModel()
    span = np.arange(MIN_YEAR, MAX_YEAR + 1)
    for entity in REGISTRY:
        for layer in Layer:
            values = model.series(entity, span, layer)
            assert values.shape == span.shape
            expected = [model.intensity(entity, int(y), layer) for y in span[::37]]
            np.testing.assert_allclose(values[::37], expected, rtol=0, atol=1e-12)
            assert values.min() >= 0.0
            assert values.max() <= 1.0


def test_first_rule_wins():
    curve = SchoolsCurve(rules=[
        SchoolRule("suzhou", inside=0.1, outside=0.1),
        SchoolRule("suzhou", inside=0.9, outside=0.9),
    ])
    model = IntensityModel(curves={Layer.SCHOOLS: curve, Layer.SYNDROMES: SyndromesCurve()})
    assert model.intensity(REGISTRY.get("suzhou"), 1800, Layer.SCHOOLS) == 0.1


def test_rule_naming_unknown_entity_fails_at_construction():
    curve = SchoolsCurve(rules=[SchoolRule("atlantis", inside=1.0, outside=0.0)])
    with pytest.raises(UnknownEntity):
        IntensityModel(curves={Layer.SCHOOLS: curve, Layer.SYNDROMES: SyndromesCurve()})


def test_missing_layer_curve_rejected():
    with pytest.raises(InvalidCatalog):
        IntensityModel(curves={Layer.SCHOOLS: SchoolsCurve()})


def test_empty_curve_table_rejected():
    with pytest.raises(InvalidCatalog, match="schools"):
        IntensityModel(curves={})


@pytest.mark.parametrize("bad_year", [MIN_YEAR - 1, MAX_YEAR + 1, 1800.5, "1800", None])
def test_out_of_range_year_raises(bad_year):
    with pytest.raises(InvalidTime):
        intensity(REGISTRY.get("suzhou"), bad_year, Layer.SCHOOLS)
