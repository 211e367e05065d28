import pytest
from hypothesis import given, strategies as st

from diffusionmap.config import MIN_YEAR, MAX_YEAR
from diffusionmap.model.eras import Era, EraIndex, ERA_INDEX, TIME_PERIODS
from diffusionmap.model.errors import InvalidCatalog

years = st.integers(min_value=MIN_YEAR, max_value=MAX_YEAR)


def test_resolve_inside_first_era():
    assert ERA_INDEX.resolve(1646).year == 1644


def test_resolve_exact_boundary_is_inclusive():
    assert ERA_INDEX.resolve(1644).year == 1644
    assert ERA_INDEX.resolve(1746).year == 1746
    assert ERA_INDEX.resolve(1745).year == 1644
    assert ERA_INDEX.resolve(2024).year == 2024


def test_resolve_before_first_breakpoint_falls_back():
    assert ERA_INDEX.resolve(1500) == TIME_PERIODS[0]


def test_resolve_after_last_breakpoint():
    assert ERA_INDEX.resolve(3000) == TIME_PERIODS[-1]


@pytest.mark.parametrize("year, expected", [
    (1700, 1644),
    (1797, 1746),
    (1798, 1798),
    (1851, 1798),
    (1852, 1852),
    (1910, 1852),
    (1911, 1911),
    (2023, 1911),
])
def test_resolve_table(year, expected):
    assert ERA_INDEX.resolve(year).year == expected


@given(years, years)
def test_resolve_is_monotonic(t1, t2):
    lo, hi = sorted((t1, t2))
    assert ERA_INDEX.resolve(lo).year <= ERA_INDEX.resolve(hi).year


@given(years)
def test_resolved_breakpoint_never_exceeds_year(year):
    assert ERA_INDEX.resolve(year).year <= year


def test_breakpoints_must_strictly_increase():
    with pytest.raises(InvalidCatalog):
        EraIndex([Era(1700, "a", ""), Era(1700, "b", "")])
    with pytest.raises(InvalidCatalog):
        EraIndex([Era(1800, "a", ""), Era(1700, "b", "")])


def test_empty_index_rejected():
    with pytest.raises(InvalidCatalog):
        EraIndex([])


def test_markers():
    markers = ERA_INDEX.markers(1800)
    assert [m.era.year for m in markers] == [e.year for e in TIME_PERIODS]
    assert [m.reached for m in markers] == [True, True, True, False, False, False]
    assert markers[0].fraction == 0.0
    assert markers[-1].fraction == 1.0
    assert markers[1].fraction == pytest.approx((1746 - 1644) / 380)
