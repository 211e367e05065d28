import pytest

from diffusionmap.config import VIEWBOX_WIDTH, VIEWBOX_HEIGHT
from diffusionmap.model.geography import BACKDROP, GRAND_CANAL, JIANGSU, TAIHU, YANGTZE, FeatureKind


def test_land_outline_is_closed():
    points = JIANGSU.polyline()
    assert points[0] == points[-1] == (120, 60)
    assert len(points) == len(JIANGSU.points) + 2


def test_curves_end_on_their_segment_end():
    points = YANGTZE.polyline(samples_per_curve=4)
    assert points[0] == (140, 520)
    assert points[4] == pytest.approx((250, 500))
    assert points[-1] == pytest.approx((560, 540))
    assert len(points) == 1 + 3 * 4


def test_open_polyline_is_not_closed():
    points = GRAND_CANAL.polyline()
    assert points[0] != points[-1]


def test_lake_closes_back_to_start():
    points = TAIHU.polyline()
    assert points[-1] == pytest.approx(points[0])


def test_backdrop_draws_land_first_and_stays_on_plane():
    assert BACKDROP[0].kind == FeatureKind.LAND
    for feature in BACKDROP:
        for x, y in feature.polyline():
            assert 0 <= x <= VIEWBOX_WIDTH
            assert 0 <= y <= VIEWBOX_HEIGHT
