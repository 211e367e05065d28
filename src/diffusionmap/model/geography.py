"""
Map Backdrop Geometry
=====================
Static outline of the province and its water systems on the abstract
600 x 700 plane. Purely decorative: nothing in the diffusion model reads
these shapes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

Point = tuple[float, float]


class FeatureKind(StrEnum):
    LAND = "land"
    RIVER = "river"
    CANAL = "canal"
    LAKE = "lake"


@dataclass(frozen=True)
class QuadSegment:
    control: Point
    end: Point


@dataclass(frozen=True)
class Feature:
    """
    A path starting at `start`, continued by straight `points` and/or
    quadratic `curves` (only one of the two is used per feature).
    """
    name: str
    kind: FeatureKind
    start: Point
    points: tuple[Point, ...] = field(default=())
    curves: tuple[QuadSegment, ...] = field(default=())
    closed: bool = False

    def polyline(self, samples_per_curve: int = 12) -> list[Point]:
        """Flatten the path into points (quadratic curves are sampled)."""
        out: list[Point] = [self.start]
        out.extend(self.points)
        cursor = self.start if not self.points else self.points[-1]
        for seg in self.curves:
            for i in range(1, samples_per_curve + 1):
                t = i / samples_per_curve
                u = 1.0 - t
                x = u * u * cursor[0] + 2 * u * t * seg.control[0] + t * t * seg.end[0]
                y = u * u * cursor[1] + 2 * u * t * seg.control[1] + t * t * seg.end[1]
                out.append((x, y))
            cursor = seg.end
        if self.closed and out[-1] != out[0]:
            out.append(out[0])
        return out


JIANGSU = Feature(
    name="江苏",
    kind=FeatureKind.LAND,
    start=(120, 60),
    points=(
        (180, 50), (220, 90), (380, 60), (460, 50), (480, 150),
        (520, 180), (520, 300), (580, 450), (560, 540), (520, 560),
        (540, 580), (500, 620), (440, 610), (440, 650), (400, 660),
        (360, 630), (320, 650), (280, 620), (220, 580), (160, 560),
        (140, 520), (100, 500), (120, 400), (80, 300), (100, 200),
        (80, 150),
    ),
    closed=True,
)

YANGTZE = Feature(
    name="长江",
    kind=FeatureKind.RIVER,
    start=(140, 520),
    curves=(
        QuadSegment((200, 480), (250, 500)),
        QuadSegment((300, 520), (400, 500)),
        QuadSegment((500, 480), (560, 540)),
    ),
)

GRAND_CANAL = Feature(
    name="京杭大运河",
    kind=FeatureKind.CANAL,
    start=(320, 650),
    points=((300, 560), (280, 510), (300, 460), (280, 350), (260, 280), (240, 150)),
)

TAIHU = Feature(
    name="太湖",
    kind=FeatureKind.LAKE,
    start=(380, 600),
    curves=(
        QuadSegment((360, 630), (400, 650)),
        QuadSegment((440, 640), (420, 600)),
        QuadSegment((400, 580), (380, 600)),
    ),
    closed=True,
)

HONGZE = Feature(
    name="洪泽湖",
    kind=FeatureKind.LAKE,
    start=(220, 300),
    curves=(
        QuadSegment((260, 280), (280, 320)),
        QuadSegment((250, 360), (220, 340)),
    ),
    closed=True,
)

# Drawing order, bottom to top
BACKDROP: tuple[Feature, ...] = (JIANGSU, YANGTZE, TAIHU, HONGZE, GRAND_CANAL)
