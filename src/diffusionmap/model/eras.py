"""
Era Index
=========
Sorted historical breakpoints with labels, and the lookup that maps a
year to the era it belongs to.

A year belongs to the latest era whose breakpoint does not exceed it;
an exact breakpoint belongs to the era that starts there.
"""
from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterable

from diffusionmap.model.errors import InvalidCatalog
from diffusionmap.model.timeline import timeline_fraction


@dataclass(frozen=True)
class Era:
    year: int
    label: str
    description: str


@dataclass(frozen=True)
class EraMarker:
    """Position of an era breakpoint on the timeline bar."""
    era: Era
    fraction: float
    reached: bool


class EraIndex:
    def __init__(self, eras: Iterable[Era]) -> None:
        self._eras: tuple[Era, ...] = tuple(eras)
        if not self._eras:
            raise InvalidCatalog("Era index needs at least one era.")

        self._breakpoints: list[int] = [era.year for era in self._eras]
        for prev, curr in zip(self._breakpoints, self._breakpoints[1:]):
            if curr <= prev:
                raise InvalidCatalog(
                    f"Era breakpoints must be strictly increasing ({prev} then {curr})."
                )

    @property
    def eras(self) -> tuple[Era, ...]:
        return self._eras

    def resolve(self, year: int) -> Era:
        """
        Return the most recent era whose breakpoint is <= year.

        Years before the first breakpoint fall back to the earliest era.
        """
        idx = bisect.bisect_right(self._breakpoints, year) - 1
        if idx < 0:
            return self._eras[0]
        return self._eras[idx]

    def markers(self, year: int) -> list[EraMarker]:
        return [
            EraMarker(era=era, fraction=timeline_fraction(era.year), reached=year >= era.year)
            for era in self._eras
        ]

    def __len__(self) -> int:
        return len(self._eras)


TIME_PERIODS: list[Era] = [
    Era(1644, "清初 (1644)", "明末清初，疫病频发，温疫论始出"),
    Era(1746, "乾隆 (1746)", "叶天士《温热论》传世，吴门医派全盛"),
    Era(1798, "嘉庆 (1798)", "吴鞠通《温病条辨》成书，山阳医派兴起"),
    Era(1852, "咸丰 (1852)", "孟河医派崛起，南北温病学术交融"),
    Era(1911, "民国 (1911)", "京杭大运河交通变迁，中西医汇通"),
    Era(2024, "现代 (2024)", "长三角医疗一体化，AI 赋能中医传承"),
]

ERA_INDEX = EraIndex(TIME_PERIODS)
