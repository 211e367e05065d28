"""
Intensity Curves
================
Per-entity intensity in [0, 1] for a year on a given layer.

Each layer owns one IntensityCurve. Curves take scalars or numpy arrays
of years, so the same code drives the map (one year) and the history
plot (the whole timeline). IntensityModel validates the year and clamps
whatever a curve returns.

Classes:
    SchoolRule: One row of the schools-layer rule table.
    IntensityCurve: Abstract base; subclasses implement `evaluate`.
    SchoolsCurve: First matching rule wins, baseline otherwise.
    SyndromesCurve: Slow sinusoid, stronger south of the Yangtze.
    IntensityModel: Layer-to-curve dispatch with validation and clamping.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np

from diffusionmap.model.entities import Entity, EntityRegistry, REGISTRY
from diffusionmap.model.errors import InvalidCatalog
from diffusionmap.model.layers import Layer
from diffusionmap.model.timeline import validate_year

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


# ==========================================
# SCHOOLS LAYER RULE TABLE
# ==========================================
@dataclass(frozen=True)
class SchoolRule:
    """
    Intensity of one entity on the schools layer.

    The entity reads `inside` for years strictly between `start` and
    `end` and `outside` otherwise. A missing bound is open-ended.
    """
    key: str
    inside: float
    outside: float
    start: Optional[int] = None
    end: Optional[int] = None

    def in_window(
        self,
        years: float | npt.NDArray[np.float64],
    ) -> bool | npt.NDArray[np.bool_]:
        lower = -np.inf if self.start is None else self.start
        upper = np.inf if self.end is None else self.end
        return np.logical_and(years > lower, years < upper)


# Evaluated top to bottom; the first rule naming the entity wins.
SCHOOL_RULES: tuple[SchoolRule, ...] = (
    SchoolRule("suzhou", inside=1.0, outside=0.6, start=1700, end=1900),     # Wumen at its height
    SchoolRule("huaian", inside=0.9, outside=0.3, start=1780, end=1880),     # Shanyang school
    SchoolRule("changzhou", inside=0.95, outside=0.3, start=1820),           # Menghe, strongest late Qing
    SchoolRule("yangzhou", inside=0.7, outside=0.7),                         # canal hub, always strong
)

SCHOOL_BASELINE = 0.3


# ==========================================
# ABSTRACT CLASS FOR INTENSITY CURVES
# ==========================================
class IntensityCurve(ABC):
    """
    Abstract base class for per-layer intensity formulas.

    Curves are raw: they may leave [0, 1]. Clamping is done once by
    IntensityModel.
    """
    NAME: str = "Intensity Curve"

    @abstractmethod
    def evaluate(
        self,
        entity: Entity,
        years: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        """
        Raw intensity of `entity` at the given year(s).

        Args:
            entity: Entity from the registry.
            years: A single year or an array of years.

        Returns:
            Unclamped intensity, same shape as `years`.
        """
        pass


class SchoolsCurve(IntensityCurve):
    """Piecewise-constant influence of the schools of thought."""
    NAME = "Schools of thought"

    def __init__(self, rules: Iterable[SchoolRule] = SCHOOL_RULES, baseline: float = SCHOOL_BASELINE) -> None:
        self.rules: tuple[SchoolRule, ...] = tuple(rules)
        self.baseline = baseline

    def rule_for(self, key: str) -> Optional[SchoolRule]:
        for rule in self.rules:
            if rule.key == key:
                return rule
        return None

    def evaluate(
        self,
        entity: Entity,
        years: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        rule = self.rule_for(entity.key)
        if rule is None:
            return np.full_like(years, self.baseline, dtype=np.float64)
        return np.where(rule.in_window(years), rule.inside, rule.outside)


class SyndromesCurve(IntensityCurve):
    """
    Damp-heat syndrome prevalence: regional baseline plus a slow sinusoid.

    value = baseline + amplitude * sin(year / period_scale)
    """
    NAME = "Damp-heat syndromes"

    def __init__(
        self,
        south_baseline: float = 0.5,
        south_amplitude: float = 0.4,
        baseline: float = 0.3,
        amplitude: float = 0.2,
        period_scale: float = 20.0,
    ) -> None:
        self.south_baseline = south_baseline
        self.south_amplitude = south_amplitude
        self.baseline = baseline
        self.amplitude = amplitude
        self.period_scale = period_scale

    def evaluate(
        self,
        entity: Entity,
        years: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        wave = np.sin(np.asarray(years, dtype=np.float64) / self.period_scale)
        if entity.damp_south:
            return self.south_baseline + wave * self.south_amplitude
        return self.baseline + wave * self.amplitude


# ==========================================
# MODEL
# ==========================================
class IntensityModel:
    """Clamped per-entity intensity for any (entity, year, layer)."""

    def __init__(
        self,
        curves: Optional[dict[Layer, IntensityCurve]] = None,
        registry: EntityRegistry = REGISTRY,
    ) -> None:
        if curves is None:
            curves = {
                Layer.SCHOOLS: SchoolsCurve(),
                Layer.SYNDROMES: SyndromesCurve(),
            }
        self.curves: dict[Layer, IntensityCurve] = curves
        missing = [layer for layer in Layer if layer not in self.curves]
        if missing:
            raise InvalidCatalog(f"No intensity curve for layer(s): {', '.join(missing)}")

        # Rules must only name registered entities
        for curve in self.curves.values():
            for rule in getattr(curve, "rules", ()):
                registry.get(rule.key)

    def intensity(self, entity: Entity, year: int, layer: Layer) -> float:
        year = validate_year(year)
        raw = self.curves[Layer(layer)].evaluate(entity, float(year))
        return float(np.clip(raw, 0.0, 1.0))

    def series(
        self,
        entity: Entity,
        years: npt.ArrayLike,
        layer: Layer,
    ) -> npt.NDArray[np.float64]:
        """Vectorised intensity over many years, e.g. for a history plot."""
        years_arr = np.asarray(years, dtype=np.float64)
        raw = self.curves[Layer(layer)].evaluate(entity, years_arr)
        return np.clip(np.asarray(raw, dtype=np.float64), 0.0, 1.0)

    def intensities(self, entities: Iterable[Entity], year: int, layer: Layer) -> dict[str, float]:
        return {entity.key: self.intensity(entity, year, layer) for entity in entities}


INTENSITY_MODEL = IntensityModel()


def intensity(entity: Entity, year: int, layer: Layer) -> float:
    return INTENSITY_MODEL.intensity(entity, year, layer)
