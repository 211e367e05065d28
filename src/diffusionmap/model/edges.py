"""
Edge Activation Model
=====================
Directed influence edges between entities. Each edge switches on once
the year passes its threshold and stays on for every later year.
Only the schools layer has edges.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from diffusionmap.config import EDGE_ARC_LIFT
from diffusionmap.model.entities import Entity, EntityRegistry, REGISTRY
from diffusionmap.model.errors import InvalidCatalog
from diffusionmap.model.layers import Layer
from diffusionmap.model.timeline import validate_year


@dataclass(frozen=True)
class EdgeRule:
    """Edge from `source` to `target`, active for years after `threshold`."""
    source: str
    target: str
    threshold: int


@dataclass(frozen=True)
class Edge:
    source: Entity
    target: Entity

    @property
    def keys(self) -> tuple[str, str]:
        return (self.source.key, self.target.key)

    def control_point(self, lift: float = EDGE_ARC_LIFT) -> tuple[float, float]:
        """Control point of the quadratic arc: chord midpoint raised by `lift` (y grows down)."""
        mid_x = (self.source.x + self.target.x) / 2
        mid_y = (self.source.y + self.target.y) / 2 - lift
        return (mid_x, mid_y)


EDGE_RULES: tuple[EdgeRule, ...] = (
    EdgeRule("suzhou", "yangzhou", 1720),    # Ye Tianshi's teaching travels north
    EdgeRule("yangzhou", "huaian", 1790),    # reaches Wu Jutong
    EdgeRule("suzhou", "changzhou", 1840),   # Menghe absorbs the Wumen school
)


class EdgeActivationModel:
    """
    Threshold activation of the edge rules on one layer.

    Args:
        rules: Edge rules in display order.
        registry: Registry the rule keys are resolved against.
        layer: The only layer that has edges.

    Raises:
        InvalidCatalog: Two rules share the same source and target.
        UnknownEntity: A rule names a key missing from the registry.
    """
    def __init__(
        self,
        rules: Iterable[EdgeRule] = EDGE_RULES,
        registry: EntityRegistry = REGISTRY,
        layer: Layer = Layer.SCHOOLS,
    ) -> None:
        self.rules: tuple[EdgeRule, ...] = tuple(rules)
        self.layer = layer

        seen: set[tuple[str, str]] = set()
        for rule in self.rules:
            pair = (rule.source, rule.target)
            if pair in seen:
                raise InvalidCatalog(f"Duplicate edge rule {rule.source} -> {rule.target}.")
            seen.add(pair)

        # Resolve once; raises UnknownEntity for a rule naming a missing key
        self._resolved: tuple[tuple[EdgeRule, Edge], ...] = tuple(
            (rule, Edge(registry.get(rule.source), registry.get(rule.target)))
            for rule in self.rules
        )

    def active_edges(self, year: int, layer: Layer) -> list[Edge]:
        """Edges whose threshold lies strictly below `year`, in rule order."""
        year = validate_year(year)
        if Layer(layer) != self.layer:
            return []
        return [edge for rule, edge in self._resolved if year > rule.threshold]


EDGE_MODEL = EdgeActivationModel()


def active_edges(year: int, layer: Layer) -> list[Edge]:
    return EDGE_MODEL.active_edges(year, layer)
