"""
Snapshot Assembly
=================
Combines the era index, the intensity model and the edge model into the
render-ready state for one (year, layer) pair.

Snapshots are built fresh on every query and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from diffusionmap.config import ACTIVE_THRESHOLD, HUB_RING_SCALE, PULSE_RING_SCALE
from diffusionmap.model.edges import Edge, EdgeActivationModel, EDGE_MODEL
from diffusionmap.model.entities import Entity, EntityRegistry, REGISTRY
from diffusionmap.model.eras import Era, EraIndex, EraMarker, ERA_INDEX
from diffusionmap.model.intensity import IntensityModel, INTENSITY_MODEL
from diffusionmap.model.layers import Layer, SYNDROME_SUBTITLE
from diffusionmap.model.state import PlaybackState
from diffusionmap.model.timeline import timeline_fraction, validate_year


def pulse_radius(intensity: float) -> float:
    return intensity * PULSE_RING_SCALE


def hub_ring_radius(intensity: float) -> float:
    return intensity * HUB_RING_SCALE


@dataclass(frozen=True)
class Snapshot:
    time: int
    layer: Layer
    era: Era
    intensities: Mapping[str, float]
    active_edges: tuple[Edge, ...]
    markers: tuple[EraMarker, ...] = field(default=())

    @property
    def active_count(self) -> int:
        """Number of entities above the activity threshold."""
        return sum(1 for value in self.intensities.values() if value > ACTIVE_THRESHOLD)

    @property
    def timeline_fraction(self) -> float:
        return timeline_fraction(self.time)

    def intensity_of(self, key: str) -> float:
        return self.intensities[key]

    def is_labelled(self, entity: Entity) -> bool:
        return entity.is_hub or self.intensities[entity.key] > ACTIVE_THRESHOLD

    def labelled_keys(self, entities: list[Entity]) -> list[str]:
        return [entity.key for entity in entities if self.is_labelled(entity)]

    def subtitle(self, entity: Entity) -> str:
        """Tooltip line under the entity name."""
        if self.layer == Layer.SCHOOLS:
            return entity.school
        return SYNDROME_SUBTITLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "layer": self.layer.value,
            "era": {"year": self.era.year, "label": self.era.label, "description": self.era.description},
            "intensities": dict(self.intensities),
            "active_edges": [list(edge.keys) for edge in self.active_edges],
            "active_count": self.active_count,
        }


class SnapshotBuilder:
    """Entry point for the presentation layer: one call, one complete frame."""

    def __init__(
        self,
        registry: EntityRegistry = REGISTRY,
        eras: EraIndex = ERA_INDEX,
        intensity_model: IntensityModel = INTENSITY_MODEL,
        edge_model: EdgeActivationModel = EDGE_MODEL,
    ) -> None:
        self.registry = registry
        self.eras = eras
        self.intensity_model = intensity_model
        self.edge_model = edge_model

    def build(self, year: int, layer: Layer) -> Snapshot:
        year = validate_year(year)
        layer = Layer(layer)
        values = self.intensity_model.intensities(self.registry.list(), year, layer)
        return Snapshot(
            time=year,
            layer=layer,
            era=self.eras.resolve(year),
            intensities=MappingProxyType(values),
            active_edges=tuple(self.edge_model.active_edges(year, layer)),
            markers=tuple(self.eras.markers(year)),
        )

    def get_snapshot(self, state: PlaybackState, layer: Layer) -> Snapshot:
        return self.build(state.current_time, layer)


_DEFAULT_BUILDER: Optional[SnapshotBuilder] = None


def default_builder() -> SnapshotBuilder:
    global _DEFAULT_BUILDER
    if _DEFAULT_BUILDER is None:
        _DEFAULT_BUILDER = SnapshotBuilder()
    return _DEFAULT_BUILDER


def get_snapshot(state: PlaybackState, layer: Layer) -> Snapshot:
    return default_builder().get_snapshot(state, layer)
