"""
The MODEL layer contains pure data structures and the diffusion formulas.
It has NO knowledge of the GUI (Qt widgets) or of playback timing.
"""
from diffusionmap.model.edges import Edge, EdgeActivationModel, EdgeRule, active_edges
from diffusionmap.model.entities import Entity, EntityCategory, EntityRegistry, list_entities
from diffusionmap.model.eras import Era, EraIndex, EraMarker
from diffusionmap.model.errors import DiffusionMapError, InvalidCatalog, InvalidTime, UnknownEntity
from diffusionmap.model.intensity import IntensityModel, intensity
from diffusionmap.model.layers import Layer
from diffusionmap.model.snapshot import Snapshot, SnapshotBuilder, get_snapshot
from diffusionmap.model.state import PlaybackState

__all__ = [
    'Edge', 'EdgeActivationModel', 'EdgeRule', 'active_edges',
    'Entity', 'EntityCategory', 'EntityRegistry', 'list_entities',
    'Era', 'EraIndex', 'EraMarker',
    'DiffusionMapError', 'InvalidCatalog', 'InvalidTime', 'UnknownEntity',
    'IntensityModel', 'intensity',
    'Layer',
    'Snapshot', 'SnapshotBuilder', 'get_snapshot',
    'PlaybackState',
]
