"""Data layers: which intensity / edge rule set drives the map."""
from enum import StrEnum


class Layer(StrEnum):
    SCHOOLS = "schools"
    SYNDROMES = "syndromes"

    @property
    def label(self) -> str:
        return LAYER_LABELS[self]

    @property
    def color(self) -> str:
        return LAYER_COLORS[self]


LAYER_LABELS: dict[Layer, str] = {
    Layer.SCHOOLS: "医脉传播",
    Layer.SYNDROMES: "湿热证候",
}

# Accent colour shared by nodes, rings and the tooltip bar
LAYER_COLORS: dict[Layer, str] = {
    Layer.SCHOOLS: "#fbbf24",
    Layer.SYNDROMES: "#f43f5e",
}

# Tooltip subtitle for the syndromes layer (the schools layer shows the entity's school)
SYNDROME_SUBTITLE = "湿热高发区"

DEFAULT_LAYER = Layer.SCHOOLS
