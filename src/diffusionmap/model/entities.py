"""Geographic Entities (Catalog) - cities of the Jiangsu map."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Iterator

from diffusionmap.model.errors import InvalidCatalog, UnknownEntity

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class EntityCategory(StrEnum):
    HUB = "hub"
    NODE = "node"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Entity:
    """
    One point of interest on the abstract map plane.

    Coordinates follow the 600 x 700 plane (x right, y down); they are
    not geodetic. `school` is display-only.
    """
    key: str
    name: str
    x: float
    y: float
    category: EntityCategory
    school: str
    # High-moisture southern subregion (south of the Yangtze, the coast below it)
    damp_south: bool = False

    @property
    def is_hub(self) -> bool:
        return self.category == EntityCategory.HUB

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


class EntityRegistry:
    """
    Read-only catalog of entities keyed by their stable key.

    Iteration and `list()` keep insertion order.
    """

    def __init__(self, entities: Iterable[Entity]) -> None:
        self._entities: dict[str, Entity] = {}
        for entity in entities:
            if entity.key in self._entities:
                raise InvalidCatalog(f"Duplicate entity key '{entity.key}'.")
            self._entities[entity.key] = entity

    def list(self) -> list[Entity]:
        return list(self._entities.values())

    def get(self, key: str) -> Entity:
        try:
            return self._entities[key]
        except KeyError:
            logger.error(f"Unknown entity requested: {key!r}")
            raise UnknownEntity(key) from None

    def keys(self) -> list[str]:
        return list(self._entities)

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)


# ------------------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------------------
# Jiangsu outline on the plane: Xuzhou juts out north-west, Lianyungang sits
# north-east, the Yangtze crosses the south and Lake Taihu is at the bottom.
CITIES: list[Entity] = [
    Entity("xuzhou", "徐州", 130, 100, EntityCategory.NODE, "彭城医派"),
    Entity("lianyungang", "连云港", 420, 80, EntityCategory.NODE, "海滨分支"),
    Entity("huaian", "淮安", 260, 280, EntityCategory.HUB, "山阳医派"),
    Entity("yancheng", "盐城", 400, 300, EntityCategory.NODE, "淮扬分支"),
    Entity("yangzhou", "扬州", 300, 460, EntityCategory.HUB, "江淮医派"),
    Entity("nanjing", "南京", 180, 500, EntityCategory.HUB, "金陵医派", damp_south=True),
    Entity("zhenjiang", "镇江", 260, 510, EntityCategory.NODE, "丹徒医家", damp_south=True),
    Entity("changzhou", "常州", 320, 550, EntityCategory.HUB, "孟河医派", damp_south=True),
    Entity("wuxi", "无锡", 380, 570, EntityCategory.NODE, "锡山医派", damp_south=True),
    Entity("suzhou", "苏州", 440, 590, EntityCategory.HUB, "吴门医派", damp_south=True),
    Entity("nantong", "南通", 500, 520, EntityCategory.NODE, "通州医派", damp_south=True),
]

REGISTRY = EntityRegistry(CITIES)


def list_entities() -> list[Entity]:
    """Entities in catalog order, for laying out the static scene."""
    return REGISTRY.list()
