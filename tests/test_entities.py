import pytest

from diffusionmap.model.entities import (
    CITIES, Entity, EntityCategory, EntityRegistry, REGISTRY, list_entities
)
from diffusionmap.model.errors import InvalidCatalog, UnknownEntity


def test_list_keeps_catalog_order():
    assert [e.key for e in list_entities()] == [e.key for e in CITIES]
    assert REGISTRY.keys()[0] == "xuzhou"
    assert REGISTRY.keys()[-1] == "nantong"


def test_get_returns_entity():
    suzhou = REGISTRY.get("suzhou")
    assert suzhou.name == "苏州"
    assert suzhou.category == EntityCategory.HUB
    assert suzhou.position == (440, 590)
    assert suzhou.is_hub


def test_get_unknown_key_raises():
    with pytest.raises(UnknownEntity) as exc_info:
        REGISTRY.get("shanghai")
    assert exc_info.value.key == "shanghai"
    # Still catchable as a plain KeyError
    assert isinstance(exc_info.value, KeyError)
    assert "shanghai" in str(exc_info.value)


def test_duplicate_keys_rejected():
    a = Entity("a", "A", 0, 0, EntityCategory.NODE, "x")
    with pytest.raises(InvalidCatalog):
        EntityRegistry([a, a])


def test_damp_south_subregion():
    south = {e.key for e in REGISTRY if e.damp_south}
    assert south == {"suzhou", "wuxi", "changzhou", "nanjing", "nantong", "zhenjiang"}


def test_hubs():
    hubs = [e.key for e in REGISTRY if e.is_hub]
    assert hubs == ["huaian", "yangzhou", "nanjing", "changzhou", "suzhou"]


def test_entities_are_immutable():
    entity = REGISTRY.get("xuzhou")
    with pytest.raises(AttributeError):
        entity.x = 0


def test_list_returns_a_copy():
    entities = REGISTRY.list()
    entities.clear()
    assert len(REGISTRY) == len(CITIES)


def test_entities_lie_inside_the_plane():
    for entity in REGISTRY:
        assert 0 <= entity.x <= 600
        assert 0 <= entity.y <= 700
