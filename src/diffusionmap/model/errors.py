"""Exceptions raised by the diffusion model."""
from __future__ import annotations


class DiffusionMapError(Exception):
    """Base class for all errors raised by this package."""


class InvalidTime(DiffusionMapError, ValueError):
    """A year outside [MIN_YEAR, MAX_YEAR] (or not a whole number) reached a model query."""

    def __init__(self, value: object, min_year: int, max_year: int) -> None:
        super().__init__(f"Year {value!r} is outside the timeline [{min_year}, {max_year}].")
        self.value = value
        self.min_year = min_year
        self.max_year = max_year


class UnknownEntity(DiffusionMapError, KeyError):
    """Lookup of an entity key that is not in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Entity '{self.key}' not found in registry."


class InvalidCatalog(DiffusionMapError, ValueError):
    """A static table (entities, eras, rules) violates its own invariants."""
