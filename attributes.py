from __future__ import annotations
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator
from geometry import normalize_length


def normalize_attributes(attributes: Mapping[str, str]) -> dict[str, str]:
    """Lowercase the keys and drop blank values."""
    return {key.lower(): value for key, value in attributes.items()
            if value is not None and str(value).strip() != ''}


class AttributeScope(Mapping):
    """Resolved attributes active at one tree depth.

    Scopes are never mutated: ``overlay`` hands back a new scope for a child,
    so the parent's scope is still intact once the child returns.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeScope({dict(self._values)!r})"

    def overlay(self, attributes: Mapping[str, str]) -> AttributeScope:
        merged = dict(self._values)
        merged.update(normalize_attributes(attributes))
        return AttributeScope(merged)

    def get_number(self, name: str, default: float = 0.0) -> float:
        value = self._values.get(name)
        if value is None:
            return default
        return normalize_length(value, default)
