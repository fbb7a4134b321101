"""
In-memory host project.

Concrete implementations of the host interfaces backed by plain Python
objects. Used by the manifest host (rehearsal runs from a JSON
description of a project) and by tests.

Behaves like a live host where it matters to the orchestrator:
- Menu properties refuse values outside [1, menu_items]
- Layer lookups outside [1, layer_count] return None
- Only composition items expose layers
"""

from typing import Any, Dict, List, Optional

from .base import EffectProperty, HostProject, ProjectEffect, ProjectItem, ProjectLayer


class MemoryEffectProperty(EffectProperty):
    """An effect property; a menu when menu_items is set."""

    def __init__(self, value: Any, menu_items: Optional[int] = None):
        self._value = value
        self.menu_items = menu_items
        self.writes: List[Any] = []

    @property
    def value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        if self.menu_items is not None:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Menu value must be an integer, got {value!r}")
            if value < 1 or value > self.menu_items:
                raise ValueError(
                    f"Menu value {value} outside 1..{self.menu_items}"
                )
        self._value = value
        self.writes.append(value)


class MemoryEffect(ProjectEffect):
    def __init__(self, name: str, properties: Optional[Dict[str, MemoryEffectProperty]] = None):
        self._name = name
        self._properties = properties or {}

    @property
    def name(self) -> str:
        return self._name

    def property(self, name: str) -> Optional[MemoryEffectProperty]:
        return self._properties.get(name)


class MemoryLayer(ProjectLayer):
    def __init__(
        self,
        index: int,
        name: str,
        source_text: Optional[str] = None,
        effects: Optional[List[MemoryEffect]] = None,
    ):
        self._index = index
        self._name = name
        self._source_text = source_text
        self._effects = effects or []

    @property
    def index(self) -> int:
        return self._index

    @property
    def name(self) -> str:
        return self._name

    @property
    def source_text(self) -> Optional[str]:
        return self._source_text

    def effect(self, name: str) -> Optional[MemoryEffect]:
        for effect in self._effects:
            if effect.name == name:
                return effect
        return None


class MemoryItem(ProjectItem):
    """A project item; compositions carry layers, other items do not."""

    def __init__(
        self,
        name: str,
        selected: bool = False,
        is_composition: bool = True,
        layers: Optional[List[MemoryLayer]] = None,
    ):
        self._name = name
        self._selected = selected
        self._is_composition = is_composition
        self._layers = layers or []

    @property
    def name(self) -> str:
        return self._name

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        self._selected = value

    @property
    def is_composition(self) -> bool:
        return self._is_composition

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    def layer(self, index: int) -> Optional[MemoryLayer]:
        if index < 1 or index > len(self._layers):
            return None
        return self._layers[index - 1]

    def layer_by_name(self, name: str) -> Optional[MemoryLayer]:
        for layer in self._layers:
            if layer.name == name:
                return layer
        return None

    def __repr__(self) -> str:
        return f"MemoryItem({self._name!r})"


class MemoryProject(HostProject):
    """Items in project enumeration order."""

    def __init__(self, items: Optional[List[MemoryItem]] = None):
        self._items = list(items or [])

    def items(self) -> List[MemoryItem]:
        return list(self._items)

    def add(self, item: MemoryItem) -> MemoryItem:
        self._items.append(item)
        return item
