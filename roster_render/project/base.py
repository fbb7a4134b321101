"""
Host project abstraction layer.

The orchestrator never talks to a host application directly. It sees the
host's project through these interfaces:
- ProjectItem: a composition-like item (name, selection flag, layers)
- ProjectLayer: an ordered child of an item (text content, effects)
- ProjectEffect / EffectProperty: an effect instance and its named values
- HostProject: enumeration of items in project order

Design rules:
- Items are owned by the host; the core only holds references
- Lookups signal absence with None, never with an exception
- Layer indices are 1-based, matching host ordinals
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional


class EffectProperty(ABC):
    """A single named value on an effect instance."""

    @property
    @abstractmethod
    def value(self) -> Any:
        """Current value."""
        pass

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Write a new value.

        The host enforces its own constraints (e.g. menu bounds) and
        raises if it refuses the value.
        """
        pass


class ProjectEffect(ABC):
    """An effect instance attached to exactly one layer."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def property(self, name: str) -> Optional[EffectProperty]:
        """Return the named property, or None if the effect has no such property."""
        pass


class ProjectLayer(ABC):
    """An ordered child of a composition."""

    @property
    @abstractmethod
    def index(self) -> int:
        """1-based ordinal within the parent composition."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def source_text(self) -> Optional[str]:
        """
        Text content of the layer.

        Returns:
            The text, or None if this layer carries no text content.
        """
        pass

    @abstractmethod
    def effect(self, name: str) -> Optional[ProjectEffect]:
        """Return the named effect instance, or None if not applied."""
        pass


class ProjectItem(ABC):
    """
    Opaque handle to a project item.

    Only composition items are renderable and take part in lookup and
    selection; footage and folder items report is_composition=False.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def selected(self) -> bool:
        """Selection flag set by the operator in the host UI."""
        pass

    @property
    @abstractmethod
    def is_composition(self) -> bool:
        pass

    @property
    @abstractmethod
    def layer_count(self) -> int:
        pass

    @abstractmethod
    def layer(self, index: int) -> Optional[ProjectLayer]:
        """
        Return the layer at a 1-based index.

        Returns:
            The layer, or None if index is outside [1, layer_count].
        """
        pass

    @abstractmethod
    def layer_by_name(self, name: str) -> Optional[ProjectLayer]:
        """Return the first layer with this name, or None."""
        pass


class HostProject(ABC):
    """The active project of a host application."""

    @abstractmethod
    def items(self) -> List[ProjectItem]:
        """All project items in project enumeration order."""
        pass

    def __iter__(self) -> Iterator[ProjectItem]:
        return iter(self.items())
