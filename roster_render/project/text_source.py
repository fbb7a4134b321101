"""
Indexed text lookup over roster list compositions.

A roster list composition stores one text layer per roster entry:
layer 1 holds entry 1, layer 2 holds entry 2, and so on.

Lookups are best-effort:
- Index outside [1, layer_count] -> absent
- Layer without text content -> absent
- Absent lookups render as "" in names (never an error)

TextLookup keeps "intentionally blank" (a layer whose text is "")
distinguishable from "lookup failed" (absent).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .base import ProjectItem
from ..deliver.naming import NamingTuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextLookup:
    """Result of a single indexed text lookup."""

    value: Optional[str]
    """Resolved text, or None when absent."""

    reason: Optional[str] = None
    """Why the lookup is absent (None when found)."""

    @property
    def found(self) -> bool:
        return self.value is not None

    def or_empty(self) -> str:
        """Value, with absent mapped to the empty string."""
        return self.value if self.value is not None else ""

    @classmethod
    def absent(cls, reason: str) -> "TextLookup":
        return cls(value=None, reason=reason)


class IndexedTextSource:
    """
    Resolves display strings for 1-based roster indices.

    Bound to the three roster columns (first name, last name, number) so
    a whole NamingTuple can be resolved in one call.
    """

    def __init__(
        self,
        first_names: ProjectItem,
        last_names: ProjectItem,
        numbers: ProjectItem,
    ):
        self._first_names = first_names
        self._last_names = last_names
        self._numbers = numbers

    @staticmethod
    def text_at(composition: ProjectItem, index: int) -> TextLookup:
        """
        Text content of the layer whose ordinal equals index.

        Args:
            composition: Roster list composition
            index: 1-based roster index

        Returns:
            TextLookup, absent when out of range or the layer has no text
        """
        if index < 1 or index > composition.layer_count:
            return TextLookup.absent(
                f"index {index} outside 1..{composition.layer_count} in '{composition.name}'"
            )

        layer = composition.layer(index)
        if layer is None:
            return TextLookup.absent(f"no layer {index} in '{composition.name}'")

        text = layer.source_text
        if text is None:
            return TextLookup.absent(
                f"layer {index} in '{composition.name}' has no text content"
            )

        return TextLookup(value=text)

    def naming_at(self, index: int) -> NamingTuple:
        """
        Resolve the naming fields for one roster entry.

        Absent lookups become empty strings and are logged at WARNING so a
        short list composition shows up in the run log.
        """
        lookups = {
            "number": self.text_at(self._numbers, index),
            "first_name": self.text_at(self._first_names, index),
            "last_name": self.text_at(self._last_names, index),
        }

        for field_name, lookup in lookups.items():
            if not lookup.found:
                logger.warning(
                    f"[Roster] {field_name} for entry {index} is blank: {lookup.reason}"
                )

        return NamingTuple(
            number=lookups["number"].or_empty(),
            first_name=lookups["first_name"].or_empty(),
            last_name=lookups["last_name"].or_empty(),
        )
