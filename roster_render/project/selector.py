"""
Selector control - the single shared menu parameter.

The selector is a menu property ("Menu") on an effect applied to a layer
of the control composition. Every composition in the project reads it to
decide which roster entry it shows, so writing it retargets the whole
project.

One writer, sequential access. No bounds checking here: the host's menu
control enforces its own range.
"""

import logging

from .base import EffectProperty

logger = logging.getLogger(__name__)


class SelectorControl:
    """Read/write handle on the selector menu property."""

    def __init__(self, menu_property: EffectProperty, label: str = "selector"):
        self._property = menu_property
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    def read(self) -> int:
        """Current menu index (1-based)."""
        return int(self._property.value)

    def write(self, value: int) -> None:
        """Point the selector at a menu index (1-based)."""
        logger.debug(f"[Selector] {self._label} = {value}")
        self._property.set_value(value)
