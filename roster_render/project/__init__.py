"""
Host project access.

Read-only lookup over compositions, indexed roster text, and the single
selector parameter the batch run is allowed to write.
"""

from .base import (
    EffectProperty,
    HostProject,
    ProjectEffect,
    ProjectItem,
    ProjectLayer,
)
from .registry import ItemRegistry
from .text_source import IndexedTextSource, TextLookup
from .selector import SelectorControl

__all__ = [
    # Host interfaces
    "EffectProperty",
    "HostProject",
    "ProjectEffect",
    "ProjectItem",
    "ProjectLayer",
    # Accessors
    "ItemRegistry",
    "IndexedTextSource",
    "TextLookup",
    "SelectorControl",
]
