"""
Project manifest - JSON description of a host project.

A manifest describes the parts of a host project the orchestrator
touches: compositions, their layers, text content and effects, which
compositions are selected, and the render queue's output templates.
Loading a manifest produces an in-memory project and render queue that
behave like a live host, so a batch can be rehearsed and inspected
without the host application.

Example:
    {
      "items": [
        {"name": "00_Simulator", "layers": [
          {"name": "PLAYER TO RENDER", "effects": [
            {"name": "DROPDOWN", "properties": {"Menu": {"value": 1, "menu_items": 47}}}
          ]}
        ]},
        {"name": "CompA", "selected": true},
        {"name": "logo.png", "type": "footage"}
      ],
      "roster": [{"number": "007", "first_name": "Jane", "last_name": "Doe"}],
      "render_queue": {"templates": ["LHF-FINAL"]}
    }

"roster" is a shorthand: each entry becomes one text layer in the number,
first name and last name list compositions (and a "first last" layer in
the name list composition) unless the manifest defines those
compositions explicitly.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .execution.base import RenderStatus
from .execution.memory import MemoryRenderQueue
from .project.memory import (
    MemoryEffect,
    MemoryEffectProperty,
    MemoryItem,
    MemoryLayer,
    MemoryProject,
)
from .settings import DEFAULT_RENDER_SETTINGS, RenderSettings

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when a manifest file cannot be read or does not validate."""
    pass


class ItemType(str, Enum):
    COMPOSITION = "composition"
    FOOTAGE = "footage"
    FOLDER = "folder"


class PropertyManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: Any = None
    menu_items: Optional[int] = Field(default=None, ge=1)
    """When set, the property is a menu accepting 1..menu_items."""


class EffectManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    properties: Dict[str, PropertyManifest] = Field(default_factory=dict)


class LayerManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    text: Optional[str] = None
    effects: List[EffectManifest] = Field(default_factory=list)


class ItemManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: ItemType = ItemType.COMPOSITION
    selected: bool = False
    layers: List[LayerManifest] = Field(default_factory=list)


class RosterEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    number: str = ""
    first_name: str = ""
    last_name: str = ""


class RenderQueueManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    templates: List[str] = Field(default_factory=lambda: [DEFAULT_RENDER_SETTINGS.output_template])
    outcomes: Dict[str, RenderStatus] = Field(default_factory=dict)
    """Forced per-composition render outcome (default: done)."""

    start_delay_polls: int = Field(default=0, ge=0)


class ProjectManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: List[ItemManifest] = Field(default_factory=list)
    roster: List[RosterEntry] = Field(default_factory=list)
    render_queue: RenderQueueManifest = Field(default_factory=RenderQueueManifest)

    @classmethod
    def load(cls, path: Path) -> "ProjectManifest":
        """
        Load and validate a manifest file.

        Raises:
            ManifestError: File missing or unreadable, invalid JSON, or schema error
        """
        path = Path(path)
        if not path.exists():
            raise ManifestError(f"Manifest file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {path}: {e}")
        except (UnicodeDecodeError, OSError) as e:
            raise ManifestError(f"Cannot read manifest file {path}: {e}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ManifestError(f"Invalid manifest schema in {path}: {e}")

    def build(
        self,
        settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
    ) -> Tuple[MemoryProject, MemoryRenderQueue]:
        """
        Build the in-memory project and render queue.

        Args:
            settings: Names the roster shorthand expands into

        Returns:
            (project, render_queue)
        """
        project = MemoryProject([_build_item(item) for item in self.items])

        if self.roster:
            declared = {item.name for item in self.items}
            for name, texts in _roster_columns(self.roster, settings).items():
                if name in declared:
                    logger.debug(f"[Manifest] '{name}' declared explicitly, roster shorthand skipped")
                    continue
                project.add(
                    MemoryItem(
                        name=name,
                        layers=[
                            MemoryLayer(index=i, name=str(i), source_text=text)
                            for i, text in enumerate(texts, start=1)
                        ],
                    )
                )

        queue = MemoryRenderQueue(
            templates=self.render_queue.templates,
            outcomes=self.render_queue.outcomes,
            start_delay_polls=self.render_queue.start_delay_polls,
        )

        logger.info(
            f"[Manifest] Built project with {len(project.items())} item(s), "
            f"{len(self.roster)} roster entr{'y' if len(self.roster) == 1 else 'ies'}"
        )
        return project, queue


def _build_item(item: ItemManifest) -> MemoryItem:
    is_composition = item.type == ItemType.COMPOSITION
    layers = []
    if is_composition:
        for index, layer in enumerate(item.layers, start=1):
            effects = [
                MemoryEffect(
                    name=effect.name,
                    properties={
                        prop_name: MemoryEffectProperty(prop.value, menu_items=prop.menu_items)
                        for prop_name, prop in effect.properties.items()
                    },
                )
                for effect in layer.effects
            ]
            layers.append(
                MemoryLayer(
                    index=index,
                    name=layer.name or str(index),
                    source_text=layer.text,
                    effects=effects,
                )
            )

    return MemoryItem(
        name=item.name,
        selected=item.selected,
        is_composition=is_composition,
        layers=layers,
    )


def _roster_columns(
    roster: List[RosterEntry],
    settings: RenderSettings,
) -> Dict[str, List[str]]:
    return {
        settings.name_list_composition: [
            f"{entry.first_name} {entry.last_name}".strip() for entry in roster
        ],
        settings.first_name_composition: [entry.first_name for entry in roster],
        settings.last_name_composition: [entry.last_name for entry in roster],
        settings.number_composition: [entry.number for entry in roster],
    }
