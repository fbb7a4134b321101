"""
In-memory render queue.

Stands in for a host engine's render queue during rehearsal runs and
tests. It renders nothing: entries only move through statuses, and every
rendered job is recorded in history for inspection.

Engine behaviours reproduced:
- Unknown output templates are refused
- render() picks up every QUEUED entry; entries without a destination fail
- Per-composition outcomes can be forced (e.g. "failed")
- start_delay_polls keeps entries QUEUED for that many status reads after
  render(), to model an engine that starts asynchronously
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .base import QueueEntry, RenderQueueBackend, RenderStatus
from ..project.base import ProjectItem

logger = logging.getLogger(__name__)


class MemoryQueueEntry(QueueEntry):
    def __init__(self, queue: "MemoryRenderQueue", item: ProjectItem):
        self._queue = queue
        self._item = item
        self._status = RenderStatus.QUEUED
        self.template: Optional[str] = None
        self.destination: Optional[Path] = None
        self._pending_polls: Optional[int] = None
        self._pending_outcome: Optional[RenderStatus] = None

    @property
    def item_name(self) -> str:
        return self._item.name

    @property
    def status(self) -> RenderStatus:
        if self._pending_polls is not None:
            if self._pending_polls <= 0:
                self._status = self._pending_outcome
                self._pending_polls = None
            else:
                self._pending_polls -= 1
        return self._status

    def apply_template(self, template_name: str) -> None:
        if template_name not in self._queue.templates:
            raise ValueError(f"No output module template named '{template_name}'")
        self.template = template_name

    def set_output(self, destination: Path) -> None:
        self.destination = Path(destination)

    def remove(self) -> None:
        self._queue._remove(self)

    def _schedule(self, outcome: RenderStatus, delay_polls: int) -> None:
        if delay_polls <= 0:
            self._status = outcome
        else:
            self._pending_outcome = outcome
            self._pending_polls = delay_polls


class MemoryRenderQueue(RenderQueueBackend):
    """A render queue that records instead of rendering."""

    def __init__(
        self,
        templates: Iterable[str] = ("LHF-FINAL",),
        outcomes: Optional[Dict[str, RenderStatus]] = None,
        start_delay_polls: int = 0,
    ):
        self.templates = set(templates)
        self.outcomes = dict(outcomes or {})
        self.start_delay_polls = start_delay_polls
        self._entries: List[MemoryQueueEntry] = []
        self.render_calls = 0
        self.history: List[Tuple[str, Optional[str], Optional[Path], RenderStatus]] = []

    @property
    def num_items(self) -> int:
        return len(self._entries)

    def entry(self, position: int) -> MemoryQueueEntry:
        if position < 1 or position > len(self._entries):
            raise IndexError(f"Render queue has no entry {position}")
        return self._entries[position - 1]

    def add(self, item: ProjectItem) -> MemoryQueueEntry:
        if not item.is_composition:
            raise ValueError(f"'{item.name}' is not a composition")
        entry = MemoryQueueEntry(self, item)
        self._entries.append(entry)
        return entry

    def render(self) -> None:
        self.render_calls += 1
        for entry in self._entries:
            if entry._status != RenderStatus.QUEUED or entry._pending_polls is not None:
                continue

            if entry.destination is None:
                outcome = RenderStatus.FAILED
            else:
                outcome = self.outcomes.get(entry.item_name, RenderStatus.DONE)

            entry._schedule(outcome, self.start_delay_polls)
            self.history.append((entry.item_name, entry.template, entry.destination, outcome))
            logger.debug(f"[MemoryQueue] {entry.item_name} -> {outcome.value}")

    def _remove(self, entry: MemoryQueueEntry) -> None:
        self._entries.remove(entry)
