"""
Render engine queue abstraction.

The external render engine owns a job queue. This layer describes the
capabilities the orchestrator consumes:
- Add an item to the queue, returning a queue entry
- Apply a named output template and bind a destination on an entry
- Inspect and remove entries by 1-based position
- Start rendering everything queued

Design rules:
- Entries are owned by the engine once added
- Status is observed by polling only; there is no completion callback
- The engine decides whether entries render sequentially or in parallel
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from ..project.base import ProjectItem


class RenderStatus(str, Enum):
    """
    Render queue entry status.

    Only QUEUED matters to the orchestrator: anything else means the
    engine has picked the entry up (or given up on it).
    """

    QUEUED = "queued"  # Waiting for the engine to start it
    UNQUEUED = "unqueued"  # Present but excluded from rendering
    RENDERING = "rendering"  # Engine is working on it
    DONE = "done"  # Rendered successfully
    FAILED = "failed"  # Engine reported an error
    STOPPED = "stopped"  # Stopped by the engine or the operator


class QueueEntry(ABC):
    """One entry in the engine's render queue."""

    @property
    @abstractmethod
    def item_name(self) -> str:
        """Name of the composition this entry renders."""
        pass

    @property
    @abstractmethod
    def status(self) -> RenderStatus:
        pass

    @abstractmethod
    def apply_template(self, template_name: str) -> None:
        """
        Apply a named output template.

        Raises:
            Exception: Engine-specific error if the template does not exist
        """
        pass

    @abstractmethod
    def set_output(self, destination: Path) -> None:
        """
        Bind the destination file.

        Raises:
            Exception: Engine-specific error if the path is refused
        """
        pass

    @abstractmethod
    def remove(self) -> None:
        """Remove this entry from the queue, whatever its status."""
        pass


class RenderQueueBackend(ABC):
    """The render engine's job queue."""

    @property
    @abstractmethod
    def num_items(self) -> int:
        pass

    @abstractmethod
    def entry(self, position: int) -> QueueEntry:
        """
        Return the entry at a 1-based queue position.

        Raises:
            IndexError: If position is outside [1, num_items]
        """
        pass

    @abstractmethod
    def add(self, item: ProjectItem) -> QueueEntry:
        """Append an item to the queue and return its entry."""
        pass

    @abstractmethod
    def render(self) -> None:
        """
        Start rendering all queued entries in queue order.

        Some engines block until the batch finishes, others return
        immediately. Callers must not rely on either.
        """
        pass
