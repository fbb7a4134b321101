"""
Render queue adapter.

Wraps the engine's queue with the four operations a batch needs:
- enqueue: add one composition with a template and destination
- clear:   empty the queue before a new batch
- start:   render everything queued
- await_drain: block until the engine has picked the batch up

Engine failures are converted into typed run failures here, at the
boundary, so the orchestrator never sees engine-specific exceptions.
"""

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .base import RenderQueueBackend, RenderStatus
from .errors import OutputPathError, OutputTemplateError, QueueRejectionError
from ..project.base import ProjectItem

logger = logging.getLogger(__name__)


# Default polling cadence while waiting for a batch
DEFAULT_POLL_INTERVAL_SECONDS = 1.0


class RenderJob(BaseModel):
    """
    One enqueued render task.

    Created per (roster index, selected composition) pair. Owned by the
    engine's queue once enqueued; this record is the orchestrator's copy.
    """

    model_config = ConfigDict(extra="forbid")

    source_name: str
    """Composition rendered by this job."""

    output_template: str
    """Output template applied to the job."""

    destination_path: str
    """Absolute destination file path."""

    index: int
    """Roster index the selector pointed at when the job was enqueued."""

    enqueued_at: datetime = Field(default_factory=datetime.now)

    final_status: Optional[RenderStatus] = None
    """Engine status observed after the batch drained."""


class DrainOutcome(BaseModel):
    """What await_drain observed when it returned."""

    model_config = ConfigDict(extra="forbid")

    lead_status: Optional[RenderStatus] = None
    """Lead entry status at return, or None if the queue was empty."""

    polls: int = 0
    """Number of queue inspections made."""

    waited_seconds: float = 0.0
    """Total time spent sleeping between polls."""


class RenderQueueAdapter:
    """
    Orchestrator-facing view of the engine's render queue.

    Polling uses an injectable sleep function so tests can run without
    real delays.
    """

    def __init__(
        self,
        backend: RenderQueueBackend,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        backoff_factor: float = 1.0,
        max_poll_interval: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {poll_interval}")
        if backoff_factor < 1.0:
            raise ValueError(f"backoff_factor must be >= 1.0: {backoff_factor}")

        self._backend = backend
        self.poll_interval = poll_interval
        self.backoff_factor = backoff_factor
        self.max_poll_interval = max_poll_interval or poll_interval
        self._sleep = sleep

    @property
    def size(self) -> int:
        """Number of entries currently in the queue."""
        return self._backend.num_items

    def statuses(self) -> List[Tuple[str, RenderStatus]]:
        """(composition name, status) for every entry, in queue order."""
        return [
            (entry.item_name, entry.status)
            for entry in (
                self._backend.entry(position)
                for position in range(1, self._backend.num_items + 1)
            )
        ]

    def enqueue(
        self,
        item: ProjectItem,
        output_template: str,
        destination: Path,
        index: int,
    ) -> RenderJob:
        """
        Register one job on the engine's queue.

        Args:
            item: Composition to render
            output_template: Named output template to apply
            destination: Destination file path
            index: Roster index the job renders

        Returns:
            RenderJob record of the enqueued job

        Raises:
            OutputPathError: Destination folder missing or not writable,
                or the engine refused the destination
            QueueRejectionError: The engine refused the item
            OutputTemplateError: The template does not exist
        """
        destination = Path(destination)
        parent = destination.parent

        if not parent.is_dir():
            raise OutputPathError(f"Destination folder does not exist: {parent}")
        if not os.access(parent, os.W_OK):
            raise OutputPathError(f"Destination folder is not writable: {parent}")

        try:
            entry = self._backend.add(item)
        except Exception as e:
            raise QueueRejectionError(
                f"Render queue refused composition '{item.name}': {e}"
            )

        try:
            entry.apply_template(output_template)
        except Exception as e:
            raise OutputTemplateError(output_template, str(e))

        try:
            entry.set_output(destination)
        except Exception as e:
            raise OutputPathError(
                f"Render queue refused destination {destination}: {e}"
            )

        logger.info(f"[Queue] Enqueued {item.name} -> {destination}")

        return RenderJob(
            source_name=item.name,
            output_template=output_template,
            destination_path=str(destination),
            index=index,
        )

    def clear(self) -> int:
        """
        Remove every entry, whatever its status.

        Returns:
            Number of entries removed
        """
        removed = 0
        while self._backend.num_items > 0:
            self._backend.entry(1).remove()
            removed += 1

        if removed:
            logger.debug(f"[Queue] Cleared {removed} entr{'y' if removed == 1 else 'ies'}")
        return removed

    def start(self) -> None:
        """
        Begin rendering everything queued.

        Raises:
            QueueRejectionError: If the engine refuses to start
        """
        logger.info(f"[Queue] Starting render of {self._backend.num_items} job(s)")
        try:
            self._backend.render()
        except Exception as e:
            raise QueueRejectionError(f"Render queue failed to start: {e}")

    def await_drain(self, poll_interval: Optional[float] = None) -> DrainOutcome:
        """
        Block until the engine has picked up the batch.

        Returns once the queue is empty or the lead entry is no longer
        QUEUED - whether it is rendering, done, failed or stopped.
        No timeout: an engine that never leaves QUEUED blocks forever.

        Args:
            poll_interval: First interval between polls (defaults to the
                adapter's interval). Grows by backoff_factor per poll,
                capped at max_poll_interval.

        Returns:
            DrainOutcome with the observed lead status and poll count
        """
        interval = poll_interval or self.poll_interval
        max_interval = max(self.max_poll_interval, interval)
        polls = 0
        waited = 0.0

        while True:
            polls += 1

            if self._backend.num_items == 0:
                return DrainOutcome(lead_status=None, polls=polls, waited_seconds=waited)

            lead_status = self._backend.entry(1).status
            if lead_status != RenderStatus.QUEUED:
                logger.debug(
                    f"[Queue] Lead entry is {lead_status.value} after {polls} poll(s)"
                )
                return DrainOutcome(lead_status=lead_status, polls=polls, waited_seconds=waited)

            self._sleep(interval)
            waited += interval
            interval = min(interval * self.backoff_factor, max_interval)
