"""
Render queue execution.

The host's render engine does the rendering. This package enqueues jobs,
starts the queue and waits for it by polling.
"""

from .errors import (
    OutputPathError,
    OutputTemplateError,
    QueueRejectionError,
)
from .base import (
    QueueEntry,
    RenderQueueBackend,
    RenderStatus,
)
from .queue import (
    DrainOutcome,
    RenderJob,
    RenderQueueAdapter,
)

__all__ = [
    # Errors
    "OutputPathError",
    "OutputTemplateError",
    "QueueRejectionError",
    # Engine interface
    "QueueEntry",
    "RenderQueueBackend",
    "RenderStatus",
    # Adapter
    "DrainOutcome",
    "RenderJob",
    "RenderQueueAdapter",
]
