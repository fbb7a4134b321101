"""
Batch orchestration across a roster index range.
"""

from .errors import InvalidStateTransitionError
from .state import BatchState
from .models import (
    BatchContext,
    BatchRequest,
    BatchRunResult,
    IndexBatchResult,
    IndexRange,
)
from .orchestrator import BatchOrchestrator

__all__ = [
    "InvalidStateTransitionError",
    "BatchState",
    "BatchContext",
    "BatchRequest",
    "BatchRunResult",
    "IndexBatchResult",
    "IndexRange",
    "BatchOrchestrator",
]
