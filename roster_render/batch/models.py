"""
Batch run data models.

- IndexRange: validated [start, end] roster range
- BatchRequest: operator inputs for one run
- BatchContext: everything resolved during validation
- IndexBatchResult / BatchRunResult: structured record of a run

Records use Pydantic for validation and JSON output. BatchContext holds
live host handles and is a plain dataclass.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .state import BatchState
from ..deliver.naming import NamingTuple
from ..errors import FailureKind, PreconditionError
from ..execution.queue import DrainOutcome, RenderJob
from ..project.base import ProjectItem
from ..project.selector import SelectorControl
from ..project.text_source import IndexedTextSource


INVALID_RANGE_MESSAGE = "Error: Invalid index range!"


class IndexRange(BaseModel):
    """
    Inclusive roster index range.

    Invariant: 1 <= start <= end <= roster_size
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int
    end: int
    roster_size: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_bounds(self) -> "IndexRange":
        if self.start < 1 or self.start > self.end or self.end > self.roster_size:
            raise ValueError(
                f"range {self.start}..{self.end} outside 1..{self.roster_size}"
            )
        return self

    @classmethod
    def create(cls, start: Optional[int], end: Optional[int], roster_size: int) -> "IndexRange":
        """
        Build a range from operator input.

        Raises:
            PreconditionError: Missing bound or bounds outside 1..roster_size
        """
        if start is None or end is None:
            raise PreconditionError(INVALID_RANGE_MESSAGE)
        try:
            return cls(start=start, end=end, roster_size=roster_size)
        except ValidationError:
            raise PreconditionError(INVALID_RANGE_MESSAGE)

    def indices(self) -> Iterator[int]:
        """Roster indices in ascending order."""
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1


class BatchRequest(BaseModel):
    """
    Operator inputs for one run.

    Bounds and destination may be missing; validation reports that as a
    precondition failure rather than rejecting the request up front.
    """

    model_config = ConfigDict(extra="forbid")

    start: Optional[int] = None
    end: Optional[int] = None
    output_root: Optional[str] = None


@dataclass
class BatchContext:
    """Everything validation resolved. Built once per run."""

    control: ProjectItem
    selector: SelectorControl
    original_selector_value: int
    selected_items: List[ProjectItem]
    text_source: IndexedTextSource
    index_range: IndexRange
    output_root: Path


class IndexBatchResult(BaseModel):
    """What happened for one roster index."""

    model_config = ConfigDict(extra="forbid")

    index: int
    naming: NamingTuple
    folder: str
    jobs: List[RenderJob] = Field(default_factory=list)
    drain: Optional[DrainOutcome] = None


class BatchRunResult(BaseModel):
    """
    Result of a batch run.

    The single error channel: a failed run carries its failure kind and
    one human-facing message; a successful run carries the completion
    message.
    """

    model_config = ConfigDict(extra="forbid")

    state: BatchState
    message: str
    failure_kind: Optional[FailureKind] = None

    start: Optional[int] = None
    end: Optional[int] = None
    output_root: Optional[str] = None

    batches: List[IndexBatchResult] = Field(default_factory=list)

    selector_original: Optional[int] = None
    selector_restored: bool = False

    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.state == BatchState.DONE

    @property
    def jobs_enqueued(self) -> int:
        return sum(len(batch.jobs) for batch in self.batches)

    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def summary(self) -> str:
        """Human-readable summary of the run."""
        duration = self.duration_seconds()
        duration_str = f" ({duration:.1f}s)" if duration is not None else ""

        if self.success:
            return (
                f"DONE{duration_str}: {len(self.batches)} roster entr"
                f"{'y' if len(self.batches) == 1 else 'ies'}, "
                f"{self.jobs_enqueued} job(s)"
            )

        kind = self.failure_kind.value if self.failure_kind else "unknown"
        return f"FATAL [{kind}]{duration_str}: {self.message}"

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)
