"""
Run failure taxonomy.

Every detected failure is terminal for the run. Stages raise typed
errors; the orchestrator converts them into ONE human-facing message.

- PreconditionError: raised while validating, before any mutation
- EngineRejectionError: the render engine refused a job or template
- IOFailureError: the filesystem refused a folder or destination
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of a terminal run failure."""

    PRECONDITION = "precondition"
    ENGINE_REJECTION = "engine_rejection"
    IO_FAILURE = "io_failure"
    UNEXPECTED = "unexpected"


class BatchError(Exception):
    """
    Base exception for run failures.

    The message is operator-facing and is shown verbatim.
    """

    kind: FailureKind = FailureKind.UNEXPECTED

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PreconditionError(BatchError):
    """
    A run prerequisite is not met.

    Raised when:
    - A required composition, layer, effect or property is missing
    - No compositions are selected
    - The index range is invalid
    - No usable destination folder was given
    """

    kind = FailureKind.PRECONDITION


class EngineRejectionError(BatchError):
    """
    The render engine refused a job.

    Raised when:
    - The output template does not exist
    - The queue refuses the item
    - The engine refuses to start
    """

    kind = FailureKind.ENGINE_REJECTION


class IOFailureError(BatchError):
    """
    The filesystem refused an output location.

    Raised when:
    - A per-entry folder cannot be created
    - A destination path is not writable
    """

    kind = FailureKind.IO_FAILURE
