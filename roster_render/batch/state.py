"""
State transition validation for batch runs.

Run lifecycle:
    IDLE -> VALIDATING -> FATAL
                       -> ITERATING -> RESTORING -> DONE
                                                -> FATAL
                                    -> FATAL

INVARIANT: Terminal states (DONE, FATAL) are immutable. A run that has
reached one never moves again; a new run needs a new orchestrator pass.
"""

from enum import Enum
from typing import FrozenSet, Set, Tuple

from .errors import InvalidStateTransitionError


class BatchState(str, Enum):
    """Batch run state."""

    IDLE = "idle"  # Created, nothing inspected yet
    VALIDATING = "validating"  # Resolving compositions, range, destination
    ITERATING = "iterating"  # Rendering one roster index at a time
    RESTORING = "restoring"  # Writing the captured selector value back
    DONE = "done"  # Every index rendered, selector restored
    FATAL = "fatal"  # Run aborted


TERMINAL_BATCH_STATES: FrozenSet[BatchState] = frozenset({
    BatchState.DONE,
    BatchState.FATAL,
})


_BATCH_TRANSITIONS: Set[Tuple[BatchState, BatchState]] = {
    (BatchState.IDLE, BatchState.VALIDATING),

    # Precondition failure: nothing has been mutated
    (BatchState.VALIDATING, BatchState.FATAL),
    (BatchState.VALIDATING, BatchState.ITERATING),

    # Loop finished, or aborted with restoration
    (BatchState.ITERATING, BatchState.RESTORING),

    # Aborted without restoration
    (BatchState.ITERATING, BatchState.FATAL),

    (BatchState.RESTORING, BatchState.DONE),
    (BatchState.RESTORING, BatchState.FATAL),
}


def is_batch_terminal(state: BatchState) -> bool:
    return state in TERMINAL_BATCH_STATES


def can_transition(current: BatchState, target: BatchState) -> bool:
    """
    Check whether a transition is legal.

    Terminal states never transition.
    """
    if is_batch_terminal(current):
        return False
    return (current, target) in _BATCH_TRANSITIONS


def validate_transition(current: BatchState, target: BatchState) -> None:
    """
    Raises:
        InvalidStateTransitionError: If the transition is illegal
    """
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value)
