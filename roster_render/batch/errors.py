"""
Batch state machine errors.

Run failures live in roster_render.errors. This module holds errors that
indicate a defect in the orchestrator itself.
"""


class InvalidStateTransitionError(Exception):
    """Raised when attempting an illegal batch state transition."""

    def __init__(self, current_state: str, target_state: str):
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"Invalid batch state transition: {current_state} -> {target_state}"
        )
