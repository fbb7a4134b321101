"""
ConfigPrompt - collects run inputs from the operator.

Asks only for what the command line did not supply:
- Starting index (default 1)
- Ending index (default: roster size)
- Output folder

Thin I/O wrapper. It does not validate: a non-numeric answer becomes a
missing bound and an empty answer becomes a missing folder, and the
orchestrator reports both as precondition failures.
"""

from typing import Callable, Optional

from ..batch.models import BatchRequest


class ConfigPrompt:
    """Interactive collection of range and destination."""

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None):
        self._input = input_fn or input

    def _ask(self, question: str) -> Optional[str]:
        try:
            return self._input(question)
        except EOFError:
            return None

    def ask_index(self, label: str, roster_size: int, default: int) -> Optional[int]:
        """
        Ask for a roster index. Empty answer takes the default.

        Returns:
            The index, or None if the answer is not an integer
        """
        answer = self._ask(f"Enter the {label} index (1-{roster_size}) [{default}]: ")
        if answer is None:
            return None

        answer = answer.strip()
        if not answer:
            return default

        try:
            return int(answer)
        except ValueError:
            return None

    def ask_output_folder(self) -> Optional[str]:
        """Ask for the destination root. Empty answer means none chosen."""
        answer = self._ask("Choose the output folder: ")
        if answer is None:
            return None
        answer = answer.strip()
        return answer or None

    def complete(self, request: BatchRequest, roster_size: int) -> BatchRequest:
        """
        Fill in whatever the request is missing.

        Values already on the request are kept and not asked for.
        """
        start = request.start
        end = request.end
        output_root = request.output_root

        if start is None:
            start = self.ask_index("starting", roster_size, default=1)
        if end is None:
            end = self.ask_index("ending", roster_size, default=roster_size)
        if output_root is None:
            output_root = self.ask_output_folder()

        return BatchRequest(start=start, end=end, output_root=output_root)
