"""
Render queue errors.

All errors are fatal to the run. They specialise the run failure
taxonomy so the orchestrator can classify them without inspecting
messages.
"""

from ..errors import EngineRejectionError, IOFailureError


class OutputTemplateError(EngineRejectionError):
    """
    The named output template could not be applied.

    Raised when the template does not exist in the render engine.
    """

    def __init__(self, template_name: str, reason: str = ""):
        self.template_name = template_name
        self.reason = reason
        message = f"Output template '{template_name}' could not be applied"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class QueueRejectionError(EngineRejectionError):
    """
    The render queue refused an item or refused to start.
    """

    pass


class OutputPathError(IOFailureError):
    """
    An output folder or destination file is not usable.

    Raised when:
    - The per-entry folder cannot be created
    - The engine refuses the destination path
    """

    pass
