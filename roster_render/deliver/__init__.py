"""
Output naming and paths.

Names are resolved before a job is enqueued; the render queue receives
complete destination paths.
"""

from .naming import NamingTuple, file_name, folder_name
from .paths import OutputPathBuilder

__all__ = [
    "NamingTuple",
    "file_name",
    "folder_name",
    "OutputPathBuilder",
]
