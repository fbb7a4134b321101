"""
Output path generation.

Combines resolved names with the destination root:
- folder_for: destination_root / <entry folder>, created on demand
- file_for:   <entry folder> / <composition>_Option<index>.<ext>

CRITICAL RULES:
1. Folder creation is idempotent and never clears an existing folder.
   Re-running an overlapping range overwrites individual files but
   never deletes their siblings.
2. file_for is a pure function: no existence check, collisions overwrite.
3. The folder for an index exists before any job referencing it is enqueued.
"""

import logging
from pathlib import Path

from .naming import NamingTuple, file_name, folder_name
from ..execution.errors import OutputPathError

logger = logging.getLogger(__name__)


class OutputPathBuilder:
    """Derives per-entry folders and per-job files."""

    def __init__(self, extension: str = "mov"):
        self.extension = extension

    def folder_for(self, root: Path, naming: NamingTuple) -> Path:
        """
        Ensure the per-entry folder exists and return it.

        Args:
            root: Destination root chosen by the operator
            naming: Resolved naming fields for the entry

        Returns:
            Absolute path of the entry folder

        Raises:
            OutputPathError: If the folder cannot be created
        """
        folder = Path(root) / folder_name(naming)

        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputPathError(
                f"Cannot create output folder {folder}: {e}"
            )

        if not folder.is_dir():
            raise OutputPathError(
                f"Output folder path exists but is not a directory: {folder}"
            )

        logger.debug(f"[Paths] Output folder ready: {folder}")
        return folder

    def file_for(self, folder: Path, composition_name: str, index: int) -> Path:
        """
        Destination file for one composition at one roster index.

        Example:
            >>> OutputPathBuilder().file_for(Path("/out/007_Jane_Doe"), "CompA", 5)
            PosixPath('/out/007_Jane_Doe/CompA_Option5.mov')
        """
        return Path(folder) / file_name(composition_name, index, self.extension)
