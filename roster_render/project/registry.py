"""
Name-keyed lookup over a project's compositions.

The registry provides:
- Composition lookup by exact name
- Selected compositions in project enumeration order
- require(): lookup that turns absence into a precondition failure

No mutation. Absence is a normal outcome signalled with None.
"""

from typing import List, Optional

from .base import HostProject, ProjectItem
from ..errors import PreconditionError


class ItemRegistry:
    """
    Read-only view over the compositions of a host project.

    Non-composition items (footage, folders) are never returned.
    """

    def __init__(self, project: HostProject):
        self._project = project

    def compositions(self) -> List[ProjectItem]:
        """All compositions in project enumeration order."""
        return [item for item in self._project.items() if item.is_composition]

    def find_by_name(self, name: str) -> Optional[ProjectItem]:
        """
        Find a composition by exact name.

        Args:
            name: Composition name (case-sensitive)

        Returns:
            The first matching composition, or None if not found
        """
        for item in self.compositions():
            if item.name == name:
                return item
        return None

    def selected_items(self) -> List[ProjectItem]:
        """
        Compositions currently selected by the operator.

        Order is project enumeration order, not selection order.
        """
        return [item for item in self.compositions() if item.selected]

    def require(self, name: str, message: Optional[str] = None) -> ProjectItem:
        """
        Find a composition or fail the run's preconditions.

        Args:
            name: Composition name
            message: Operator-facing message (defaults to the standard
                "not found" wording)

        Raises:
            PreconditionError: If no composition has this name
        """
        item = self.find_by_name(name)
        if item is None:
            raise PreconditionError(
                message or f"Error: Composition '{name}' not found!"
            )
        return item
