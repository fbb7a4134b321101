"""
roster-render - Per-entry batch rendering driven by a roster selector.

Renders every selected composition once per roster entry, with the
host's selector parameter pointed at that entry, and files the outputs
into one folder per entry.
"""

__version__ = "1.0.0"
