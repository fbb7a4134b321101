"""
Shared test helpers.
"""

ORIGINAL_SELECTOR_VALUE = 12


def roster_entries(size=47):
    """Roster with one recognisable entry at index 5."""
    roster = [
        {"number": f"{i:03d}", "first_name": f"First{i}", "last_name": f"Last{i}"}
        for i in range(1, size + 1)
    ]
    if size >= 5:
        roster[4] = {"number": "007", "first_name": "Jane", "last_name": "Doe"}
    return roster


def selector_property(project):
    """The selector menu property of a manifest-built project."""
    control = project.items()[0]
    return control.layer_by_name("PLAYER TO RENDER").effect("DROPDOWN").property("Menu")
