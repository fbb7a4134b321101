"""
RenderSettings - Names and constants a batch run is bound to.

RenderSettings define WHERE the orchestrator looks inside the host project
and HOW outputs are named:
- Composition, layer and effect names the selector lives on
- The three roster lookup compositions
- Roster size (the upper bound of any index range)
- Output template and container extension
- Queue polling cadence

Settings are immutable for the lifetime of a run.
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional


# Environment variable naming a default settings file for the CLI
SETTINGS_ENV_VAR = "ROSTER_RENDER_SETTINGS"


class SettingsError(Exception):
    """Raised when a settings file cannot be read or contains invalid values."""
    pass


@dataclass(frozen=True)
class RenderSettings:
    """
    Complete, immutable run configuration.

    Defaults match the production project layout: a control composition
    "00_Simulator" whose "PLAYER TO RENDER" layer carries a "DROPDOWN"
    menu effect, and one text layer per roster entry in each list comp.
    """

    # Selector location
    control_composition: str = "00_Simulator"
    selector_layer: str = "PLAYER TO RENDER"
    selector_effect: str = "DROPDOWN"
    selector_property: str = "Menu"

    # Roster lookup compositions (one text layer per entry)
    name_list_composition: str = "NAME LIST"
    first_name_composition: str = "FIRSTNAME LIST"
    last_name_composition: str = "LASTNAME LIST"
    number_composition: str = "NUMBERLIST - NEW"

    # Number of roster entries (menu items on the selector)
    roster_size: int = 47

    # Output
    output_template: str = "LHF-FINAL"
    container_extension: str = "mov"

    # Queue polling: interval grows by backoff factor up to the maximum.
    # A factor of 1.0 polls at a fixed cadence.
    poll_interval_seconds: float = 1.0
    poll_backoff_factor: float = 1.0
    max_poll_interval_seconds: float = 10.0

    # Write the captured selector value back even when a run fails
    restore_on_failure: bool = True

    def __post_init__(self) -> None:
        self._check_types()

        if self.roster_size < 1:
            raise SettingsError(f"roster_size must be at least 1, got {self.roster_size}")
        if self.poll_interval_seconds <= 0:
            raise SettingsError(
                f"poll_interval_seconds must be positive, got {self.poll_interval_seconds}"
            )
        if self.poll_backoff_factor < 1.0:
            raise SettingsError(
                f"poll_backoff_factor must be >= 1.0, got {self.poll_backoff_factor}"
            )
        if self.max_poll_interval_seconds < self.poll_interval_seconds:
            raise SettingsError(
                "max_poll_interval_seconds must not be smaller than poll_interval_seconds"
            )
        if not self.container_extension or self.container_extension.startswith("."):
            raise SettingsError(
                f"container_extension must be a bare extension (e.g. 'mov'), "
                f"got '{self.container_extension}'"
            )

    def _check_types(self) -> None:
        """Reject values of the wrong JSON type before range checks run."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is float:
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            elif f.type is int:
                ok = isinstance(value, int) and not isinstance(value, bool)
            else:
                ok = isinstance(value, f.type)
            if not ok:
                raise SettingsError(
                    f"{f.name} must be {f.type.__name__}, got {type(value).__name__} {value!r}"
                )

    @property
    def roster_compositions(self) -> tuple:
        """First name, last name and number list composition names."""
        return (
            self.first_name_composition,
            self.last_name_composition,
            self.number_composition,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RenderSettings":
        """
        Deserialize from dictionary.

        Missing keys fall back to defaults. Unknown keys are rejected so a
        typo in a settings file never silently runs with a default.
        """
        if not data:
            return DEFAULT_RENDER_SETTINGS

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown settings keys: {', '.join(unknown)}")

        try:
            return cls(**data)
        except TypeError as e:
            raise SettingsError(f"Invalid settings: {e}")


DEFAULT_RENDER_SETTINGS = RenderSettings()


def load_settings(path: Optional[Path] = None) -> RenderSettings:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file. When None, the file named by the
            ROSTER_RENDER_SETTINGS environment variable is used, and
            defaults apply if that is unset too.

    Returns:
        RenderSettings instance

    Raises:
        SettingsError: File missing or unreadable, invalid JSON, or invalid values
    """
    if path is None:
        env_path = os.environ.get(SETTINGS_ENV_VAR)
        if not env_path:
            return DEFAULT_RENDER_SETTINGS
        path = Path(env_path)

    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {path}: {e}")
    except (UnicodeDecodeError, OSError) as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}")

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file must contain a JSON object: {path}")

    return RenderSettings.from_dict(data)
