"""Configuration management for Pay Schedule.

Two files live in the config directory:

- settings.json: tool preferences for this machine
  (tax_tables path, default_output_format)
- profile.yaml: default pay parameters, in employee / employer / pay
  sections shaped like PayParameters

The directory is PAY_SCHEDULE_CONFIG_PATH when set, otherwise
$XDG_CONFIG_HOME/pay-schedule (~/.config/pay-schedule).
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .schemas import Employee, Employer


APP_NAME = "pay-schedule"
CONFIG_ENV_VAR = "PAY_SCHEDULE_CONFIG_PATH"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

# Values used when settings.json leaves a key out
DEFAULT_SETTINGS: Dict[str, Any] = {
    "tax_tables": None,
    "default_output_format": "table",
}

# Keys a profile may set, by section
PROFILE_SCHEMA: Dict[str, Tuple[str, ...]] = {
    "employee": tuple(Employee.model_fields),
    "employer": tuple(Employer.model_fields),
    "pay": ("rate", "pay_frequency", "pay_day", "hire_date", "include_local_tax"),
}


class ProfileNotFoundError(Exception):
    """Raised when profile.yaml is required but missing."""
    pass


def get_config_dir() -> Path:
    """Directory holding settings.json and profile.yaml (may not exist yet)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def _write(path: Path, dump, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        dump(data, f)
    return path


# =============================================================================
# settings.json
# =============================================================================


def load_settings() -> dict:
    """Read settings.json; an absent file means no settings."""
    path = get_settings_path()
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Write settings.json, creating the config directory if needed."""
    return _write(get_settings_path(), lambda d, f: json.dump(d, f, indent=2), settings)


def get_setting(key: str, default: Any = None) -> Any:
    """Look up one setting.

    Falls back to the caller's default, then to DEFAULT_SETTINGS.
    """
    if default is None:
        default = DEFAULT_SETTINGS.get(key)
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


# =============================================================================
# profile.yaml
# =============================================================================


def get_profile_path(require_exists: bool = False) -> Path:
    """Location of profile.yaml.

    Raises:
        ProfileNotFoundError: If require_exists and the file is missing
    """
    path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not path.exists():
        raise ProfileNotFoundError(
            f"No profile found at {path}\n\n"
            f"Create one with: pay-schedule profile set pay.rate 20"
        )
    return path


def load_profile(require_exists: bool = False) -> dict:
    """Read profile.yaml as a dict ({} when absent and not required)."""
    path = get_profile_path(require_exists=require_exists)
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Write profile.yaml, keeping section order as given."""
    target = path or get_profile_path()
    return _write(
        target,
        lambda d, f: yaml.dump(d, f, default_flow_style=False, sort_keys=False),
        profile,
    )


def get_profile_value(key: str, default: Any = None) -> Any:
    """Read a dotted profile key such as "employee.state"."""
    node: Any = load_profile()
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def set_profile_value(key: str, value: Any) -> Path:
    """Write a dotted profile key such as "pay.rate", creating sections."""
    profile = load_profile()
    *sections, leaf = key.split(".")

    node = profile
    for section in sections:
        if not isinstance(node.get(section), dict):
            node[section] = {}
        node = node[section]
    node[leaf] = value

    return save_profile(profile)


def validate_profile_key(key: str) -> Tuple[bool, str]:
    """Check a dotted key against PROFILE_SCHEMA.

    Returns:
        (True, "") when the key can be set, else (False, reason)
    """
    section, _, field = key.partition(".")

    if section not in PROFILE_SCHEMA:
        return False, f"Unknown profile section '{section}'. Sections: {', '.join(PROFILE_SCHEMA)}"
    if not field:
        return False, f"'{section}' is a section; set one of its keys, e.g. {section}.{PROFILE_SCHEMA[section][0]}"
    if "." in field:
        return False, f"Profile keys are section.key, got '{key}'"
    if field not in PROFILE_SCHEMA[section]:
        return False, f"Unknown key '{field}' in {section}. Keys: {', '.join(PROFILE_SCHEMA[section])}"

    return True, ""
