"""Pay parameter resolution.

Builds validated PayParameters from layered sources:
1. profile.yaml defaults (employee, employer, pay sections)
2. Params file (YAML or JSON, same shape as PayParameters)
3. Explicit overrides (CLI options); None values are ignored
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import load_profile
from .schemas import PayParameters


def load_params_file(path: Path) -> Dict[str, Any]:
    """Load pay parameters from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a dictionary or has an unknown extension
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Params file not found: {path}")

    with open(path, "r") as f:
        if path.suffix == ".json":
            data = json.load(f)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        else:
            raise ValueError(f"Params file must be .json, .yaml or .yml: {path}")

    if not isinstance(data, dict):
        raise ValueError(f"Params file must contain a dictionary, got {type(data).__name__}")

    return data


def _merge(base: Dict[str, Any], layer: Dict[str, Any]) -> Dict[str, Any]:
    """Merge layer onto base, one level deep for nested dicts."""
    merged = dict(base)
    for key, value in layer.items():
        if value is None:
            continue
        if isinstance(value, dict):
            present = {k: v for k, v in value.items() if v is not None}
            if not present and key not in merged:
                continue
            merged[key] = {**(merged.get(key) or {}), **present}
        else:
            merged[key] = value
    return merged


def profile_defaults(profile: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Flatten a profile into PayParameters-shaped defaults."""
    if profile is None:
        profile = load_profile(require_exists=False)

    defaults: Dict[str, Any] = {}
    for section in ("employee", "employer"):
        if isinstance(profile.get(section), dict):
            defaults[section] = dict(profile[section])
    if isinstance(profile.get("pay"), dict):
        defaults.update(profile["pay"])
    return defaults


def resolve_pay_parameters(
    params_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    profile: Optional[Dict[str, Any]] = None,
) -> PayParameters:
    """Resolve pay parameters from profile, params file and overrides.

    Args:
        params_path: Optional YAML/JSON params file
        overrides: Optional field overrides (None values ignored)
        profile: Profile dict (loaded from profile.yaml if not specified)

    Returns:
        Validated PayParameters

    Raises:
        pydantic.ValidationError: If the merged parameters are invalid
    """
    data = profile_defaults(profile)
    if params_path is not None:
        data = _merge(data, load_params_file(params_path))
    if overrides:
        data = _merge(data, overrides)
    return PayParameters.model_validate(data)
