"""Jurisdiction tax rate lookup.

Rates live in YAML (payschedule/tax_tables/default.yaml) and are validated
with pydantic on load. The loaded TaxTables object is read-only and is
passed explicitly into the calculator, so tests can substitute their own
jurisdictions.

Lookups never fail: an unknown state resolves to a zero rate and an
unknown city resolves to no local tax.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .config import get_setting
from .schemas import EmployerRates, FederalRates, LocalTax, TaxJurisdiction, TaxTablesFile

logger = logging.getLogger(__name__)

DEFAULT_TABLES_NAME = "default"


class TaxTablesError(Exception):
    """Raised when a tax tables file is malformed."""
    pass


def _get_tax_tables_dir() -> Path:
    """Get the packaged tax_tables directory path."""
    return Path(__file__).parent.parent / "tax_tables"


def normalize_state(state: Optional[str]) -> str:
    """Uppercase, trimmed two-letter state code."""
    return (state or "").strip().upper()


def local_key(city: Optional[str], state: Optional[str]) -> str:
    """Composite local tax key, e.g. 'Louisville, KY'."""
    return f"{(city or '').strip()}, {normalize_state(state)}"


class TaxTables:
    """Immutable state and local tax rate tables."""

    def __init__(self, data: TaxTablesFile, source: Optional[str] = None):
        self._federal = data.federal
        self._employer = data.employer
        self._states = MappingProxyType(
            {normalize_state(code): rate for code, rate in data.states.items()}
        )
        # Cities match case-insensitively; keep the configured spelling for display
        self._local = MappingProxyType({
            self._local_index(*key.rsplit(",", 1)): (key.strip(), entry)
            for key, entry in data.local.items()
            if "," in key
        })
        self.source = source

    @staticmethod
    def _local_index(city: str, state: str) -> str:
        return local_key(city, state).casefold()

    @property
    def federal(self) -> FederalRates:
        return self._federal

    @property
    def employer(self) -> EmployerRates:
        return self._employer

    @property
    def states(self) -> Mapping:
        return self._states

    @property
    def local_keys(self) -> list:
        return sorted(key for key, _ in self._local.values())

    def state_rate(self, state: Optional[str]) -> Decimal:
        """State withholding rate, zero for unrecognized states."""
        return self._states.get(normalize_state(state), Decimal("0"))

    def local_tax(self, city: Optional[str], state: Optional[str]) -> Optional[LocalTax]:
        """Local tax entry for 'City, ST', or None."""
        if not (city or "").strip():
            return None
        found = self._local.get(self._local_index(city, state))
        return found[1] if found else None

    def resolve(self, city: Optional[str], state: Optional[str]) -> TaxJurisdiction:
        """Resolve the rates that apply to an employee's city and state."""
        code = normalize_state(state)
        if code and code not in self._states:
            logger.warning(f"No state tax rate for '{code}', using 0")

        local = self.local_tax(city, state)
        return TaxJurisdiction(
            state=code,
            state_rate=self.state_rate(code),
            local_name=local.name if local else None,
            local_rate=local.rate if local else Decimal("0"),
        )

    def __repr__(self) -> str:
        return f"TaxTables(states={len(self._states)}, local={len(self._local)}, source={self.source!r})"


def load_tax_tables(path: Optional[Union[str, Path]] = None) -> TaxTables:
    """Load tax tables from YAML.

    Args:
        path: Tables file; the packaged default tables if not specified

    Returns:
        Validated, read-only TaxTables

    Raises:
        FileNotFoundError: If the file doesn't exist
        TaxTablesError: If the file is not valid YAML or fails validation
    """
    if path is None:
        path = _get_tax_tables_dir() / f"{DEFAULT_TABLES_NAME}.yaml"
    path = Path(path).expanduser()

    if not path.exists():
        raise FileNotFoundError(f"Tax tables file not found: {path}")

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TaxTablesError(f"Invalid YAML in {path}: {e}")

    if not isinstance(raw, dict):
        raise TaxTablesError(f"Tax tables must be a YAML dictionary, got {type(raw).__name__}")

    try:
        data = TaxTablesFile.model_validate(raw)
    except ValidationError as e:
        raise TaxTablesError(f"Invalid tax tables in {path}:\n{e}")

    logger.debug(f"Loaded tax tables from {path}: {len(data.states)} states, {len(data.local)} local")
    return TaxTables(data, source=str(path))


@lru_cache(maxsize=None)
def default_tax_tables() -> TaxTables:
    """Packaged default tables (loaded once)."""
    return load_tax_tables()


def get_tax_tables() -> TaxTables:
    """Tax tables for this machine.

    Resolution order:
    1. settings.json "tax_tables" path (if set)
    2. Packaged default tables
    """
    custom = get_setting("tax_tables")
    if custom:
        return load_tax_tables(custom)
    return default_tax_tables()
