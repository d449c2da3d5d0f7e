"""Pay Schedule SDK - Pay period scheduling, tax estimates and YTD totals."""

from .config import (
    DEFAULT_SETTINGS,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    validate_profile_key,
    ProfileNotFoundError,
)

from .parsing import (
    PayConfigError,
    parse_currency,
    parse_hours_list,
    parse_weekday,
    parse_date,
    safe_parse_date,
    next_occurrence_of_weekday,
    quantize_cents,
    format_money,
)

from .schemas import (
    Employee,
    Employer,
    PayParameters,
    PayPeriod,
    EmployeeTaxes,
    EmployerTaxes,
    PeriodResult,
    YTDTotals,
    PayStub,
    PayPreview,
    TaxJurisdiction,
    LocalTax,
)

from .tax_tables import (
    TaxTables,
    TaxTablesError,
    load_tax_tables,
    default_tax_tables,
    get_tax_tables,
)

from .schedule import (
    schedule_periods,
    resolve_hours,
    period_length_days,
    default_hours,
)

from .calculator import compute_period
from .ytd import aggregate_ytd, ytd_snapshots
from .generator import compute_results, generate_paystubs, build_preview
from .params import resolve_pay_parameters, load_params_file
from .export import to_jsonable, stub_to_dict, preview_to_dict, write_stub_documents, write_stubs_csv

__all__ = [
    # Config
    "DEFAULT_SETTINGS",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "validate_profile_key",
    "ProfileNotFoundError",
    # Parsing
    "PayConfigError",
    "parse_currency",
    "parse_hours_list",
    "parse_weekday",
    "parse_date",
    "safe_parse_date",
    "next_occurrence_of_weekday",
    "quantize_cents",
    "format_money",
    # Schemas
    "Employee",
    "Employer",
    "PayParameters",
    "PayPeriod",
    "EmployeeTaxes",
    "EmployerTaxes",
    "PeriodResult",
    "YTDTotals",
    "PayStub",
    "PayPreview",
    "TaxJurisdiction",
    "LocalTax",
    # Tax tables
    "TaxTables",
    "TaxTablesError",
    "load_tax_tables",
    "default_tax_tables",
    "get_tax_tables",
    # Scheduling
    "schedule_periods",
    "resolve_hours",
    "period_length_days",
    "default_hours",
    # Calculation
    "compute_period",
    "aggregate_ytd",
    "ytd_snapshots",
    # Pipeline
    "compute_results",
    "generate_paystubs",
    "build_preview",
    "resolve_pay_parameters",
    "load_params_file",
    # Export
    "to_jsonable",
    "stub_to_dict",
    "preview_to_dict",
    "write_stub_documents",
    "write_stubs_csv",
]
