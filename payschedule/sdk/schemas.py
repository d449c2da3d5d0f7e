"""Pydantic schemas for pay-schedule data validation.

Input schemas use extra='forbid' to reject unknown fields, so a typo in a
params file or profile causes a clear error rather than a silently ignored
value. Monetary values are Decimal at full precision; rounding happens
only when a stub is rendered or exported.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .parsing import parse_currency, parse_hours_list, parse_weekday, safe_parse_date, weekday_name

ZERO = Decimal("0")

# Coherence checks run on unrounded values
TOLERANCE = Decimal("1e-9")

PayFrequency = Literal["weekly", "biweekly"]


# =============================================================================
# Input Schemas - Identity and pay parameters
# =============================================================================


class Employee(BaseModel):
    """Employee identity. City and state also key the tax lookup."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="", description="Employee full name")
    ssn_last4: str = Field(default="", description="Last four digits of SSN")
    address: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City (local tax lookup)")
    state: str = Field(default="", description="Two-letter state (state tax lookup)")
    zip_code: str = Field(default="", description="ZIP code")


class Employer(BaseModel):
    """Employer identity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="", description="Company name")
    address: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="Two-letter state")
    zip_code: str = Field(default="", description="ZIP code")
    phone: str = Field(default="", description="Phone number")


class PayParameters(BaseModel):
    """Everything needed to generate a run of pay stubs.

    Immutable for the duration of a generation run. Hours lists may be
    shorter than num_stubs; the scheduler fills the gaps with the
    frequency's full-time default.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee: Employee = Field(default_factory=Employee)
    employer: Employer = Field(default_factory=Employer)
    rate: Decimal = Field(..., ge=0, description="Hourly rate")
    pay_frequency: PayFrequency = Field(default="biweekly", description="Pay frequency")
    pay_day: str = Field(default="Friday", description="Weekday pay is issued on")
    hire_date: date = Field(
        default=None, validate_default=True,
        description="First day of the first period (today if blank or unparseable)",
    )
    num_stubs: int = Field(default=1, gt=0, description="Number of periods to generate")
    hours: List[Optional[Decimal]] = Field(
        default_factory=list, description="Regular hours per period (None = default)"
    )
    overtime_hours: List[Optional[Decimal]] = Field(
        default_factory=list, description="Overtime hours per period (None = 0)"
    )
    include_local_tax: bool = Field(
        default=True, description="Withhold local tax when the city has an entry"
    )

    @field_validator("rate", mode="before")
    @classmethod
    def coerce_rate(cls, value):
        return parse_currency(value)

    @field_validator("pay_frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, value):
        if isinstance(value, str):
            return value.strip().lower().replace("-", "").replace("_", "")
        return value

    @field_validator("pay_day")
    @classmethod
    def normalize_pay_day(cls, value: str) -> str:
        return weekday_name(parse_weekday(value))

    @field_validator("hire_date", mode="before")
    @classmethod
    def coerce_hire_date(cls, value):
        return safe_parse_date(value)

    @field_validator("hours", "overtime_hours", mode="before")
    @classmethod
    def coerce_hours(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            entries = parse_hours_list(value)
        else:
            entries = [None if v is None else parse_currency(v) for v in value]
        if any(v is not None and v < 0 for v in entries):
            raise ValueError(f"Hours cannot be negative: {value}")
        return entries

    @property
    def state(self) -> str:
        return self.employee.state

    @property
    def city(self) -> str:
        return self.employee.city


# =============================================================================
# Schedule Schemas
# =============================================================================


class PayPeriod(BaseModel):
    """One pay cycle: contiguous calendar days plus the date it is paid."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ordinal: int = Field(..., ge=1, description="1-based position in the run")
    start_date: date
    end_date: date
    pay_date: date

    @property
    def length_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


# =============================================================================
# Result Schemas - Per-period and year-to-date
# =============================================================================


class EmployeeTaxes(BaseModel):
    """Taxes withheld from the employee's pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security: Decimal = Field(..., ge=0)
    medicare: Decimal = Field(..., ge=0)
    state: Decimal = Field(..., ge=0, description="State withholding")
    local: Decimal = Field(default=ZERO, ge=0, description="Local withholding")
    state_label: str = Field(default="State Withholding Tax")
    local_label: str = Field(default="Local Tax (none)")

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare + self.state + self.local


class EmployerTaxes(BaseModel):
    """Taxes paid by the employer. Informational; never reduce net pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security: Decimal = Field(..., ge=0)
    medicare: Decimal = Field(..., ge=0)
    futa: Decimal = Field(..., ge=0, description="Federal unemployment")
    state_unemployment: Decimal = Field(..., ge=0)
    state_unemployment_label: str = Field(default="State Unemployment Tax")

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare + self.futa + self.state_unemployment


class PeriodResult(BaseModel):
    """Computed pay for one period. Internally coherent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: PayPeriod
    rate: Decimal = Field(..., ge=0, description="Hourly rate")
    overtime_rate: Decimal = Field(..., ge=0, description="Hourly rate x 1.5")
    hours: Decimal = Field(..., description="Regular hours")
    overtime_hours: Decimal = Field(default=ZERO, description="Overtime hours")
    total_hours: Decimal
    regular_gross: Decimal
    overtime_gross: Decimal
    gross: Decimal
    employee_taxes: EmployeeTaxes
    employer_taxes: EmployerTaxes
    total_employee_tax: Decimal
    net: Decimal

    @model_validator(mode="after")
    def check_coherence(self) -> "PeriodResult":
        """Validate internal consistency of amounts."""
        errors = []

        if abs(self.gross - (self.regular_gross + self.overtime_gross)) > TOLERANCE:
            errors.append(
                f"gross ({self.gross}) != regular_gross + overtime_gross "
                f"({self.regular_gross + self.overtime_gross})"
            )

        if abs(self.total_hours - (self.hours + self.overtime_hours)) > TOLERANCE:
            errors.append(
                f"total_hours ({self.total_hours}) != hours + overtime_hours "
                f"({self.hours + self.overtime_hours})"
            )

        if abs(self.total_employee_tax - self.employee_taxes.total) > TOLERANCE:
            errors.append(
                f"total_employee_tax ({self.total_employee_tax}) != sum of employee taxes "
                f"({self.employee_taxes.total})"
            )

        if abs(self.net - (self.gross - self.total_employee_tax)) > TOLERANCE:
            errors.append(
                f"net ({self.net}) != gross - total_employee_tax "
                f"({self.gross - self.total_employee_tax})"
            )

        if errors:
            raise ValueError("; ".join(errors))

        return self

    @property
    def pay_date(self) -> date:
        return self.period.pay_date


class YTDTotals(BaseModel):
    """Year-to-date sums of every numeric field of PeriodResult."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    periods: int = Field(default=0, ge=0, description="Number of periods summed")
    hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    total_hours: Decimal = ZERO
    regular_gross: Decimal = ZERO
    overtime_gross: Decimal = ZERO
    gross: Decimal = ZERO
    social_security: Decimal = ZERO
    medicare: Decimal = ZERO
    state_tax: Decimal = ZERO
    local_tax: Decimal = ZERO
    total_employee_tax: Decimal = ZERO
    employer_social_security: Decimal = ZERO
    employer_medicare: Decimal = ZERO
    futa: Decimal = ZERO
    state_unemployment: Decimal = ZERO
    net: Decimal = ZERO

    @classmethod
    def zero(cls) -> "YTDTotals":
        """Create zero totals (no periods paid yet this year)."""
        return cls()

    @classmethod
    def from_result(cls, result: PeriodResult) -> "YTDTotals":
        """Totals over a single period: the period's own values."""
        emp = result.employee_taxes
        er = result.employer_taxes
        return cls(
            periods=1,
            hours=result.hours,
            overtime_hours=result.overtime_hours,
            total_hours=result.total_hours,
            regular_gross=result.regular_gross,
            overtime_gross=result.overtime_gross,
            gross=result.gross,
            social_security=emp.social_security,
            medicare=emp.medicare,
            state_tax=emp.state,
            local_tax=emp.local,
            total_employee_tax=result.total_employee_tax,
            employer_social_security=er.social_security,
            employer_medicare=er.medicare,
            futa=er.futa,
            state_unemployment=er.state_unemployment,
            net=result.net,
        )

    def __add__(self, other: "YTDTotals") -> "YTDTotals":
        values = {name: getattr(self, name) + getattr(other, name) for name in type(self).model_fields}
        return type(self)(**values)


class PayStub(BaseModel):
    """Fully resolved payload for one stub document.

    Carries identity, the current period and its own YTD snapshot. A
    renderer needs nothing else and applies no business defaults.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee: Employee
    employer: Employer
    hire_date: date
    pay_frequency: PayFrequency
    pay_day: str
    current: PeriodResult
    ytd: YTDTotals

    @property
    def filename_stem(self) -> str:
        """Document name, e.g. 'jane-doe-paystub-2025-01-31'."""
        slug = "-".join(self.employee.name.lower().split()) or "employee"
        return f"{slug}-paystub-{self.current.pay_date.isoformat()}"


# =============================================================================
# Preview Schemas
# =============================================================================


class PreviewRow(BaseModel):
    """Scheduled period with its resolved hours."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: PayPeriod
    hours: Decimal
    overtime_hours: Decimal


class PayPreview(BaseModel):
    """Totals across every period of a run, plus the schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schedule: List[PreviewRow]
    total_gross: Decimal
    social_security: Decimal
    medicare: Decimal
    state_tax: Decimal
    state_rate: Decimal
    local_tax: Decimal
    local_name: Optional[str] = None
    total_taxes: Decimal
    net_pay: Decimal


# =============================================================================
# Tax Table Schemas - Validate tax_tables/*.yaml
# =============================================================================


class LocalTax(BaseModel):
    """Local (city) income tax entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Label shown on the stub")
    rate: Decimal = Field(..., ge=0, le=1, description="Rate as decimal")


class FederalRates(BaseModel):
    """Employee-side FICA rates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security: Decimal = Field(default=Decimal("0.062"), ge=0, le=1)
    medicare: Decimal = Field(default=Decimal("0.0145"), ge=0, le=1)


class EmployerRates(BaseModel):
    """Employer-side payroll tax rates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security: Decimal = Field(default=Decimal("0.062"), ge=0, le=1)
    medicare: Decimal = Field(default=Decimal("0.0145"), ge=0, le=1)
    futa: Decimal = Field(default=Decimal("0.006"), ge=0, le=1)
    state_unemployment: Decimal = Field(default=Decimal("0.01"), ge=0, le=1)


class TaxTablesFile(BaseModel):
    """Contents of a tax tables YAML file."""

    model_config = ConfigDict(extra="forbid")

    federal: FederalRates = Field(default_factory=FederalRates)
    employer: EmployerRates = Field(default_factory=EmployerRates)
    states: Dict[str, Decimal] = Field(default_factory=dict, description="State code -> rate")
    local: Dict[str, LocalTax] = Field(default_factory=dict, description="'City, ST' -> local tax")

    @field_validator("states")
    @classmethod
    def check_state_rates(cls, value: Dict[str, Decimal]) -> Dict[str, Decimal]:
        for code, rate in value.items():
            if not 0 <= rate <= 1:
                raise ValueError(f"State rate for {code} out of range: {rate}")
        return value


class TaxJurisdiction(BaseModel):
    """Resolved tax rates for one state and optional city."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    state: str = Field(default="", description="Uppercased state code")
    state_rate: Decimal = Field(default=ZERO, ge=0)
    local_name: Optional[str] = Field(default=None, description="None when no local tax")
    local_rate: Decimal = Field(default=ZERO, ge=0)

    @property
    def has_local_tax(self) -> bool:
        return self.local_name is not None
