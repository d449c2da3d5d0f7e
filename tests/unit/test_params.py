"""Tests for pay parameter validation and layered resolution.

Uses isolated directories via tmp_path and PAY_SCHEDULE_CONFIG_PATH
to avoid touching the real profile.
"""

import json
import pytest
import yaml
from datetime import date
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from payschedule.sdk.params import load_params_file, profile_defaults, resolve_pay_parameters
from payschedule.sdk.schemas import PayParameters


# === FIXTURES ===


def write_profile(config_dir: Path, profile_data: dict):
    """Write profile.yaml to config directory."""
    (config_dir / "profile.yaml").write_text(yaml.dump(profile_data))


@pytest.fixture
def base_profile():
    return {
        "employee": {"name": "Jane Doe", "state": "KY", "city": "Louisville"},
        "employer": {"name": "Acme Corp"},
        "pay": {"rate": 20, "pay_frequency": "biweekly", "pay_day": "Friday", "hire_date": "2025-01-06"},
    }


# === PAY PARAMETERS ===


class TestPayParameters:
    """Input coercion and validation."""

    def test_minimal(self):
        params = PayParameters(rate="20")

        assert params.rate == Decimal("20")
        assert params.pay_frequency == "biweekly"
        assert params.pay_day == "Friday"
        assert params.num_stubs == 1
        assert params.include_local_tax is True

    def test_rate_is_coerced(self):
        assert PayParameters(rate="$22.50/hr").rate == Decimal("22.50")
        assert PayParameters(rate="abc").rate == Decimal("0")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            PayParameters(rate="-5")

    @pytest.mark.parametrize("value", ["Bi-Weekly", "bi_weekly", " BIWEEKLY "])
    def test_frequency_spellings(self, value):
        assert PayParameters(rate=20, pay_frequency=value).pay_frequency == "biweekly"

    def test_unknown_frequency_rejected(self):
        with pytest.raises(ValidationError):
            PayParameters(rate=20, pay_frequency="monthly")

    def test_pay_day_normalized(self):
        assert PayParameters(rate=20, pay_day="thu").pay_day == "Thursday"

    def test_unknown_pay_day_rejected(self):
        with pytest.raises(ValidationError, match="Unknown weekday"):
            PayParameters(rate=20, pay_day="Caturday")

    def test_hire_date_parsed(self):
        assert PayParameters(rate=20, hire_date="2025-01-06").hire_date == date(2025, 1, 6)

    def test_blank_hire_date_is_today(self):
        assert PayParameters(rate=20, hire_date="").hire_date == date.today()
        assert PayParameters(rate=20).hire_date == date.today()

    def test_zero_stubs_rejected(self):
        with pytest.raises(ValidationError):
            PayParameters(rate=20, num_stubs=0)

    def test_hours_from_text(self):
        params = PayParameters(rate=20, hours="80,,72")
        assert params.hours == [Decimal("80"), None, Decimal("72")]

    def test_hours_from_list(self):
        params = PayParameters(rate=20, overtime_hours=[1, "2.5", None])
        assert params.overtime_hours == [Decimal("1"), Decimal("2.5"), None]

    def test_boolean_and_non_finite_hours_coerce_to_zero(self):
        params = PayParameters(rate=True, hours=[True, float("nan")], overtime_hours=[float("inf")])

        assert params.rate == Decimal("0")
        assert params.hours == [Decimal("0"), Decimal("0")]
        assert params.overtime_hours == [Decimal("0")]

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            PayParameters(rate=20, hours="80,-4")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            PayParameters(rate=20, salary=50000)

    def test_unknown_employee_field_rejected(self):
        with pytest.raises(ValidationError):
            PayParameters(rate=20, employee={"nickname": "JD"})

    def test_state_and_city_shortcuts(self):
        params = PayParameters(rate=20, employee={"state": "KY", "city": "Louisville"})
        assert params.state == "KY"
        assert params.city == "Louisville"


# === PARAMS FILES ===


class TestLoadParamsFile:
    """YAML and JSON params files."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text(yaml.dump({"rate": 20, "num_stubs": 2}))
        assert load_params_file(path) == {"rate": 20, "num_stubs": 2}

    def test_json(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"rate": 20}))
        assert load_params_file(path) == {"rate": 20}

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_params_file(tmp_path / "nope.yaml")

    def test_unknown_extension(self, tmp_path):
        path = tmp_path / "params.txt"
        path.write_text("rate: 20")
        with pytest.raises(ValueError, match=".json, .yaml or .yml"):
            load_params_file(path)

    def test_not_a_dict(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("- 20\n")
        with pytest.raises(ValueError, match="must contain a dictionary"):
            load_params_file(path)


# === LAYERED RESOLUTION ===


class TestResolvePayParameters:
    """Profile, params file and overrides."""

    def test_profile_defaults(self, isolated_env, base_profile):
        write_profile(isolated_env["config_dir"], base_profile)

        params = resolve_pay_parameters()

        assert params.rate == Decimal("20")
        assert params.employee.city == "Louisville"
        assert params.hire_date == date(2025, 1, 6)

    def test_params_file_overrides_profile(self, isolated_env, base_profile):
        write_profile(isolated_env["config_dir"], base_profile)
        path = isolated_env["tmp_path"] / "params.yaml"
        path.write_text(yaml.dump({"rate": 25, "employee": {"city": "Lexington"}}))

        params = resolve_pay_parameters(params_path=path)

        assert params.rate == Decimal("25")
        # Nested sections merge rather than replace
        assert params.employee.city == "Lexington"
        assert params.employee.name == "Jane Doe"

    def test_overrides_win(self, isolated_env, base_profile):
        write_profile(isolated_env["config_dir"], base_profile)

        params = resolve_pay_parameters(overrides={"rate": "30", "num_stubs": 3})

        assert params.rate == Decimal("30")
        assert params.num_stubs == 3

    def test_none_overrides_ignored(self, isolated_env, base_profile):
        write_profile(isolated_env["config_dir"], base_profile)

        params = resolve_pay_parameters(
            overrides={"rate": None, "employee": {"name": None, "state": None}}
        )

        assert params.rate == Decimal("20")
        assert params.employee.name == "Jane Doe"
        assert params.employee.state == "KY"

    def test_none_overrides_without_profile(self, isolated_env):
        params = resolve_pay_parameters(
            overrides={"rate": "20", "employee": {"name": None, "city": None}}
        )
        assert params.employee.name == ""

    def test_no_rate_anywhere_fails(self, isolated_env):
        with pytest.raises(ValidationError):
            resolve_pay_parameters()

    def test_explicit_profile_dict(self, isolated_env):
        params = resolve_pay_parameters(profile={"pay": {"rate": 18}})
        assert params.rate == Decimal("18")

    def test_profile_defaults_flattens_pay_section(self, base_profile):
        defaults = profile_defaults(base_profile)

        assert defaults["rate"] == 20
        assert defaults["employee"]["state"] == "KY"
        assert "pay" not in defaults
