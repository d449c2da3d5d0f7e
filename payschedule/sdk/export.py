"""Stub export: rounded JSON documents and a CSV summary.

Amounts are rounded to cents here, at presentation time. Rates keep full
precision.
"""

import csv
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import BaseModel

from .parsing import quantize_cents
from .schemas import PayPreview, PayStub

# Fractional rates, never rounded to cents
RATE_KEYS = {"state_rate", "local_rate"}

CSV_COLUMNS = [
    "ordinal", "start_date", "end_date", "pay_date",
    "hours", "overtime_hours", "gross", "total_employee_tax", "net",
    "ytd_gross", "ytd_total_employee_tax", "ytd_net",
]


def _present(value: Any, key: str = "") -> Any:
    """Recursively convert Decimals to floats (rounded) and dates to ISO."""
    if isinstance(value, dict):
        return {k: _present(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [_present(v, key) for v in value]
    if isinstance(value, Decimal):
        return float(value) if key in RATE_KEYS else float(quantize_cents(value))
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_jsonable(model: BaseModel) -> dict:
    """Any schema model as a JSON-ready dict with amounts rounded to cents."""
    return _present(model.model_dump())


def stub_to_dict(stub: PayStub) -> dict:
    """Stub as a JSON-ready dict with amounts rounded to cents."""
    return to_jsonable(stub)


def preview_to_dict(preview: PayPreview) -> dict:
    """Preview as a JSON-ready dict with amounts rounded to cents."""
    return to_jsonable(preview)


def write_stub_documents(stubs: Sequence[PayStub], output_dir: Path) -> List[Path]:
    """Write one JSON document per stub.

    Each document carries its own YTD snapshot. Files are named
    '<employee>-paystub-<pay date>.json'.

    Returns:
        Paths of the written files, in stub order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for stub in stubs:
        path = output_dir / f"{stub.filename_stem}.json"
        with open(path, "w") as f:
            json.dump(stub_to_dict(stub), f, indent=2)
        paths.append(path)

    return paths


def write_stubs_csv(stubs: Sequence[PayStub], output_path: Path) -> Path:
    """Write a one-row-per-stub CSV summary.

    Returns:
        Path to the written file
    """
    with open(output_path, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_COLUMNS)
        for stub in stubs:
            cur = stub.current
            ytd = stub.ytd
            writer.writerow([
                cur.period.ordinal,
                cur.period.start_date.isoformat(),
                cur.period.end_date.isoformat(),
                cur.pay_date.isoformat(),
                f"{cur.hours:.2f}",
                f"{cur.overtime_hours:.2f}",
                f"{quantize_cents(cur.gross):.2f}",
                f"{quantize_cents(cur.total_employee_tax):.2f}",
                f"{quantize_cents(cur.net):.2f}",
                f"{quantize_cents(ytd.gross):.2f}",
                f"{quantize_cents(ytd.total_employee_tax):.2f}",
                f"{quantize_cents(ytd.net):.2f}",
            ])

    return output_path
