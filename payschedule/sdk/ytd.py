"""Year-to-date aggregation.

YTD is recomputed from the complete list of period results for every
stub rather than carried forward, so each stub's snapshot is consistent
with the final list regardless of generation order.
"""

from datetime import date
from typing import List, Optional, Sequence

from .schemas import PeriodResult, YTDTotals


def aggregate_ytd(
    all_results: Sequence[PeriodResult],
    target_pay_date: date,
    current: Optional[PeriodResult] = None,
) -> YTDTotals:
    """Sum every period paid in the target's calendar year, up to the target.

    A period counts when its pay date falls in the same calendar year as
    target_pay_date and on or before it.

    Args:
        all_results: Every computed period of the run
        target_pay_date: Pay date of the stub being rendered
        current: The stub's own result, used when all_results is empty

    Returns:
        YTDTotals (the current period's own values for an empty list)
    """
    if not all_results:
        return YTDTotals.from_result(current) if current is not None else YTDTotals.zero()

    totals = YTDTotals.zero()
    for result in all_results:
        paid = result.pay_date
        if paid.year == target_pay_date.year and paid <= target_pay_date:
            totals = totals + YTDTotals.from_result(result)

    return totals


def ytd_snapshots(all_results: Sequence[PeriodResult]) -> List[YTDTotals]:
    """YTD snapshot for each result, each taken over the complete list."""
    return [aggregate_ytd(all_results, result.pay_date, current=result) for result in all_results]
