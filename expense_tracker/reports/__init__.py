"""Spending report calculations."""

from expense_tracker.reports.calculator import (
    budget_status,
    build_report,
    category_breakdown,
    total_in_window,
    totals_by_category,
    totals_by_month,
)

__all__ = [
    "budget_status",
    "build_report",
    "category_breakdown",
    "total_in_window",
    "totals_by_category",
    "totals_by_month",
]
