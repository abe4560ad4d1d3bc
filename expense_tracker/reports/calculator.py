"""
Reporting Calculator

DESIGN DECISION: Reports are pure functions of a snapshot.
They take expenses and budgets as arguments, never a store, never the
clock. The same snapshot and window always produce the same report.

Amounts stay Decimal throughout; only percentages and utilization
ratios are rounded, and only at the end.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from expense_tracker.models.expense import Expense
from expense_tracker.models.report import (
    BudgetLevel,
    BudgetStatus,
    CategoryShare,
    ReportWindow,
    SpendingReport,
)


ZERO = Decimal("0")
UTILIZATION_PLACES = Decimal("0.0001")
PERCENT_PLACES = Decimal("0.01")


def totals_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum of amounts per category, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


def total_in_window(expenses: Iterable[Expense], window: ReportWindow) -> Decimal:
    """Sum of amounts for expenses dated inside the window."""
    return sum((e.amount for e in expenses if window.contains(e.date)), ZERO)


def totals_by_month(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum of amounts per "YYYY-MM", oldest month first."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.date.strftime("%Y-%m")
        totals[key] = totals.get(key, ZERO) + expense.amount
    return dict(sorted(totals.items()))


def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryShare]:
    """Each category's share of total spend, largest first."""
    totals = totals_by_category(expenses)
    grand_total = sum(totals.values(), ZERO)
    if grand_total == ZERO:
        return []

    shares = [
        CategoryShare(
            category=category,
            total=total,
            percentage=(total / grand_total * 100).quantize(PERCENT_PLACES, ROUND_HALF_UP),
        )
        for category, total in totals.items()
    ]
    shares.sort(key=lambda s: (-s.total, s.category))
    return shares


def _level(
    spent: Decimal,
    limit: Decimal,
    utilization: Optional[Decimal],
    warning_threshold: Decimal,
) -> BudgetLevel:
    if spent > limit:
        return BudgetLevel.OVER
    if utilization is not None and utilization >= warning_threshold:
        return BudgetLevel.WARNING
    return BudgetLevel.OK


def budget_status(
    expenses: Iterable[Expense],
    budgets: Mapping[str, Decimal],
    warning_threshold: float = 0.8,
) -> list[BudgetStatus]:
    """
    Budget-vs-actual for every category that has a budget or spending.

    - remaining = limit - spent (negative when overspent)
    - utilization = spent / limit, or None when the limit is zero
    - categories without a budget are reported spend-only

    Rows are sorted by category name.
    """
    spent_by_category = totals_by_category(expenses)
    threshold = Decimal(str(warning_threshold))

    rows = []
    for category in sorted(set(spent_by_category) | set(budgets)):
        spent = spent_by_category.get(category, ZERO)
        limit = budgets.get(category)

        if limit is None:
            rows.append(BudgetStatus(category=category, spent=spent))
            continue

        limit = Decimal(limit)
        utilization = (
            (spent / limit).quantize(UTILIZATION_PLACES, ROUND_HALF_UP)
            if limit != ZERO
            else None
        )
        rows.append(
            BudgetStatus(
                category=category,
                spent=spent,
                limit=limit,
                remaining=limit - spent,
                utilization=utilization,
                level=_level(spent, limit, utilization, threshold),
            )
        )

    return rows


def build_report(
    expenses: Iterable[Expense],
    budgets: Mapping[str, Decimal],
    window: Optional[ReportWindow] = None,
    warning_threshold: float = 0.8,
    currency: str = "INR",
) -> SpendingReport:
    """
    Compute the full spending report for a snapshot.

    With a window, every figure except the month-by-month trend is
    restricted to expenses inside it.
    """
    all_expenses = list(expenses)
    if window is not None:
        scoped = [e for e in all_expenses if window.contains(e.date)]
    else:
        scoped = all_expenses

    category_totals = totals_by_category(scoped)

    return SpendingReport(
        window=window,
        currency=currency,
        expense_count=len(scoped),
        total_spent=sum(category_totals.values(), ZERO),
        total_budgeted=sum((Decimal(v) for v in budgets.values()), ZERO),
        totals_by_category=category_totals,
        category_breakdown=category_breakdown(scoped),
        totals_by_month=totals_by_month(all_expenses),
        budget_status=budget_status(scoped, budgets, warning_threshold),
    )
