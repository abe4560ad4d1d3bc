"""
Tests for the reporting calculator

The calculator is pure, so these tests build expense lists directly
without going through a store.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.expense import Expense
from expense_tracker.models.report import BudgetLevel, ReportWindow
from expense_tracker.reports import (
    budget_status,
    build_report,
    category_breakdown,
    total_in_window,
    totals_by_category,
    totals_by_month,
)


def _expense(category: str, amount: str, day: date = date(2024, 10, 5)) -> Expense:
    return Expense(amount=Decimal(amount), category=category, date=day)


@pytest.fixture
def sample_expenses():
    return [
        _expense("Food", "100"),
        _expense("Food", "50"),
        _expense("Travel", "30"),
    ]


class TestTotals:
    """Tests for the total aggregations."""

    def test_totals_by_category(self, sample_expenses):
        """Test amounts are summed per category."""
        assert totals_by_category(sample_expenses) == {
            "Food": Decimal("150"),
            "Travel": Decimal("30"),
        }

    def test_totals_by_category_empty(self):
        """Test no expenses means no totals."""
        assert totals_by_category([]) == {}

    def test_total_in_window(self):
        """Test only expenses inside the half-open window count."""
        expenses = [
            _expense("Food", "10", date(2024, 9, 30)),
            _expense("Food", "20", date(2024, 10, 1)),
            _expense("Food", "30", date(2024, 10, 31)),
            _expense("Food", "40", date(2024, 11, 1)),
        ]
        assert total_in_window(expenses, ReportWindow.month(2024, 10)) == Decimal("50")

    def test_total_in_window_empty(self):
        """Test an empty window totals zero."""
        assert total_in_window([], ReportWindow.month(2024, 10)) == Decimal("0")

    def test_totals_by_month_sorted(self):
        """Test the monthly trend is ordered oldest first."""
        expenses = [
            _expense("Food", "5", date(2024, 11, 2)),
            _expense("Food", "7", date(2023, 12, 31)),
            _expense("Travel", "3", date(2024, 11, 20)),
        ]
        trend = totals_by_month(expenses)
        assert list(trend) == ["2023-12", "2024-11"]
        assert trend["2024-11"] == Decimal("8")

    def test_category_breakdown(self, sample_expenses):
        """Test category shares add up and are sorted largest first."""
        shares = category_breakdown(sample_expenses)
        assert [s.category for s in shares] == ["Food", "Travel"]
        assert shares[0].percentage == Decimal("83.33")
        assert shares[1].percentage == Decimal("16.67")

    def test_category_breakdown_empty(self):
        """Test no spend gives no breakdown rather than dividing by zero."""
        assert category_breakdown([]) == []


class TestBudgetStatus:
    """Tests for budget-vs-actual calculations."""

    def test_overspent_category(self, sample_expenses):
        """Test Food 150 against a 120 budget."""
        rows = budget_status(sample_expenses, {"Food": Decimal("120")})
        food = next(r for r in rows if r.category == "Food")

        assert food.spent == Decimal("150")
        assert food.remaining == Decimal("-30")
        assert food.utilization == Decimal("1.25")
        assert food.level == BudgetLevel.OVER
        assert food.is_over_budget

    def test_unbudgeted_category_is_spend_only(self, sample_expenses):
        """Test Travel with no budget is reported with spending only."""
        rows = budget_status(sample_expenses, {"Food": Decimal("120")})
        travel = next(r for r in rows if r.category == "Travel")

        assert travel.spent == Decimal("30")
        assert travel.has_budget is False
        assert travel.limit is None
        assert travel.remaining is None
        assert travel.utilization is None
        assert travel.level == BudgetLevel.NO_BUDGET

    def test_budget_without_spending(self):
        """Test a budgeted category with no expenses still appears."""
        rows = budget_status([], {"Rent": Decimal("1000")})
        assert len(rows) == 1
        assert rows[0].spent == Decimal("0")
        assert rows[0].remaining == Decimal("1000")
        assert rows[0].utilization == Decimal("0")
        assert rows[0].level == BudgetLevel.OK

    def test_zero_limit_without_spending(self):
        """Test a zero budget with no spend has no utilization and is ok."""
        rows = budget_status([], {"Gifts": Decimal("0")})
        assert rows[0].utilization is None
        assert rows[0].remaining == Decimal("0")
        assert rows[0].level == BudgetLevel.OK

    def test_zero_limit_with_spending(self):
        """Test spending against a zero budget is over, never a division error."""
        rows = budget_status([_expense("Gifts", "10")], {"Gifts": Decimal("0")})
        assert rows[0].utilization is None
        assert rows[0].remaining == Decimal("-10")
        assert rows[0].level == BudgetLevel.OVER

    def test_warning_threshold(self):
        """Test utilization at the threshold is flagged as a warning."""
        expenses = [_expense("Food", "160")]
        rows = budget_status(expenses, {"Food": Decimal("200")}, warning_threshold=0.8)
        assert rows[0].utilization == Decimal("0.8")
        assert rows[0].level == BudgetLevel.WARNING

    def test_exactly_at_limit_is_not_over(self):
        """Test spending equal to the limit is a warning, not over."""
        rows = budget_status([_expense("Food", "200")], {"Food": Decimal("200")})
        assert rows[0].remaining == Decimal("0")
        assert rows[0].level == BudgetLevel.WARNING

    def test_rows_sorted_by_category(self):
        """Test rows are ordered by category name."""
        expenses = [_expense("Travel", "1"), _expense("Bills", "1")]
        rows = budget_status(expenses, {"Food": Decimal("5")})
        assert [r.category for r in rows] == ["Bills", "Food", "Travel"]


class TestBuildReport:
    """Tests for the combined report."""

    def test_report_without_window(self, sample_expenses):
        """Test an unwindowed report covers every expense."""
        report = build_report(sample_expenses, {"Food": Decimal("120")})

        assert report.window is None
        assert report.expense_count == 3
        assert report.total_spent == Decimal("180")
        assert report.total_budgeted == Decimal("120")
        assert report.over_budget_categories == ["Food"]
        assert report.status_for("Travel").level == BudgetLevel.NO_BUDGET
        assert report.status_for("Nothing") is None

    def test_report_with_window(self):
        """Test a windowed report restricts everything except the monthly trend."""
        expenses = [
            _expense("Food", "100", date(2024, 9, 15)),
            _expense("Food", "40", date(2024, 10, 3)),
            _expense("Travel", "60", date(2024, 10, 20)),
        ]
        report = build_report(
            expenses,
            {"Food": Decimal("50")},
            window=ReportWindow.month(2024, 10),
        )

        assert report.expense_count == 2
        assert report.total_spent == Decimal("100")
        assert report.totals_by_category == {"Food": Decimal("40"), "Travel": Decimal("60")}
        assert report.status_for("Food").level == BudgetLevel.WARNING
        assert report.totals_by_month == {
            "2024-09": Decimal("100"),
            "2024-10": Decimal("100"),
        }

    def test_report_is_deterministic(self, sample_expenses):
        """Test the same snapshot always yields the same report."""
        budgets = {"Food": Decimal("120"), "Travel": Decimal("0")}
        window = ReportWindow.month(2024, 10)
        first = build_report(sample_expenses, budgets, window)
        second = build_report(list(sample_expenses), dict(budgets), window)
        assert first == second

    def test_report_does_not_mutate_inputs(self, sample_expenses):
        """Test the calculator leaves its inputs untouched."""
        budgets = {"Food": Decimal("120")}
        snapshot = list(sample_expenses)
        build_report(sample_expenses, budgets)
        assert sample_expenses == snapshot
        assert budgets == {"Food": Decimal("120")}

    def test_report_currency(self, sample_expenses):
        """Test the currency label is carried through."""
        report = build_report(sample_expenses, {}, currency="EUR")
        assert report.currency == "EUR"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
