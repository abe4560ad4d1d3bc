"""
Report Models

Output shapes of the reporting calculator. These are view-ready:
a presentation layer can render them without further arithmetic.

DESIGN DECISION: Utilization is Optional rather than float('inf') or NaN.
A zero limit has no meaningful ratio, and None survives JSON
serialization where infinities do not.
"""

import calendar
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ReportWindow(BaseModel):
    """
    A half-open date range [start, end).

    The caller always supplies the dates; nothing here reads the clock.
    """

    start: dt.date = Field(..., description="First day included")
    end: dt.date = Field(..., description="First day excluded")

    @model_validator(mode='after')
    def validate_range(self) -> 'ReportWindow':
        if self.end <= self.start:
            raise ValueError("Report window end must be after start")
        return self

    @classmethod
    def month(cls, year: int, month: int) -> 'ReportWindow':
        """Window covering one calendar month."""
        start = dt.date(year, month, 1)
        _, days = calendar.monthrange(year, month)
        return cls(start=start, end=start + dt.timedelta(days=days))

    @classmethod
    def current_month(cls, today: dt.date) -> 'ReportWindow':
        """Window covering the month that contains `today`."""
        return cls.month(today.year, today.month)

    def contains(self, day: dt.date) -> bool:
        return self.start <= day < self.end

    @property
    def label(self) -> str:
        """Human-readable description of the window."""
        last = self.end - dt.timedelta(days=1)
        if self.start.day == 1 and last.month == self.start.month and self.end.day == 1:
            return self.start.strftime('%B %Y')
        if self.start == last:
            return f"on {self.start.strftime('%d %b %Y')}"
        return f"from {self.start.strftime('%d %b %Y')} to {last.strftime('%d %b %Y')}"


class BudgetLevel(str, Enum):
    """How a category's spending compares to its budget."""
    NO_BUDGET = "no_budget"  # Spend-only category
    OK = "ok"
    WARNING = "warning"      # At or above the warning threshold
    OVER = "over"            # Spent more than the limit


class BudgetStatus(BaseModel):
    """Budget-vs-actual for one category."""

    category: str
    spent: Decimal = Field(default=Decimal("0"), ge=0)
    limit: Optional[Decimal] = Field(
        default=None,
        description="Budget limit, None for spend-only categories"
    )
    remaining: Optional[Decimal] = Field(
        default=None,
        description="limit - spent; negative means overspent"
    )
    utilization: Optional[Decimal] = Field(
        default=None,
        description="spent / limit; None when there is no budget or the limit is zero"
    )
    level: BudgetLevel = BudgetLevel.NO_BUDGET

    @property
    def has_budget(self) -> bool:
        return self.limit is not None

    @property
    def is_over_budget(self) -> bool:
        return self.level == BudgetLevel.OVER


class CategoryShare(BaseModel):
    """One category's slice of total spending."""

    category: str
    total: Decimal
    percentage: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Share of total spend, rounded to 2 places"
    )


class SpendingReport(BaseModel):
    """
    Everything the reports view needs, computed from one snapshot.

    When `window` is set, every figure except `totals_by_month` is
    restricted to expenses inside it.
    """

    window: Optional[ReportWindow] = None
    currency: str = "INR"
    expense_count: int = Field(default=0, ge=0)
    total_spent: Decimal = Decimal("0")
    total_budgeted: Decimal = Decimal("0")
    totals_by_category: dict[str, Decimal] = Field(default_factory=dict)
    category_breakdown: list[CategoryShare] = Field(default_factory=list)
    totals_by_month: dict[str, Decimal] = Field(default_factory=dict)
    budget_status: list[BudgetStatus] = Field(default_factory=list)

    @property
    def over_budget_categories(self) -> list[str]:
        return [s.category for s in self.budget_status if s.is_over_budget]

    def status_for(self, category: str) -> Optional[BudgetStatus]:
        """Get the budget status row for a category, if it has one."""
        for status in self.budget_status:
            if status.category == category:
                return status
        return None
