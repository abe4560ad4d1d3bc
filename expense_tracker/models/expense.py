"""
Core Data Models for the Expense Tracker

These models define the strict schemas for expenses and budgets.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Serialize losslessly for the key-value backend

DESIGN DECISION: Categories are free text, not an enum.
Users invent their own categories, and budgets may reference categories
that have no expenses yet (and vice versa). DEFAULT_CATEGORIES is only a
suggestion list for presentation layers.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Travel",
    "Rent",
    "Shopping",
    "Entertainment",
    "Utilities",
    "Health",
    "Education",
    "Other",
)


CategoryName = Annotated[
    str,
    Field(min_length=1, max_length=50, description="Category label"),
]


# =============================================================================
# EXPENSES
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    Expense data as submitted by the user, before it has an identity.

    The store turns a draft into an Expense by assigning a fresh id.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: Annotated[
        Decimal,
        Field(gt=0, decimal_places=2, description="Amount spent (must be positive)")
    ]
    category: CategoryName
    date: dt.date = Field(
        ...,
        description="Calendar date of the expense"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Optional free-text description"
    )


class Expense(ExpenseDraft):
    """
    A stored expense.

    Every field except `id` may be replaced on edit. Instances are
    immutable; an edit produces a new Expense with the same id.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )

    @classmethod
    def from_draft(cls, draft: ExpenseDraft) -> "Expense":
        """Create a new expense with a fresh id from a draft."""
        return cls(**draft.model_dump())


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseModel):
    """
    Spending ceiling for one category over a period.

    A limit of zero is a real budget ("spend nothing here"),
    not the absence of one.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    category: CategoryName
    limit: Annotated[
        Decimal,
        Field(ge=0, decimal_places=2, description="Spending ceiling (non-negative)")
    ]
