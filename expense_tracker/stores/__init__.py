"""Expense and budget stores."""

from expense_tracker.stores.budgets import BudgetStore
from expense_tracker.stores.expenses import ExpenseStore

__all__ = ["BudgetStore", "ExpenseStore"]
