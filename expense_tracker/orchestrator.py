"""
Main Orchestrator for the Expense Tracker

This module ties the stores, the reporting calculator and the audit
logger together behind the action surface a presentation layer uses:

1. Expenses: add / update / delete / clear / list
2. Budgets: set / list
3. Reports: compute for an optional window

DESIGN DECISION: The orchestrator holds no data of its own.
Stores own expenses and budgets; reports are recomputed from a fresh
snapshot on every call. UI concerns (navigation after add, confirm
dialogs) stay with the caller.
"""

from decimal import Decimal
from typing import Any, Optional, Union
from uuid import UUID

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.expense import Budget, Expense, ExpenseDraft
from expense_tracker.models.report import ReportWindow, SpendingReport
from expense_tracker.reports import build_report
from expense_tracker.services.storage import (
    FileBackend,
    InMemoryBackend,
    KeyValueBackend,
)
from expense_tracker.stores import BudgetStore, ExpenseStore


class ExpenseTracker:
    """
    Facade over the expense and budget stores.

    Every method runs to completion synchronously. Storage errors from
    mutations propagate unchanged (the store has already rolled back).
    """

    def __init__(
        self,
        expense_store: ExpenseStore,
        budget_store: BudgetStore,
        audit_logger: Optional[AuditLogger] = None,
        warning_threshold: float = 0.8,
        currency: str = "INR",
    ):
        self.expenses = expense_store
        self.budgets = budget_store
        self._audit_logger = audit_logger or AuditLogger()
        self._warning_threshold = warning_threshold
        self._currency = currency

    # Expenses

    def add_expense(self, expense_data: Union[ExpenseDraft, dict[str, Any]]) -> Expense:
        return self.expenses.add(expense_data)

    def update_expense(self, expense: Union[Expense, dict[str, Any]]) -> Optional[Expense]:
        return self.expenses.update(expense)

    def delete_expense(self, expense_id: Union[UUID, str]) -> bool:
        return self.expenses.delete(expense_id)

    def clear_all_expenses(self) -> None:
        self.expenses.clear_all()

    def list_expenses(self) -> list[Expense]:
        return self.expenses.list()

    # Budgets

    def set_budget(self, category: str, limit: Union[Decimal, int, float, str]) -> Budget:
        return self.budgets.set(category, limit)

    def list_budgets(self) -> dict[str, Decimal]:
        return self.budgets.list()

    # Reports

    def report(self, window: Optional[ReportWindow] = None) -> SpendingReport:
        """
        Compute a spending report from the current snapshot.

        Args:
            window: Restrict figures to this date range. The caller
                    decides what "current" means, e.g.
                    ReportWindow.current_month(date.today()).
        """
        report = build_report(
            self.expenses.list(),
            self.budgets.list(),
            window=window,
            warning_threshold=self._warning_threshold,
            currency=self._currency,
        )
        self._audit_logger.log_report_computed(
            window_label=window.label if window else None,
            expense_count=report.expense_count,
            over_budget=report.over_budget_categories,
        )
        return report


def create_backend(settings: Optional[Settings] = None) -> KeyValueBackend:
    """Build the key-value backend selected in settings."""
    storage = (settings or get_settings()).storage
    if storage.backend == "memory":
        return InMemoryBackend()
    return FileBackend(storage.data_dir, write_retries=storage.write_retries)


def create_tracker(
    settings: Optional[Settings] = None,
    backend: Optional[KeyValueBackend] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> ExpenseTracker:
    """
    Factory function to create a ready-to-use tracker.

    Args:
        settings: Settings to use; defaults to get_settings()
        backend: Explicit backend; takes precedence over settings.
                 Pass InMemoryBackend() for tests.
        audit_logger: Shared audit logger for stores and reports

    Raises:
        CorruptDataError: If previously persisted data cannot be parsed
        BackendUnavailableError: If the backend cannot be read
    """
    settings = settings or get_settings()
    storage = settings.storage
    app = settings.app

    configure_logging(debug=app.debug_mode)

    if backend is None:
        backend = create_backend(settings)
    audit_logger = audit_logger or AuditLogger()

    return ExpenseTracker(
        expense_store=ExpenseStore(backend, storage.expenses_key, audit_logger),
        budget_store=BudgetStore(backend, storage.budgets_key, audit_logger),
        audit_logger=audit_logger,
        warning_threshold=app.budget_warning_threshold,
        currency=app.currency,
    )
