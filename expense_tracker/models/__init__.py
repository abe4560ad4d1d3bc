"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the stores and reports conforms to these schemas.
"""

from expense_tracker.models.expense import (
    DEFAULT_CATEGORIES,
    Budget,
    Expense,
    ExpenseDraft,
)
from expense_tracker.models.report import (
    BudgetLevel,
    BudgetStatus,
    CategoryShare,
    ReportWindow,
    SpendingReport,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DEFAULT_CATEGORIES",
    "Budget",
    "Expense",
    "ExpenseDraft",
    # Report models
    "BudgetLevel",
    "BudgetStatus",
    "CategoryShare",
    "ReportWindow",
    "SpendingReport",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
