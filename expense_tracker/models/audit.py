"""
Audit Models for the Expense Tracker

Every mutation of expenses or budgets is described by an audit event.
This provides:
1. Traceability of what changed and when
2. Debugging information when persistence fails
3. A record of no-op edits that would otherwise be invisible

DESIGN DECISION: Audit events are written to the structured log only.
They are never persisted alongside user data.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_CLEARED = "expenses_cleared"

    # Budgets
    BUDGET_SET = "budget_set"

    # Persistence
    DATA_LOADED = "data_loaded"
    PERSISTENCE_FAILED = "persistence_failed"

    # Reports
    REPORT_COMPUTED = "report_computed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every store mutation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Expense id or budget category"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, category, amount)
        event = AuditEventBuilder.budget_set(category, limit, previous)
    """

    @staticmethod
    def expense_added(
        expense_id: UUID,
        category: str,
        amount: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {category} - {amount}",
            details={
                "category": category,
                "amount": str(amount),
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: UUID,
        found: bool,
    ) -> AuditEvent:
        if not found:
            return AuditEvent(
                event_type=AuditEventType.EXPENSE_UPDATED,
                severity=AuditSeverity.DEBUG,
                entity_type="expense",
                entity_id=str(expense_id),
                description="Update ignored: expense not found",
                details={"found": False},
            )
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(expense_id),
            description="Expense updated",
            details={"found": True},
        )

    @staticmethod
    def expense_deleted(
        expense_id: Union[UUID, str],
        found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            severity=AuditSeverity.INFO if found else AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=str(expense_id),
            description="Expense deleted" if found else "Delete ignored: expense not found",
            details={"found": found},
        )

    @staticmethod
    def expenses_cleared(removed: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_CLEARED,
            entity_type="expense",
            description=f"All expenses cleared ({removed} removed)",
            details={"removed": removed},
        )

    @staticmethod
    def budget_set(
        category: str,
        limit: Decimal,
        previous: Optional[Decimal],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=category,
            description=f"Budget set: {category} - {limit}",
            details={
                "limit": str(limit),
                "previous_limit": str(previous) if previous is not None else None,
            },
        )

    @staticmethod
    def data_loaded(
        key: str,
        record_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {record_count} records from '{key}'",
            details={
                "key": key,
                "record_count": record_count,
            },
        )

    @staticmethod
    def persistence_failed(
        key: str,
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Failed to persist '{key}' during {operation}; change rolled back",
            error_message=error_message,
            details={
                "key": key,
                "operation": operation,
            },
        )

    @staticmethod
    def report_computed(
        window_label: Optional[str],
        expense_count: int,
        over_budget: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="report",
            description=f"Report computed over {expense_count} expenses",
            details={
                "window": window_label,
                "expense_count": expense_count,
                "over_budget": over_budget,
            },
        )
