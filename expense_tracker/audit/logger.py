"""
Audit Logger

DESIGN DECISION: Every mutation of user data is logged.
This provides:
1. Complete traceability
2. Debugging capability when a write fails
3. Visibility into silent no-ops (updates/deletes of missing ids)

The audit logger:
- Is synchronous, like the stores that call it
- Writes structured JSON through structlog
- Never raises; a logging failure must not undo a successful mutation
"""

import logging
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug: bool = False) -> None:
    """
    Set the level for every expense_tracker logger.

    Debug mode also emits the debug-severity audit events
    (ignored updates and deletes).
    """
    logging.getLogger("expense_tracker").setLevel(logging.DEBUG if debug else logging.INFO)


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log only. Passing `history`
    keeps an in-process copy of every event, which tests and
    debugging views can inspect.
    """

    def __init__(self, history: Optional[list[AuditEvent]] = None):
        self._logger = structlog.get_logger("expense_tracker.audit")
        self.history = history

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (TypeError, ValueError) as e:
            # Unserializable details; keep the event id so it can be traced
            self._logger.error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )

        if self.history is not None:
            self.history.append(event)

    def log_expense_added(self, expense_id: UUID, category: str, amount: Decimal) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, category, amount))

    def log_expense_updated(self, expense_id: UUID, found: bool) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, found))

    def log_expense_deleted(self, expense_id: Union[UUID, str], found: bool) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id, found))

    def log_expenses_cleared(self, removed: int) -> None:
        self.log(AuditEventBuilder.expenses_cleared(removed))

    def log_budget_set(
        self,
        category: str,
        limit: Decimal,
        previous: Optional[Decimal],
    ) -> None:
        self.log(AuditEventBuilder.budget_set(category, limit, previous))

    def log_data_loaded(self, key: str, record_count: int) -> None:
        self.log(AuditEventBuilder.data_loaded(key, record_count))

    def log_persistence_failed(
        self,
        key: str,
        operation: str,
        error_message: str,
    ) -> None:
        """Log a write that failed and was rolled back."""
        self.log(AuditEventBuilder.persistence_failed(key, operation, error_message))

    def log_report_computed(
        self,
        window_label: Optional[str],
        expense_count: int,
        over_budget: list[str],
    ) -> None:
        self.log(AuditEventBuilder.report_computed(window_label, expense_count, over_budget))
