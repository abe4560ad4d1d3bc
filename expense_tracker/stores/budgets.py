"""
Budget Store

Owns the category -> limit mapping. Budgets are upserted, never deleted:
setting a category again replaces its limit in place.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Budget
from expense_tracker.services.storage import (
    CorruptDataError,
    KeyValueBackend,
    StorageError,
)


_BUDGET_MAP = TypeAdapter(dict[str, Decimal])


class BudgetStore:
    """Set and list per-category budget limits."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = "budgets",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._backend = backend
        self._key = key
        self._audit = audit_logger or AuditLogger()
        self._budgets: dict[str, Decimal] = self._load()

    def _load(self) -> dict[str, Decimal]:
        blob = self._backend.read(self._key)
        if blob is None:
            return {}

        try:
            raw = _BUDGET_MAP.validate_json(blob)
            # Re-validate each entry so stored data obeys the same rules as new data
            budgets = [Budget(category=c, limit=limit) for c, limit in raw.items()]
        except ValidationError as e:
            raise CorruptDataError(f"Stored budgets under '{self._key}' are invalid: {e}") from e

        self._audit.log_data_loaded(self._key, len(budgets))
        return {b.category: b.limit for b in budgets}

    def set(self, category: str, limit: Union[Decimal, int, float, str]) -> Budget:
        """
        Insert or replace the budget for a category.

        Raises:
            ValidationError: If the category is empty or the limit negative
            StorageError: If the mapping could not be persisted
        """
        if isinstance(limit, float):
            # Go through str so 0.1 stays 0.1
            limit = str(limit)
        budget = Budget(category=category, limit=limit)
        previous = self._budgets.get(budget.category)

        updated = dict(self._budgets)
        updated[budget.category] = budget.limit

        blob = _BUDGET_MAP.dump_json(updated).decode("utf-8")
        try:
            self._backend.write(self._key, blob)
        except StorageError as e:
            self._audit.log_persistence_failed(self._key, "set", str(e))
            raise
        self._budgets = updated

        self._audit.log_budget_set(budget.category, budget.limit, previous)
        return budget

    def list(self) -> dict[str, Decimal]:
        """Category -> limit, in the order categories were first budgeted."""
        return dict(self._budgets)

    def get(self, category: str) -> Optional[Budget]:
        category = category.strip()
        if category not in self._budgets:
            return None
        return Budget(category=category, limit=self._budgets[category])

    def __len__(self) -> int:
        return len(self._budgets)
