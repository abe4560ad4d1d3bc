"""
Expense Store

Owns the expense collection and keeps it in sync with the backend.

DESIGN DECISION: Every mutation rewrites the whole collection under one key.
There is no delta log: the collection is small, and a single blob
cannot be left half-updated.

Mutations are computed on a copy, persisted, and only then committed.
If the write fails the in-memory collection is untouched, so what the
caller sees always matches what is on disk.
"""

from typing import Any, Optional, Union
from uuid import UUID, uuid4

from pydantic import TypeAdapter, ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.services.storage import (
    CorruptDataError,
    KeyValueBackend,
    StorageError,
)


_EXPENSE_LIST = TypeAdapter(list[Expense])


class ExpenseStore:
    """
    Create, update, delete and list expenses.

    Expenses are kept in insertion order; edits keep their position.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = "expenses",
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Load any previously persisted expenses.

        Raises:
            CorruptDataError: If the stored collection cannot be parsed
            BackendUnavailableError: If the backend cannot be read
        """
        self._backend = backend
        self._key = key
        self._audit = audit_logger or AuditLogger()
        self._expenses: list[Expense] = self._load()

    def _load(self) -> list[Expense]:
        blob = self._backend.read(self._key)
        if blob is None:
            return []

        try:
            expenses = _EXPENSE_LIST.validate_json(blob)
        except ValidationError as e:
            raise CorruptDataError(f"Stored expenses under '{self._key}' are invalid: {e}") from e

        if len({e.id for e in expenses}) != len(expenses):
            raise CorruptDataError(f"Stored expenses under '{self._key}' contain duplicate ids")

        self._audit.log_data_loaded(self._key, len(expenses))
        return expenses

    def _commit(self, expenses: list[Expense], operation: str) -> None:
        """Persist the new collection, then make it current."""
        blob = _EXPENSE_LIST.dump_json(expenses).decode("utf-8")
        try:
            self._backend.write(self._key, blob)
        except StorageError as e:
            self._audit.log_persistence_failed(self._key, operation, str(e))
            raise
        self._expenses = expenses

    @staticmethod
    def _parse_id(expense_id: Union[UUID, str]) -> Optional[UUID]:
        """Coerce a caller-supplied id; None if it is not a UUID at all."""
        if isinstance(expense_id, UUID):
            return expense_id
        try:
            return UUID(str(expense_id))
        except ValueError:
            return None

    def _index_of(self, expense_id: Optional[UUID]) -> Optional[int]:
        if expense_id is None:
            return None
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return idx
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, expense_data: Union[ExpenseDraft, dict[str, Any]]) -> Expense:
        """
        Store a new expense under a fresh id.

        Any `id` in the submitted data is ignored.

        Raises:
            ValidationError: If the data is not a valid expense
            StorageError: If the collection could not be persisted
        """
        if isinstance(expense_data, ExpenseDraft):
            draft = expense_data
        else:
            draft = ExpenseDraft.model_validate(expense_data)

        expense = Expense.from_draft(draft)
        existing = {e.id for e in self._expenses}
        while expense.id in existing:
            expense = expense.model_copy(update={"id": uuid4()})

        self._commit([*self._expenses, expense], "add")
        self._audit.log_expense_added(expense.id, expense.category, expense.amount)
        return expense

    def update(self, expense: Union[Expense, dict[str, Any]]) -> Optional[Expense]:
        """
        Replace every field of the expense with the same id.

        Returns the stored expense, or None if no expense has that id
        (the collection is left untouched).

        Raises:
            ValueError: If raw data has no `id` to match against
                        (ValidationError if it is not a valid expense)
        """
        if not isinstance(expense, Expense):
            if expense.get("id") is None:
                raise ValueError("update() needs the id of the expense to replace")
            expense = Expense.model_validate(expense)

        idx = self._index_of(expense.id)
        if idx is None:
            self._audit.log_expense_updated(expense.id, found=False)
            return None

        updated = list(self._expenses)
        updated[idx] = expense
        self._commit(updated, "update")
        self._audit.log_expense_updated(expense.id, found=True)
        return expense

    def delete(self, expense_id: Union[UUID, str]) -> bool:
        """
        Remove an expense. Returns False if there was nothing to remove,
        including when the id is not even a well-formed UUID.
        """
        idx = self._index_of(self._parse_id(expense_id))
        if idx is None:
            self._audit.log_expense_deleted(expense_id, found=False)
            return False

        removed = self._expenses[idx]
        self._commit(self._expenses[:idx] + self._expenses[idx + 1:], "delete")
        self._audit.log_expense_deleted(removed.id, found=True)
        return True

    def clear_all(self) -> None:
        """Remove every expense and persist the empty collection."""
        removed = len(self._expenses)
        self._commit([], "clear_all")
        self._audit.log_expenses_cleared(removed)

    def list(self) -> list[Expense]:
        """All expenses in insertion order."""
        return list(self._expenses)

    def get(self, expense_id: Union[UUID, str]) -> Optional[Expense]:
        idx = self._index_of(self._parse_id(expense_id))
        return self._expenses[idx] if idx is not None else None

    def __len__(self) -> int:
        return len(self._expenses)
