"""
Expense Tracker - Core Package

The data layer behind a personal expense-tracking app: expenses,
per-category budgets and the spending reports derived from them.

DESIGN PRINCIPLES:
1. Stores own their data, the calculator only reads it
2. Every mutation is persisted in full, immediately
3. Persistence failures are surfaced, never swallowed
4. Every mutation is auditable
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
