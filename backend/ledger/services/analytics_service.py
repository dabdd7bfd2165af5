from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
import datetime as dt

from ledger.domain.operation import Operation, OperationType
from ledger.repositories.ledger_repository import LedgerRepository


@dataclass(frozen=True)
class CategoryTotals:
    income: float = 0.0
    expense: float = 0.0


class AnalyticsService:
    """Period reports. Both bounds are inclusive calendar days."""

    def __init__(self, *, repo: LedgerRepository) -> None:
        self._repo = repo

    def difference(self, start: dt.date, end: dt.date) -> float:
        """Income minus expense over the period."""
        income = 0.0
        expense = 0.0
        for op in self._operations_in(start, end):
            if op.type == OperationType.INCOME:
                income += op.amount
            else:
                expense += op.amount
        return income - expense

    def group_by_category(self, start: dt.date, end: dt.date) -> dict[str, CategoryTotals]:
        names = {c.id: c.name for c in self._repo.list_categories()}
        acc: dict[str, dict[OperationType, float]] = defaultdict(lambda: defaultdict(float))

        for op in self._operations_in(start, end):
            name = names.get(op.category_id)
            if name is None:
                # dangling category reference (e.g. after an import)
                continue
            acc[name][op.type] += op.amount

        return {
            name: CategoryTotals(
                income=totals[OperationType.INCOME],
                expense=totals[OperationType.EXPENSE],
            )
            for name, totals in sorted(acc.items(), key=lambda kv: kv[0].casefold())
        }

    def average_daily_expense(self, start: dt.date, end: dt.date) -> float:
        expense = sum(
            op.amount for op in self._operations_in(start, end) if op.type == OperationType.EXPENSE
        )
        days = (_as_date(end) - _as_date(start)).days + 1
        return expense / days

    def _operations_in(self, start: dt.date, end: dt.date) -> list[Operation]:
        lo, hi = _as_date(start), _as_date(end)
        if hi < lo:
            raise ValueError("period end cannot precede start")
        return [op for op in self._repo.list_operations() if lo <= op.date.date() <= hi]


def _as_date(value: dt.date) -> dt.date:
    # datetime is a subclass of date
    if isinstance(value, dt.datetime):
        return value.date()
    return value
