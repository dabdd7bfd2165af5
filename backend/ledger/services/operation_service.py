from __future__ import annotations

from dataclasses import replace
import datetime as dt
from typing import Optional

from ledger.domain.category import CategoryType
from ledger.domain.factory import DomainFactory
from ledger.domain.operation import Operation, OperationType
from ledger.repositories.ledger_repository import LedgerRepository


_MATCHING_CATEGORY = {
    OperationType.INCOME: CategoryType.INCOME,
    OperationType.EXPENSE: CategoryType.EXPENSE,
}


class OperationService:
    """
    Operation lifecycle; keeps the account balance in step with every
    add / edit / delete.
    """

    def __init__(self, *, repo: LedgerRepository, factory: DomainFactory) -> None:
        self._repo = repo
        self._factory = factory

    def add_operation(
        self,
        op_type: OperationType,
        account_id: str,
        category_id: str,
        amount: float,
        date: dt.datetime,
        description: Optional[str] = None,
    ) -> Operation:
        self._ensure_category_matches(category_id, op_type)
        self._repo.get_account(account_id)

        operation = self._factory.create_operation(
            op_type, account_id, category_id, amount, date, description
        )
        self._repo.create_operation(operation)
        self._apply_effect(operation, sign=1)
        return operation

    def update_operation(
        self,
        operation_id: str,
        op_type: OperationType,
        account_id: str,
        category_id: str,
        amount: float,
        date: dt.datetime,
        description: Optional[str] = None,
    ) -> Operation:
        previous = self._repo.get_operation(operation_id)
        self._ensure_category_matches(category_id, op_type)
        self._repo.get_account(account_id)

        # validate before touching any balance
        candidate = self._factory.create_operation(
            op_type, account_id, category_id, amount, date, description
        )
        updated = replace(candidate, id=operation_id)

        self._apply_effect(previous, sign=-1)
        self._repo.update_operation(updated)
        self._apply_effect(updated, sign=1)
        return updated

    def delete_operation(self, operation_id: str) -> None:
        operation = self._repo.get_operation(operation_id)
        self._repo.delete_operation(operation_id)
        self._apply_effect(operation, sign=-1)

    def list_operations(self) -> list[Operation]:
        return sorted(self._repo.list_operations(), key=lambda o: (o.date, o.id))

    # ---------- helpers ----------
    def _ensure_category_matches(self, category_id: str, op_type: OperationType) -> None:
        category = self._repo.get_category(category_id)
        expected = _MATCHING_CATEGORY.get(OperationType(op_type))
        if category.type != expected:
            raise ValueError(
                f"category {category.name} is {category.type.value}, "
                f"but operation is {OperationType(op_type).value}"
            )

    def _apply_effect(self, operation: Operation, *, sign: int) -> None:
        account = self._repo.get_account(operation.bank_account_id)
        balance = account.balance + sign * operation.signed_amount()
        self._repo.update_account(replace(account, balance=balance))
