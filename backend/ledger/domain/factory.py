from __future__ import annotations

import datetime as dt
from typing import Callable, Optional
from uuid import uuid4

from ledger.domain.account import BankAccount
from ledger.domain.category import Category, CategoryType
from ledger.domain.operation import Operation, OperationType


IdGenerator = Callable[[], str]


def uuid_generator() -> str:
    return str(uuid4())


class DomainFactory:
    """
    Builds validated entities with fresh ids.
    The repository trusts whatever it receives, so every business check
    on new entities lives here.
    """

    def __init__(self, id_generator: IdGenerator = uuid_generator) -> None:
        self._new_id = id_generator

    def create_bank_account(self, name: str, initial_balance: float = 0.0) -> BankAccount:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("account name is required")
        if initial_balance < 0:
            raise ValueError("initial balance cannot be negative")
        return BankAccount(id=self._new_id(), name=name.strip(), balance=float(initial_balance))

    def create_category(self, name: str, category_type: CategoryType) -> Category:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("category name is required")
        try:
            kind = CategoryType(category_type)
        except ValueError:
            raise ValueError(f"invalid category type (got '{category_type}')")
        return Category(id=self._new_id(), type=kind, name=name.strip())

    def create_operation(
        self,
        op_type: OperationType,
        account_id: str,
        category_id: str,
        amount: float,
        date: dt.datetime,
        description: Optional[str] = None,
    ) -> Operation:
        try:
            kind = OperationType(op_type)
        except ValueError:
            raise ValueError(f"invalid operation type (got '{op_type}')")
        if not isinstance(account_id, str) or not account_id.strip():
            raise ValueError("bank account id is required")
        if not isinstance(category_id, str) or not category_id.strip():
            raise ValueError("category id is required")
        if not amount > 0:
            raise ValueError("operation amount must be positive")
        if not isinstance(date, dt.datetime):
            raise ValueError("operation date is required")

        if date.tzinfo is None:
            date = date.replace(tzinfo=dt.timezone.utc)
        desc = (description or "").strip() or None

        return Operation(
            id=self._new_id(),
            type=kind,
            bank_account_id=account_id.strip(),
            category_id=category_id.strip(),
            amount=float(amount),
            date=date,
            description=desc,
        )
