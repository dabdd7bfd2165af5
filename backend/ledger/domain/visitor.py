from __future__ import annotations

from typing import Protocol

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation


class EntityVisitor(Protocol):
    def visit_account(self, account: BankAccount) -> None: ...
    def visit_category(self, category: Category) -> None: ...
    def visit_operation(self, operation: Operation) -> None: ...
