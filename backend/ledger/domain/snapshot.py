from __future__ import annotations

from dataclasses import dataclass, field

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation


@dataclass
class Snapshot:
    """Every account, category and operation at one instant."""
    accounts: list[BankAccount] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)

    def copy(self) -> "Snapshot":
        return Snapshot(
            accounts=list(self.accounts),
            categories=list(self.categories),
            operations=list(self.operations),
        )

    def is_empty(self) -> bool:
        return not (self.accounts or self.categories or self.operations)
