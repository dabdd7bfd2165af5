from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger.domain.visitor import EntityVisitor


@dataclass(frozen=True, slots=True)
class BankAccount:
    """
    Bank account with its current balance.
    The balance may go negative after a recalculation; the factory only
    rejects a negative *initial* balance.
    """
    id: str
    name: str
    balance: float = 0.0

    def accept(self, visitor: EntityVisitor) -> None:
        visitor.visit_account(self)
