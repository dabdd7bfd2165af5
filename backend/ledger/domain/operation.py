from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ledger.domain.visitor import EntityVisitor


class OperationType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True, slots=True)
class Operation:
    """
    Single income or expense movement on a bank account.
    `amount` is always positive, the direction comes from `type`.
    """
    id: str
    type: OperationType
    bank_account_id: str
    category_id: str
    amount: float
    date: dt.datetime
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.description == "":
            object.__setattr__(self, "description", None)

    def signed_amount(self) -> float:
        if self.type == OperationType.INCOME:
            return self.amount
        return -self.amount

    def accept(self, visitor: EntityVisitor) -> None:
        visitor.visit_operation(self)
