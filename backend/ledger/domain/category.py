from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger.domain.visitor import EntityVisitor


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    type: CategoryType
    name: str

    def accept(self, visitor: EntityVisitor) -> None:
        visitor.visit_category(self)
