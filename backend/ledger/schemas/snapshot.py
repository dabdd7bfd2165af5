from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.domain.account import BankAccount
from ledger.domain.category import Category, CategoryType
from ledger.domain.operation import Operation, OperationType
from ledger.domain.snapshot import Snapshot


class AccountRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str
    balance: float

    @classmethod
    def from_domain(cls, account: BankAccount) -> "AccountRecord":
        return cls(id=account.id, name=account.name, balance=account.balance)

    def to_domain(self) -> BankAccount:
        return BankAccount(id=self.id, name=self.name, balance=self.balance)


class CategoryRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    type: CategoryType
    name: str

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryRecord":
        return cls(id=category.id, type=category.type, name=category.name)

    def to_domain(self) -> Category:
        return Category(id=self.id, type=self.type, name=self.name)


class OperationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    type: OperationType
    bank_account_id: str
    category_id: str
    amount: float
    date: dt.datetime  # RFC 3339 on disk
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def _empty_description_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("date")
    @classmethod
    def _naive_date_is_utc(cls, v: dt.datetime) -> dt.datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v

    @classmethod
    def from_domain(cls, op: Operation) -> "OperationRecord":
        return cls(
            id=op.id,
            type=op.type,
            bank_account_id=op.bank_account_id,
            category_id=op.category_id,
            amount=op.amount,
            date=op.date,
            description=op.description,
        )

    def to_domain(self) -> Operation:
        return Operation(
            id=self.id,
            type=self.type,
            bank_account_id=self.bank_account_id,
            category_id=self.category_id,
            amount=self.amount,
            date=self.date,
            description=self.description,
        )


class SnapshotDocument(BaseModel):
    """
    On-disk / JSON export layout: three named arrays.
    Missing or null arrays read as empty (the first-run file written by the
    earlier tool contained `null` for empty collections).
    """
    model_config = ConfigDict(extra="ignore")

    accounts: list[AccountRecord] = Field(default_factory=list)
    categories: list[CategoryRecord] = Field(default_factory=list)
    operations: list[OperationRecord] = Field(default_factory=list)

    @field_validator("accounts", "categories", "operations", mode="before")
    @classmethod
    def _null_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SnapshotDocument":
        return cls(
            accounts=[AccountRecord.from_domain(a) for a in snapshot.accounts],
            categories=[CategoryRecord.from_domain(c) for c in snapshot.categories],
            operations=[OperationRecord.from_domain(o) for o in snapshot.operations],
        )

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            accounts=[a.to_domain() for a in self.accounts],
            categories=[c.to_domain() for c in self.categories],
            operations=[o.to_domain() for o in self.operations],
        )

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict; `description` is left out when empty."""
        return {
            "accounts": [a.model_dump(mode="json") for a in self.accounts],
            "categories": [c.model_dump(mode="json") for c in self.categories],
            "operations": [o.model_dump(mode="json", exclude_none=True) for o in self.operations],
        }
