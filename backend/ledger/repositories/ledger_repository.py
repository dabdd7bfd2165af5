from __future__ import annotations

from typing import Protocol

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation
from ledger.domain.snapshot import Snapshot


ACCOUNT = "account"
CATEGORY = "category"
OPERATION = "operation"


class LedgerRepository(Protocol):
    """
    CRUD contract used by the services and by import/export.
    Callers generate ids and validate business rules; the repository only
    guarantees id uniqueness and existence checks.
    """

    def list_accounts(self) -> list[BankAccount]: ...
    def get_account(self, account_id: str) -> BankAccount: ...
    def create_account(self, account: BankAccount) -> None: ...
    def update_account(self, account: BankAccount) -> None: ...
    def delete_account(self, account_id: str) -> None: ...

    def list_categories(self) -> list[Category]: ...
    def get_category(self, category_id: str) -> Category: ...
    def create_category(self, category: Category) -> None: ...
    def update_category(self, category: Category) -> None: ...
    def delete_category(self, category_id: str) -> None: ...

    def list_operations(self) -> list[Operation]: ...
    def get_operation(self, operation_id: str) -> Operation: ...
    def create_operation(self, operation: Operation) -> None: ...
    def update_operation(self, operation: Operation) -> None: ...
    def delete_operation(self, operation_id: str) -> None: ...

    def replace_all(self, snapshot: Snapshot) -> None:
        """Overwrite every collection with the snapshot content."""
        ...


class SnapshotStore(LedgerRepository, Protocol):
    """A repository that can also hand out / take its whole content at once."""

    def load(self) -> Snapshot: ...
    def save(self, snapshot: Snapshot) -> None: ...
