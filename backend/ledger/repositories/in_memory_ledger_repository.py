from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Callable

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation
from ledger.domain.snapshot import Snapshot
from ledger.repositories.entity_lists import (
    append_new,
    ensure_unique_ids,
    find_by_id,
    remove_by_id,
    replace_by_id,
)
from ledger.repositories.ledger_repository import ACCOUNT, CATEGORY, OPERATION


@dataclass
class InMemoryLedgerRepository:
    """
    Store kept in memory.
    - Same semantics as JsonLedgerRepository, minus the file
    - Handy behind CachedLedgerRepository in tests
    """
    _snapshot: Snapshot = field(default_factory=Snapshot)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def load(self) -> Snapshot:
        with self._lock:
            return self._snapshot.copy()

    def save(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshot = snapshot.copy()

    def replace_all(self, snapshot: Snapshot) -> None:
        ensure_unique_ids(snapshot)
        self.save(snapshot)

    def list_accounts(self) -> list[BankAccount]:
        return self.load().accounts

    def get_account(self, account_id: str) -> BankAccount:
        return find_by_id(self.load().accounts, ACCOUNT, account_id)

    def create_account(self, account: BankAccount) -> None:
        self._mutate(lambda s: append_new(s.accounts, ACCOUNT, account))

    def update_account(self, account: BankAccount) -> None:
        self._mutate(lambda s: replace_by_id(s.accounts, ACCOUNT, account))

    def delete_account(self, account_id: str) -> None:
        self._mutate(lambda s: remove_by_id(s.accounts, ACCOUNT, account_id))

    def list_categories(self) -> list[Category]:
        return self.load().categories

    def get_category(self, category_id: str) -> Category:
        return find_by_id(self.load().categories, CATEGORY, category_id)

    def create_category(self, category: Category) -> None:
        self._mutate(lambda s: append_new(s.categories, CATEGORY, category))

    def update_category(self, category: Category) -> None:
        self._mutate(lambda s: replace_by_id(s.categories, CATEGORY, category))

    def delete_category(self, category_id: str) -> None:
        self._mutate(lambda s: remove_by_id(s.categories, CATEGORY, category_id))

    def list_operations(self) -> list[Operation]:
        return self.load().operations

    def get_operation(self, operation_id: str) -> Operation:
        return find_by_id(self.load().operations, OPERATION, operation_id)

    def create_operation(self, operation: Operation) -> None:
        self._mutate(lambda s: append_new(s.operations, OPERATION, operation))

    def update_operation(self, operation: Operation) -> None:
        self._mutate(lambda s: replace_by_id(s.operations, OPERATION, operation))

    def delete_operation(self, operation_id: str) -> None:
        self._mutate(lambda s: remove_by_id(s.operations, OPERATION, operation_id))

    def _mutate(self, change: Callable[[Snapshot], None]) -> None:
        with self._lock:
            working = self._snapshot.copy()
            change(working)
            self._snapshot = working
