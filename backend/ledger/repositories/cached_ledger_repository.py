from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation
from ledger.domain.snapshot import Snapshot
from ledger.repositories.errors import NotFoundError, PoisonedCacheError
from ledger.repositories.ledger_repository import (
    ACCOUNT,
    CATEGORY,
    OPERATION,
    SnapshotStore,
)
from ledger.repositories.rw_lock import ReadWriteLock

logger = logging.getLogger(__name__)


class CachedLedgerRepository:
    """
    Write-through cache in front of a SnapshotStore.

    - The first call of any kind loads the whole store once; concurrent
      first callers wait for that single load and share its outcome.
    - Reads are served from memory only.
    - Writes go to the store first and touch memory only if the store
      accepted them, so the cache never holds something the file does not.
    - A failed initial load poisons the instance: every call raises
      PoisonedCacheError chained to the same error, without retrying.

    Ordering: list_* returns entities in store order (creation order,
    updates keep their slot).
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

        self._load_lock = threading.Lock()
        self._loaded = False
        self._load_error: Optional[BaseException] = None

        # writers are serialized end to end (store call + map update) so the
        # cache applies changes in the order the file received them
        self._write_lock = threading.Lock()
        self._maps_lock = ReadWriteLock()

        self._accounts: dict[str, BankAccount] = {}
        self._categories: dict[str, Category] = {}
        self._operations: dict[str, Operation] = {}

    # ---------- accounts ----------
    def list_accounts(self) -> list[BankAccount]:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return list(self._accounts.values())

    def get_account(self, account_id: str) -> BankAccount:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return _lookup(self._accounts, ACCOUNT, account_id)

    def create_account(self, account: BankAccount) -> None:
        with self._writing():
            self._store.create_account(account)
            with self._maps_lock.write_locked():
                self._accounts[account.id] = account

    def update_account(self, account: BankAccount) -> None:
        with self._writing():
            self._store.update_account(account)
            with self._maps_lock.write_locked():
                self._accounts[account.id] = account

    def delete_account(self, account_id: str) -> None:
        with self._writing():
            self._store.delete_account(account_id)
            with self._maps_lock.write_locked():
                self._accounts.pop(account_id, None)

    # ---------- categories ----------
    def list_categories(self) -> list[Category]:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return list(self._categories.values())

    def get_category(self, category_id: str) -> Category:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return _lookup(self._categories, CATEGORY, category_id)

    def create_category(self, category: Category) -> None:
        with self._writing():
            self._store.create_category(category)
            with self._maps_lock.write_locked():
                self._categories[category.id] = category

    def update_category(self, category: Category) -> None:
        with self._writing():
            self._store.update_category(category)
            with self._maps_lock.write_locked():
                self._categories[category.id] = category

    def delete_category(self, category_id: str) -> None:
        with self._writing():
            self._store.delete_category(category_id)
            with self._maps_lock.write_locked():
                self._categories.pop(category_id, None)

    # ---------- operations ----------
    def list_operations(self) -> list[Operation]:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return list(self._operations.values())

    def get_operation(self, operation_id: str) -> Operation:
        self._ensure_loaded()
        with self._maps_lock.read_locked():
            return _lookup(self._operations, OPERATION, operation_id)

    def create_operation(self, operation: Operation) -> None:
        with self._writing():
            self._store.create_operation(operation)
            with self._maps_lock.write_locked():
                self._operations[operation.id] = operation

    def update_operation(self, operation: Operation) -> None:
        with self._writing():
            self._store.update_operation(operation)
            with self._maps_lock.write_locked():
                self._operations[operation.id] = operation

    def delete_operation(self, operation_id: str) -> None:
        with self._writing():
            self._store.delete_operation(operation_id)
            with self._maps_lock.write_locked():
                self._operations.pop(operation_id, None)

    # ---------- snapshot ----------
    def replace_all(self, snapshot: Snapshot) -> None:
        with self._writing():
            self._store.replace_all(snapshot)
            self._fill(snapshot)

    # ---------- internals ----------
    @contextmanager
    def _writing(self) -> Iterator[None]:
        self._ensure_loaded()
        with self._write_lock:
            yield

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._load_lock:
            if not self._loaded and self._load_error is None:
                self._load_from_store()
        if self._load_error is not None:
            raise PoisonedCacheError(self._load_error) from self._load_error

    def _load_from_store(self) -> None:
        # caller holds _load_lock
        try:
            snapshot = self._store.load()
        except Exception as e:
            logger.error("initial ledger load failed, cache is poisoned: %s", e)
            self._load_error = e
            return

        self._fill(snapshot)
        self._loaded = True
        logger.info(
            "ledger cache loaded (%d accounts, %d categories, %d operations)",
            len(snapshot.accounts),
            len(snapshot.categories),
            len(snapshot.operations),
        )

    def _fill(self, snapshot: Snapshot) -> None:
        accounts = {a.id: a for a in snapshot.accounts}
        categories = {c.id: c for c in snapshot.categories}
        operations = {o.id: o for o in snapshot.operations}
        with self._maps_lock.write_locked():
            self._accounts = accounts
            self._categories = categories
            self._operations = operations


def _lookup(items: dict, kind: str, entity_id: str):
    try:
        return items[entity_id]
    except KeyError:
        raise NotFoundError(kind, entity_id) from None
