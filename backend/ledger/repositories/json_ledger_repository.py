from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

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
from ledger.repositories.errors import DuplicateIdError, StorageIOError
from ledger.repositories.ledger_repository import ACCOUNT, CATEGORY, OPERATION
from ledger.schemas.snapshot import SnapshotDocument

logger = logging.getLogger(__name__)


class JsonLedgerRepository:
    """
    Durable store: the whole ledger lives in one JSON file.

    Every call reads the full file, and every mutation rewrites it, under a
    single lock per instance (reads included). O(total entities) per call;
    it is meant to sit behind CachedLedgerRepository, not to be used alone.
    """

    def __init__(self, *, storage_path: Path) -> None:
        self._path = storage_path
        self._lock = threading.Lock()

    @property
    def storage_path(self) -> Path:
        return self._path

    # ---------- whole snapshot ----------
    def load(self) -> Snapshot:
        with self._lock:
            return self._read_snapshot()

    def save(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._write_snapshot(snapshot)

    def replace_all(self, snapshot: Snapshot) -> None:
        ensure_unique_ids(snapshot)
        with self._lock:
            self._write_snapshot(snapshot)
        logger.info(
            "ledger file %s replaced (%d accounts, %d categories, %d operations)",
            self._path,
            len(snapshot.accounts),
            len(snapshot.categories),
            len(snapshot.operations),
        )

    # ---------- accounts ----------
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

    # ---------- categories ----------
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

    # ---------- operations ----------
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

    # ---------- internals ----------
    def _mutate(self, change: Callable[[Snapshot], None]) -> None:
        # read-modify-write as one critical section; nothing is written if
        # `change` raises
        with self._lock:
            snapshot = self._read_snapshot()
            change(snapshot)
            self._write_snapshot(snapshot)

    def _read_snapshot(self) -> Snapshot:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            # first run
            return Snapshot()
        except OSError as e:
            logger.error("cannot read ledger file %s: %s", self._path, e)
            raise StorageIOError(f"read storage file {self._path}: {e}") from e

        if not raw.strip():
            return Snapshot()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageIOError(f"decode storage {self._path}: invalid JSON ({e})") from e

        if not isinstance(payload, dict):
            raise StorageIOError(f"decode storage {self._path}: root must be an object")

        try:
            snapshot = SnapshotDocument.model_validate(payload).to_snapshot()
            ensure_unique_ids(snapshot)
        except (ValidationError, DuplicateIdError) as e:
            raise StorageIOError(f"decode storage {self._path}: {e}") from e

        logger.debug(
            "loaded %s (%d accounts, %d categories, %d operations)",
            self._path,
            len(snapshot.accounts),
            len(snapshot.categories),
            len(snapshot.operations),
        )
        return snapshot

    def _write_snapshot(self, snapshot: Snapshot) -> None:
        payload = SnapshotDocument.from_snapshot(snapshot).to_payload()
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as e:
            logger.error("cannot write ledger file %s: %s", self._path, e)
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.exception("failed to clean up temporary file %s", tmp_path)
            raise StorageIOError(f"write storage file {self._path}: {e}") from e

        logger.debug("saved %s", self._path)
