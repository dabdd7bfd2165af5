from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

from ledger.domain.snapshot import Snapshot
from ledger.repositories.errors import DuplicateIdError, NotFoundError
from ledger.repositories.ledger_repository import ACCOUNT, CATEGORY, OPERATION


class _HasId(Protocol):
    @property
    def id(self) -> str: ...


E = TypeVar("E", bound=_HasId)


def find_by_id(items: Iterable[E], kind: str, entity_id: str) -> E:
    for item in items:
        if item.id == entity_id:
            return item
    raise NotFoundError(kind, entity_id)


def append_new(items: list[E], kind: str, entity: E) -> None:
    if any(item.id == entity.id for item in items):
        raise DuplicateIdError(kind, entity.id)
    items.append(entity)


def replace_by_id(items: list[E], kind: str, entity: E) -> None:
    # keeps the stored position
    for i, item in enumerate(items):
        if item.id == entity.id:
            items[i] = entity
            return
    raise NotFoundError(kind, entity.id)


def remove_by_id(items: list[E], kind: str, entity_id: str) -> None:
    for i, item in enumerate(items):
        if item.id == entity_id:
            del items[i]
            return
    raise NotFoundError(kind, entity_id)


def ensure_unique_ids(snapshot: Snapshot) -> None:
    for kind, items in (
        (ACCOUNT, snapshot.accounts),
        (CATEGORY, snapshot.categories),
        (OPERATION, snapshot.operations),
    ):
        seen: set[str] = set()
        for item in items:
            if item.id in seen:
                raise DuplicateIdError(kind, item.id)
            seen.add(item.id)
