from __future__ import annotations


class RepositoryError(Exception):
    """Base class for every failure raised by a ledger repository."""


class NotFoundError(RepositoryError, KeyError):
    """Get/update/delete referenced an id that is not stored."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")

    # KeyError.__str__ would repr() the message
    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateIdError(RepositoryError, ValueError):
    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} id '{entity_id}' already exists")


class StorageIOError(RepositoryError, OSError):
    """Reading, parsing or writing the snapshot file failed."""


class PoisonedCacheError(RepositoryError):
    """
    The one-time cache load failed.
    Raised by every later call with the same `cause`; the cache never
    retries the load, a new repository has to be built.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"ledger cache unavailable, initial load failed: {cause}")
