from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from ledger.domain.factory import DomainFactory
from ledger.repositories.cached_ledger_repository import CachedLedgerRepository
from ledger.repositories.json_ledger_repository import JsonLedgerRepository
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.services.account_service import AccountService
from ledger.services.analytics_service import AnalyticsService
from ledger.services.category_service import CategoryService
from ledger.services.data_management_service import DataManagementService
from ledger.services.operation_service import OperationService
from ledger.settings import get_settings


@dataclass(frozen=True)
class Container:
    repository: LedgerRepository
    factory: DomainFactory
    accounts: AccountService
    categories: CategoryService
    operations: OperationService
    analytics: AnalyticsService
    data: DataManagementService


def build_container(storage_path: Path, *, factory: DomainFactory | None = None) -> Container:
    """One cache per process, owning its file store."""
    repo = CachedLedgerRepository(JsonLedgerRepository(storage_path=storage_path))
    factory = factory or DomainFactory()
    return Container(
        repository=repo,
        factory=factory,
        accounts=AccountService(repo=repo, factory=factory),
        categories=CategoryService(repo=repo, factory=factory),
        operations=OperationService(repo=repo, factory=factory),
        analytics=AnalyticsService(repo=repo),
        data=DataManagementService(repo=repo),
    )


@lru_cache
def get_container() -> Container:
    return build_container(get_settings().storage_path)
