import datetime as dt
import json

import pytest

from ledger.domain.account import BankAccount
from ledger.domain.category import Category, CategoryType
from ledger.domain.operation import Operation, OperationType
from ledger.domain.snapshot import Snapshot
from ledger.formats.export_visitor import ExportFormat
from ledger.formats.importers import CsvImporter, ImportFormatError, JsonImporter, YamlImporter
from ledger.repositories.cached_ledger_repository import CachedLedgerRepository
from ledger.repositories.json_ledger_repository import JsonLedgerRepository
from ledger.services.data_management_service import DataManagementService


def sample() -> Snapshot:
    return Snapshot(
        accounts=[BankAccount(id="a1", name="Checking", balance=100.0)],
        categories=[Category(id="c1", type=CategoryType.EXPENSE, name="Food, drinks")],
        operations=[
            Operation(
                id="o1",
                type=OperationType.EXPENSE,
                bank_account_id="a1",
                category_id="c1",
                amount=12.5,
                date=dt.datetime(2025, 8, 2, tzinfo=dt.timezone.utc),
                description='Dinner "out"',
            )
        ],
    )


def make_service(tmp_path, name: str = "db.json"):
    store = JsonLedgerRepository(storage_path=tmp_path / name)
    repo = CachedLedgerRepository(store)
    return DataManagementService(repo=repo), repo, store


@pytest.mark.parametrize(
    "fmt, importer",
    [
        (ExportFormat.JSON, JsonImporter()),
        (ExportFormat.CSV, CsvImporter()),
        (ExportFormat.YAML, YamlImporter()),
    ],
)
def test_export_then_import_restores_ledger(tmp_path, fmt, importer):
    source, source_repo, _ = make_service(tmp_path, "source.json")
    source_repo.replace_all(sample())
    target_file = source.export_data(fmt, tmp_path / "out" / f"ledger.{fmt.value}")

    dest, dest_repo, dest_store = make_service(tmp_path, "dest.json")
    dest_repo.create_account(BankAccount(id="old", name="Old", balance=0.0))

    imported = dest.import_data(importer, target_file)

    assert imported == sample()
    assert dest_repo.list_accounts() == sample().accounts
    assert dest_repo.list_categories() == sample().categories
    assert dest_repo.list_operations() == sample().operations
    assert dest_store.load() == sample()


def test_export_accepts_format_name(tmp_path):
    service, repo, _ = make_service(tmp_path)
    repo.replace_all(sample())

    target = service.export_data("json", tmp_path / "export.json")

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [a["id"] for a in payload["accounts"]] == ["a1"]


def test_export_unknown_format(tmp_path):
    service, _, _ = make_service(tmp_path)
    with pytest.raises(ValueError, match="unsupported export format"):
        service.export_data("xml", tmp_path / "export.xml")
    assert not (tmp_path / "export.xml").exists()


def test_failed_import_keeps_current_ledger(tmp_path):
    service, repo, _ = make_service(tmp_path)
    repo.replace_all(sample())
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")

    with pytest.raises(ImportFormatError):
        service.import_data(JsonImporter(), bad)

    assert repo.list_accounts() == sample().accounts


def test_import_missing_file(tmp_path):
    service, _, _ = make_service(tmp_path)
    with pytest.raises(OSError):
        service.import_data(JsonImporter(), tmp_path / "nope.json")
