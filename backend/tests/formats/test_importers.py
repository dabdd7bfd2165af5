import datetime as dt

import pytest

from ledger.domain.category import CategoryType
from ledger.domain.operation import OperationType
from ledger.formats.export_visitor import CSV_HEADER
from ledger.formats.importers import (
    CsvImporter,
    ImportFormatError,
    JsonImporter,
    YamlImporter,
    importer_for,
)

HEADER = ",".join(CSV_HEADER)


def test_importer_for_names():
    assert isinstance(importer_for("JSON"), JsonImporter)
    assert isinstance(importer_for(" yaml "), YamlImporter)
    assert isinstance(importer_for("csv"), CsvImporter)
    with pytest.raises(ValueError, match="unsupported import format"):
        importer_for("xml")


def test_json_importer_reads_file_with_bom(tmp_path):
    path = tmp_path / "in.json"
    path.write_text('{"accounts": [{"id": "a1", "name": "Cash", "balance": 3}]}', encoding="utf-8-sig")

    snap = JsonImporter().import_file(path)

    assert [(a.id, a.balance) for a in snap.accounts] == [("a1", 3.0)]
    assert snap.categories == []


def test_json_importer_empty_and_invalid():
    assert JsonImporter().parse("").is_empty()
    with pytest.raises(ImportFormatError):
        JsonImporter().parse("[1, 2]")
    with pytest.raises(ImportFormatError):
        JsonImporter().parse('{"operations": [{"id": "o1"}]}')


def test_csv_importer_parses_rows_and_skips_short_ones():
    raw = "\n".join(
        [
            HEADER,
            "account,a1,Checking,,100.00,,,,,",
            "category,c1,Salary,income,,,,,,",
            "short,row",
            "operation,o1,,income,,a1,c1,25.00,2025-02-01T00:00:00Z,",
        ]
    )

    snap = CsvImporter().parse(raw)

    assert [a.name for a in snap.accounts] == ["Checking"]
    assert snap.categories[0].type is CategoryType.INCOME
    op = snap.operations[0]
    assert op.type is OperationType.INCOME
    assert op.amount == 25.0
    assert op.date == dt.datetime(2025, 2, 1, tzinfo=dt.timezone.utc)
    assert op.description is None


def test_csv_importer_reports_line_numbers():
    with pytest.raises(ImportFormatError, match="line 2: unknown entity 'budget'"):
        CsvImporter().parse(HEADER + "\nbudget,b1,,,,,,,,\n")
    with pytest.raises(ImportFormatError, match="line 3"):
        CsvImporter().parse(HEADER + "\naccount,a1,Checking,,1,,,,,\naccount,a2,Other,,lots,,,,,\n")


def test_yaml_importer_parses_block_layout():
    raw = """accounts:
  - id: a1
    name: "Main: everyday"
    balance: 12.50
categories:
operations:
  - id: o1
    type: expense
    bank_account_id: a1
    category_id: c1
    amount: 4.00
    date: 2025-03-03T10:00:00Z
    description: "coffee \\"to go\\""
"""
    snap = YamlImporter().parse(raw)

    assert snap.accounts[0].name == "Main: everyday"
    assert snap.accounts[0].balance == 12.5
    assert snap.categories == []
    assert snap.operations[0].description == 'coffee "to go"'
    assert snap.operations[0].date == dt.datetime(2025, 3, 3, 10, tzinfo=dt.timezone.utc)


def test_yaml_importer_keeps_numeric_looking_ids_as_text():
    raw = "accounts:\n- id: 001\n  name: 2024\n  balance: 1\ncategories: []\noperations:\n"

    snap = YamlImporter().parse(raw)

    assert snap.accounts[0].id == "001"
    assert snap.accounts[0].name == "2024"
    assert snap.operations == []


def test_yaml_importer_empty_document():
    assert YamlImporter().parse("").is_empty()


def test_yaml_importer_errors():
    with pytest.raises(ImportFormatError, match="unknown section 'budgets'"):
        YamlImporter().parse("budgets:\n  - id: b1\n")
    with pytest.raises(ImportFormatError, match="invalid YAML"):
        YamlImporter().parse("accounts: [unclosed\n")
    with pytest.raises(ImportFormatError, match="root must be a mapping"):
        YamlImporter().parse("- id: a1\n")
    with pytest.raises(ImportFormatError, match="invalid snapshot"):
        YamlImporter().parse("accounts:\n  - id: a1\n    name: x\n    balance: lots\n")
