from __future__ import annotations

from abc import ABC, abstractmethod
import csv
import io
import json
from pathlib import Path

from pydantic import ValidationError
import yaml

from ledger.domain.snapshot import Snapshot
from ledger.schemas.snapshot import (
    AccountRecord,
    CategoryRecord,
    OperationRecord,
    SnapshotDocument,
)


class ImportFormatError(ValueError):
    """The file was readable but its content is not a valid snapshot."""


class SnapshotImporter(ABC):
    """
    Template method: read the file, then let the subclass parse the text.
    Unreadable files raise OSError; malformed content raises
    ImportFormatError.
    """

    def import_file(self, path: Path | str) -> Snapshot:
        raw = self._read_file(Path(path))
        return self.parse(raw)

    @abstractmethod
    def parse(self, raw: str) -> Snapshot: ...

    @staticmethod
    def _read_file(path: Path) -> str:
        # utf-8-sig: tolerate a BOM from spreadsheet tools
        return path.read_text(encoding="utf-8-sig")


class JsonImporter(SnapshotImporter):
    def parse(self, raw: str) -> Snapshot:
        if not raw.strip():
            return Snapshot()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"invalid JSON ({e})") from e
        if not isinstance(payload, dict):
            raise ImportFormatError("JSON root must be an object")
        try:
            return SnapshotDocument.model_validate(payload).to_snapshot()
        except ValidationError as e:
            raise ImportFormatError(f"invalid snapshot: {e}") from e


class CsvImporter(SnapshotImporter):
    """Reads the one-row-per-entity layout written by the CSV export."""

    _MIN_COLUMNS = 10

    def parse(self, raw: str) -> Snapshot:
        try:
            rows = list(csv.reader(io.StringIO(raw)))
        except csv.Error as e:
            raise ImportFormatError(f"invalid CSV ({e})") from e

        snapshot = Snapshot()
        # line 1 = header
        for line_no, row in enumerate(rows[1:], start=2):
            if len(row) < self._MIN_COLUMNS:
                continue
            entity = row[0].strip()
            try:
                if entity == "account":
                    rec = AccountRecord.model_validate(
                        {"id": row[1], "name": row[2], "balance": row[4]}
                    )
                    snapshot.accounts.append(rec.to_domain())
                elif entity == "category":
                    rec = CategoryRecord.model_validate(
                        {"id": row[1], "name": row[2], "type": row[3]}
                    )
                    snapshot.categories.append(rec.to_domain())
                elif entity == "operation":
                    rec = OperationRecord.model_validate(
                        {
                            "id": row[1],
                            "type": row[3],
                            "bank_account_id": row[5],
                            "category_id": row[6],
                            "amount": row[7],
                            "date": row[8],
                            "description": row[9],
                        }
                    )
                    snapshot.operations.append(rec.to_domain())
                else:
                    raise ImportFormatError(f"line {line_no}: unknown entity '{entity}'")
            except ValidationError as e:
                raise ImportFormatError(f"line {line_no}: {e}") from e

        return snapshot


class YamlImporter(SnapshotImporter):
    """
    Reads the layout written by the YAML export:

        accounts:
        - id: a1
          name: Checking
          balance: 100.0

    BaseLoader keeps every scalar a string, so ids such as `001` or dates
    are not reinterpreted before the schema sees them.
    """

    _SECTIONS = ("accounts", "categories", "operations")

    def parse(self, raw: str) -> Snapshot:
        try:
            payload = yaml.load(raw, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise ImportFormatError(f"invalid YAML ({e})") from e

        if payload is None:
            return Snapshot()
        if not isinstance(payload, dict):
            raise ImportFormatError("YAML root must be a mapping")

        unknown = [key for key in payload if key not in self._SECTIONS]
        if unknown:
            raise ImportFormatError(f"unknown section '{unknown[0]}'")

        # an empty section ("categories:") loads as "" under BaseLoader
        sections = {key: (value or None) for key, value in payload.items()}
        try:
            return SnapshotDocument.model_validate(sections).to_snapshot()
        except ValidationError as e:
            raise ImportFormatError(f"invalid snapshot: {e}") from e


IMPORTERS: dict[str, type[SnapshotImporter]] = {
    "json": JsonImporter,
    "yaml": YamlImporter,
    "csv": CsvImporter,
}


def importer_for(format_name: str) -> SnapshotImporter:
    try:
        return IMPORTERS[format_name.strip().lower()]()
    except KeyError:
        raise ValueError(f"unsupported import format: {format_name}") from None
