from __future__ import annotations

import csv
import datetime as dt
import io
import json
from enum import Enum

import yaml

from ledger.domain.account import BankAccount
from ledger.domain.category import Category
from ledger.domain.operation import Operation
from ledger.domain.snapshot import Snapshot
from ledger.schemas.snapshot import SnapshotDocument


class ExportFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    CSV = "csv"


CSV_HEADER = [
    "entity",
    "id",
    "name",
    "type",
    "balance",
    "bank_account_id",
    "category_id",
    "amount",
    "date",
    "description",
]


def format_timestamp(value: dt.datetime) -> str:
    """RFC 3339, seconds precision, `Z` for UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


class SnapshotExportVisitor:
    """Collects visited entities, then renders them in one format."""

    def __init__(self, export_format: ExportFormat | str) -> None:
        try:
            self._format = ExportFormat(export_format)
        except ValueError:
            raise ValueError(f"unsupported export format: {export_format}")
        self._accounts: list[BankAccount] = []
        self._categories: list[Category] = []
        self._operations: list[Operation] = []

    @property
    def format(self) -> ExportFormat:
        return self._format

    def visit_account(self, account: BankAccount) -> None:
        self._accounts.append(account)

    def visit_category(self, category: Category) -> None:
        self._categories.append(category)

    def visit_operation(self, operation: Operation) -> None:
        self._operations.append(operation)

    def render(self) -> str:
        if self._format == ExportFormat.JSON:
            return self._render_json()
        if self._format == ExportFormat.YAML:
            return self._render_yaml()
        return self._render_csv()

    # ---------- renderers ----------
    def _payload(self) -> dict:
        snapshot = Snapshot(
            accounts=list(self._accounts),
            categories=list(self._categories),
            operations=list(self._operations),
        )
        return SnapshotDocument.from_snapshot(snapshot).to_payload()

    def _render_json(self) -> str:
        return json.dumps(self._payload(), ensure_ascii=False, indent=2) + "\n"

    def _render_csv(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for a in self._accounts:
            writer.writerow(["account", a.id, a.name, "", f"{a.balance:.2f}", "", "", "", "", ""])
        for c in self._categories:
            writer.writerow(["category", c.id, c.name, c.type.value, "", "", "", "", "", ""])
        for o in self._operations:
            writer.writerow(
                [
                    "operation",
                    o.id,
                    "",
                    o.type.value,
                    "",
                    o.bank_account_id,
                    o.category_id,
                    f"{o.amount:.2f}",
                    format_timestamp(o.date),
                    o.description or "",
                ]
            )
        return buf.getvalue()

    def _render_yaml(self) -> str:
        # same layout as JSON; timestamps and numeric-looking ids come out quoted
        return yaml.safe_dump(
            self._payload(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


def visit_snapshot(snapshot: Snapshot, visitor: SnapshotExportVisitor) -> None:
    for account in snapshot.accounts:
        account.accept(visitor)
    for category in snapshot.categories:
        category.accept(visitor)
    for operation in snapshot.operations:
        operation.accept(visitor)
