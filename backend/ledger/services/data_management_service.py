from __future__ import annotations

import logging
from pathlib import Path

from ledger.domain.snapshot import Snapshot
from ledger.formats.export_visitor import ExportFormat, SnapshotExportVisitor, visit_snapshot
from ledger.formats.importers import SnapshotImporter
from ledger.repositories.ledger_repository import LedgerRepository

logger = logging.getLogger(__name__)


class DataManagementService:
    """Import replaces the whole ledger; export writes a full snapshot."""

    def __init__(self, *, repo: LedgerRepository) -> None:
        self._repo = repo

    def import_data(self, importer: SnapshotImporter, path: Path | str) -> Snapshot:
        snapshot = importer.import_file(path)
        self._repo.replace_all(snapshot)
        logger.info(
            "imported %s with %s (%d accounts, %d categories, %d operations)",
            path,
            type(importer).__name__,
            len(snapshot.accounts),
            len(snapshot.categories),
            len(snapshot.operations),
        )
        return snapshot

    def export_data(self, export_format: ExportFormat | str, path: Path | str) -> Path:
        visitor = SnapshotExportVisitor(export_format)
        snapshot = Snapshot(
            accounts=self._repo.list_accounts(),
            categories=self._repo.list_categories(),
            operations=self._repo.list_operations(),
        )
        visit_snapshot(snapshot, visitor)

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(visitor.render(), encoding="utf-8")
        logger.info("exported ledger to %s as %s", target, visitor.format.value)
        return target
