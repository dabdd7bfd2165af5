from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import logging
import time
from typing import Callable, Optional, Protocol

from ledger.domain.operation import Operation, OperationType
from ledger.services.operation_service import OperationService

logger = logging.getLogger(__name__)


class Command(Protocol):
    def execute(self) -> None: ...


@dataclass
class AddOperationCommand:
    service: OperationService
    op_type: OperationType
    account_id: str
    category_id: str
    amount: float
    date: dt.datetime
    description: Optional[str] = None
    on_created: Optional[Callable[[Operation], None]] = None

    def execute(self) -> None:
        operation = self.service.add_operation(
            self.op_type,
            self.account_id,
            self.category_id,
            self.amount,
            self.date,
            self.description,
        )
        if self.on_created is not None:
            self.on_created(operation)


@dataclass
class EditOperationCommand:
    service: OperationService
    operation_id: str
    op_type: OperationType
    account_id: str
    category_id: str
    amount: float
    date: dt.datetime
    description: Optional[str] = None

    def execute(self) -> None:
        self.service.update_operation(
            self.operation_id,
            self.op_type,
            self.account_id,
            self.category_id,
            self.amount,
            self.date,
            self.description,
        )


@dataclass
class DeleteOperationCommand:
    service: OperationService
    operation_id: str

    def execute(self) -> None:
        self.service.delete_operation(self.operation_id)


class TimedCommand:
    """Runs the wrapped command and logs how long it took, failed or not."""

    def __init__(self, name: str, inner: Command, *, clock: Callable[[], float] = time.perf_counter) -> None:
        self.name = name
        self._inner = inner
        self._clock = clock
        self.last_duration: Optional[float] = None

    def execute(self) -> None:
        start = self._clock()
        try:
            self._inner.execute()
        finally:
            self.last_duration = self._clock() - start
            logger.info("%s completed in %.3fs", self.name, self.last_duration)
