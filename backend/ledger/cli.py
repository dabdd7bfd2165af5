from __future__ import annotations

import datetime as dt
import logging
from typing import Callable, Optional

from ledger.deps import Container, get_container
from ledger.domain.category import CategoryType
from ledger.domain.operation import OperationType
from ledger.formats.export_visitor import ExportFormat
from ledger.formats.importers import importer_for
from ledger.repositories.errors import RepositoryError
from ledger.services.commands import (
    AddOperationCommand,
    DeleteOperationCommand,
    EditOperationCommand,
    TimedCommand,
)
from ledger.settings import get_settings

logger = logging.getLogger(__name__)

MENU = """
Finance Tracker
1. Create bank account
2. List bank accounts
3. Create category
4. List categories
5. Add operation
6. Edit operation
7. Delete operation
8. List operations
9. Analytics: income vs expense difference
10. Analytics: totals by category
11. Analytics: average daily expense
12. Export data
13. Import data
14. Recalculate account balance
0. Exit"""

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class _Console:
    def __init__(self, read: Reader, write: Writer) -> None:
        self.read = read
        self.write = write

    def prompt(self, label: str) -> str:
        return self.read(label).strip()

    def prompt_float(self, label: str) -> float:
        while True:
            value = self.prompt(label)
            if not value:
                return 0.0
            try:
                return float(value.replace(",", "."))
            except ValueError:
                self.write("Please enter numeric value")

    def prompt_date(self, label: str) -> dt.date:
        while True:
            value = self.prompt(label)
            if not value:
                return dt.datetime.now(dt.timezone.utc).date()
            try:
                return dt.date.fromisoformat(value)
            except ValueError:
                self.write("Please use format YYYY-MM-DD")

    def prompt_timestamp(self, label: str) -> dt.datetime:
        day = self.prompt_date(label)
        return dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)

    def prompt_operation_type(self, label: str) -> OperationType:
        if self.prompt(label).lower() == "income":
            return OperationType.INCOME
        return OperationType.EXPENSE


def run(container: Container, *, read: Reader = input, write: Writer = print) -> int:
    console = _Console(read, write)
    actions = _actions(container, console)

    while True:
        write(MENU)
        try:
            choice = console.prompt("Choose option: ")
        except EOFError:
            return 0

        if choice == "0":
            write("Goodbye!")
            return 0

        action = actions.get(choice)
        if action is None:
            write("Unknown option")
            continue

        try:
            message = action()
        except EOFError:
            return 0
        except (RepositoryError, ValueError, OSError) as e:
            logger.debug("option %s failed", choice, exc_info=True)
            write(f"Error: {e}")
            continue

        if message:
            write(message)


def _actions(c: Container, console: _Console) -> dict[str, Callable[[], Optional[str]]]:
    write = console.write

    def create_account() -> str:
        name = console.prompt("Account name: ")
        balance = console.prompt_float("Initial balance: ")
        account = c.accounts.create_account(name, balance)
        return f"Account created with id {account.id}"

    def list_accounts() -> str:
        accounts = c.accounts.list_accounts()
        if not accounts:
            return "No accounts yet"
        return "\n".join(f"- {a.name} ({a.id}): balance {a.balance:.2f}" for a in accounts)

    def create_category() -> str:
        name = console.prompt("Category name: ")
        raw_type = console.prompt("Type (income/expense): ").lower()
        cat_type = CategoryType.INCOME if raw_type == "income" else CategoryType.EXPENSE
        category = c.categories.create_category(name, cat_type)
        return f"Category created with id {category.id}"

    def list_categories() -> str:
        categories = c.categories.list_categories()
        if not categories:
            return "No categories yet"
        return "\n".join(f"- {cat.name} ({cat.id}) [{cat.type.value}]" for cat in categories)

    def add_operation() -> None:
        cmd = AddOperationCommand(
            service=c.operations,
            op_type=console.prompt_operation_type("Operation type (income/expense): "),
            account_id=console.prompt("Account id: "),
            category_id=console.prompt("Category id: "),
            amount=console.prompt_float("Amount: "),
            date=console.prompt_timestamp("Date (YYYY-MM-DD): "),
            description=console.prompt("Description (optional): "),
            on_created=lambda op: write(f"Operation created with id {op.id}"),
        )
        TimedCommand("Add operation", cmd).execute()

    def edit_operation() -> str:
        cmd = EditOperationCommand(
            service=c.operations,
            operation_id=console.prompt("Operation id: "),
            op_type=console.prompt_operation_type("New type (income/expense): "),
            account_id=console.prompt("New account id: "),
            category_id=console.prompt("New category id: "),
            amount=console.prompt_float("New amount: "),
            date=console.prompt_timestamp("New date (YYYY-MM-DD): "),
            description=console.prompt("New description: "),
        )
        TimedCommand("Edit operation", cmd).execute()
        return "Operation updated"

    def delete_operation() -> str:
        cmd = DeleteOperationCommand(service=c.operations, operation_id=console.prompt("Operation id: "))
        TimedCommand("Delete operation", cmd).execute()
        return "Operation deleted"

    def list_operations() -> str:
        operations = c.operations.list_operations()
        if not operations:
            return "No operations yet"
        return "\n".join(
            f"- {op.id} ({op.type.value}) {op.description or ''} {op.amount:.2f} "
            f"on {op.date.isoformat()} [account={op.bank_account_id} category={op.category_id}]"
            for op in operations
        )

    def difference() -> str:
        start = console.prompt_date("From (YYYY-MM-DD): ")
        end = console.prompt_date("To (YYYY-MM-DD): ")
        return f"Net result: {c.analytics.difference(start, end):.2f}"

    def by_category() -> str:
        start = console.prompt_date("From (YYYY-MM-DD): ")
        end = console.prompt_date("To (YYYY-MM-DD): ")
        totals = c.analytics.group_by_category(start, end)
        if not totals:
            return "No data in period"
        return "\n".join(
            f"- {name}: income={t.income:.2f} expense={t.expense:.2f}" for name, t in totals.items()
        )

    def average_expense() -> str:
        start = console.prompt_date("From (YYYY-MM-DD): ")
        end = console.prompt_date("To (YYYY-MM-DD): ")
        return f"Average daily expense: {c.analytics.average_daily_expense(start, end):.2f}"

    def export_data() -> str:
        fmt = ExportFormat(console.prompt("Format (json/yaml/csv): ").lower())
        path = console.prompt("Target file path: ") or str(
            get_settings().data_dir / f"export.{fmt.value}"
        )
        target = c.data.export_data(fmt, path)
        return f"Data exported to {target}"

    def import_data() -> str:
        importer = importer_for(console.prompt("Source format (json/yaml/csv): "))
        path = console.prompt("File path: ")
        c.data.import_data(importer, path)
        return f"Data imported from {path}"

    def recalculate() -> str:
        c.accounts.recalculate_balance(console.prompt("Account id: "))
        return "Balance recalculated"

    return {
        "1": create_account,
        "2": list_accounts,
        "3": create_category,
        "4": list_categories,
        "5": add_operation,
        "6": edit_operation,
        "7": delete_operation,
        "8": list_operations,
        "9": difference,
        "10": by_category,
        "11": average_expense,
        "12": export_data,
        "13": import_data,
        "14": recalculate,
    }


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return run(get_container())


if __name__ == "__main__":
    raise SystemExit(main())
