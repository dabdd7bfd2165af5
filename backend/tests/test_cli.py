import json

from ledger.cli import run
from ledger.deps import build_container


class Script:
    """Feeds canned answers to the prompts; EOF once they run out."""

    def __init__(self, *answers: str):
        self._answers = list(answers)
        self.output: list[str] = []

    def read(self, prompt: str) -> str:
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def run_script(tmp_path, *answers: str) -> Script:
    script = Script(*answers)
    container = build_container(tmp_path / "db.json")
    assert run(container, read=script.read, write=script.write) == 0
    return script


def test_exit_option(tmp_path):
    script = run_script(tmp_path, "0")
    assert script.output[-1] == "Goodbye!"


def test_eof_exits_cleanly(tmp_path):
    script = run_script(tmp_path)
    assert "Finance Tracker" in script.text


def test_unknown_option(tmp_path):
    script = run_script(tmp_path, "42", "0")
    assert "Unknown option" in script.output


def test_create_and_list_account(tmp_path):
    script = run_script(tmp_path, "1", "Checking", "12,5", "2", "0")

    assert any(line.startswith("Account created with id ") for line in script.output)
    assert "Checking" in script.text
    assert "balance 12.50" in script.text


def test_errors_are_reported_and_loop_continues(tmp_path):
    script = run_script(tmp_path, "1", "", "", "7", "missing", "0")

    assert "Error: account name is required" in script.output
    assert "Error: operation missing not found" in script.output
    assert script.output[-1] == "Goodbye!"


def test_invalid_number_is_asked_again(tmp_path):
    script = run_script(tmp_path, "1", "Cash", "abc", "5", "0")
    assert "Please enter numeric value" in script.output
    assert any(line.startswith("Account created") for line in script.output)


def test_operation_flow_updates_balance_and_exports(tmp_path):
    container = build_container(tmp_path / "db.json")
    acc = container.accounts.create_account("Checking", 100)
    cat = container.categories.create_category("Food", "expense")
    export_path = tmp_path / "out.json"

    script = Script(
        "5", "expense", acc.id, cat.id, "30", "2025-01-15", "lunch",
        "11", "2025-01-01", "2025-01-30",
        "12", "json", str(export_path),
        "0",
    )
    assert run(container, read=script.read, write=script.write) == 0

    assert any(line.startswith("Operation created with id ") for line in script.output)
    assert "Average daily expense: 1.00" in script.output
    assert f"Data exported to {export_path}" in script.output
    payload = json.loads(export_path.read_text(encoding="utf-8"))
    assert payload["accounts"][0]["balance"] == 70.0
    assert payload["operations"][0]["description"] == "lunch"


def test_import_replaces_ledger(tmp_path):
    source = tmp_path / "in.json"
    source.write_text(
        json.dumps({"accounts": [{"id": "a1", "name": "Imported", "balance": 1}]}),
        encoding="utf-8",
    )
    script = run_script(tmp_path, "13", "json", str(source), "2", "0")

    assert f"Data imported from {source}" in script.output
    assert "- Imported (a1): balance 1.00" in script.output


def test_imported_naive_dates_sort_with_new_operations(tmp_path):
    source = tmp_path / "in.json"
    source.write_text(
        json.dumps(
            {
                "accounts": [{"id": "a1", "name": "Checking", "balance": 100}],
                "categories": [{"id": "c1", "type": "expense", "name": "Food"}],
                "operations": [
                    {
                        "id": "o1",
                        "type": "expense",
                        "bank_account_id": "a1",
                        "category_id": "c1",
                        "amount": 5,
                        "date": "2025-01-01T00:00:00",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    script = run_script(
        tmp_path,
        "13", "json", str(source),
        "5", "expense", "a1", "c1", "10", "2025-01-02", "",
        "8",
        "0",
    )

    assert not any(line.startswith("Error:") for line in script.output)
    listing = next(line for line in script.output if line.startswith("- o1 "))
    lines = listing.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("- o1 ")
    assert "2025-01-02T00:00:00+00:00" in lines[1]
    assert script.output[-1] == "Goodbye!"
