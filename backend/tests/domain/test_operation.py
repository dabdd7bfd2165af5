import datetime as dt

from ledger.domain.operation import Operation, OperationType


def make_op(description) -> Operation:
    return Operation(
        id="o1",
        type=OperationType.EXPENSE,
        bank_account_id="a1",
        category_id="c1",
        amount=2.0,
        date=dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc),
        description=description,
    )


def test_empty_description_is_stored_as_none():
    assert make_op("").description is None
    assert make_op("") == make_op(None)


def test_description_is_kept():
    assert make_op(" note ").description == " note "


def test_signed_amount():
    assert make_op(None).signed_amount() == -2.0
