from __future__ import annotations

import pytest

from statement_ledger.models.transaction import Transaction, format_key_amount
from statement_ledger.services.normalizer import to_transaction

BASE = [1, "03/02/2024", "  PAGO TARJETA ", "0001", "1.234,56", None, 900, " REF-1 "]


def test_to_transaction_maps_fixed_positions():
    tx = to_transaction(BASE)
    assert tx == Transaction(
        date="03/02/2024",
        description="PAGO TARJETA",
        reference="REF-1",
        debit=1234.56,
        credit=0.0,
    )
    assert tx.key == "03/02/2024|PAGO TARJETA|REF-1|1234.56|0"


def test_to_transaction_serial_date_and_missing_reference():
    tx = to_transaction([None, 45325, "NOMINA", None, None, 2500])
    assert tx.date == "03/02/2024"
    assert tx.reference == ""
    assert tx.credit == 2500
    assert tx.key == "03/02/2024|NOMINA||0|2500"


def test_numeric_reference_has_no_float_suffix():
    row = list(BASE)
    row[7] = 98765.0
    assert to_transaction(row).reference == "98765"


def test_key_is_deterministic():
    assert to_transaction(list(BASE)).key == to_transaction(list(BASE)).key


@pytest.mark.parametrize(
    "index, value",
    [
        (1, "04/02/2024"),
        (2, "PAGO TARJETA 2"),
        (7, "REF-2"),
        (4, "1.234,57"),
        (5, "0,01"),
    ],
)
def test_key_changes_with_any_canonical_field(index, value):
    row = list(BASE)
    row[index] = value
    assert to_transaction(row).key != to_transaction(BASE).key


def test_equal_amounts_in_different_cell_types_share_a_key():
    as_int = [1, "03/02/2024", "PAGO", None, 100, None]
    as_float = [1, "03/02/2024", "PAGO", None, 100.0, None]
    as_text = [1, "03/02/2024", "PAGO", None, "100,00", None]
    assert to_transaction(as_int).key == to_transaction(as_float).key == to_transaction(as_text).key


def test_non_key_columns_do_not_affect_key():
    row = list(BASE)
    row[0] = 99
    row[3] = "9999"
    row[6] = 1.5
    assert to_transaction(row).key == to_transaction(BASE).key


def test_format_key_amount():
    assert format_key_amount(100.0) == "100"
    assert format_key_amount(-0.0) == "0"
    assert format_key_amount(0.1) == "0.1"
    assert format_key_amount(1234.56) == "1234.56"
