from decimal import Decimal

import pytest

from settlement_report.errors import DataQualityWarning, InvalidNumberError
from settlement_report.models import Fee, Organization, SectionState, Settlement, Transaction
from settlement_report.parsers.layouts import (
    FEE_LAYOUT,
    LAYOUTS,
    ORGANIZATION_LAYOUT,
    SETTLEMENT_LAYOUT,
    TRANSACTION_LAYOUT,
    decode_row,
)

SETTLEMENT_ROW = [
    "SettlementInfo", "Example Store", "123456", "12.04.2021", "2000001",
    "12345678901", "16511.71", "NOK", "-61.09", "-1490.00", "16450.00", "62",
]


def test_every_data_section_has_a_layout():
    assert set(LAYOUTS) == set(SectionState) - {SectionState.INITIAL}


def test_layout_widths():
    assert ORGANIZATION_LAYOUT.width == 2
    assert SETTLEMENT_LAYOUT.width == 12
    assert FEE_LAYOUT.width == 7
    assert TRANSACTION_LAYOUT.width == 13


def test_decode_organization():
    org = decode_row(["999888777", "Payment Provider AS"], ORGANIZATION_LAYOUT)
    assert org == Organization(organization_number="999888777", merchant_name="Payment Provider AS")


def test_decode_settlement_by_position():
    settlement = decode_row(SETTLEMENT_ROW, SETTLEMENT_LAYOUT)
    assert isinstance(settlement, Settlement)
    assert settlement.sales_unit_name == "Example Store"
    assert settlement.settlement_id == "2000001"
    assert settlement.currency == "NOK"
    assert settlement.gross == Decimal("16511.71")
    assert settlement.fee == Decimal("-61.09")
    assert settlement.refund == Decimal("-1490.00")
    assert settlement.net == Decimal("16450.00")
    assert settlement.number_of_transactions == 62


def test_decode_fee():
    fee = decode_row(
        ["FeeInfo", "12.04.2021", "Example Store", "123456", "9876543210", "-125.00", "NOK"],
        FEE_LAYOUT,
    )
    assert fee == Fee(
        settlement_date="12.04.2021",
        sale_unit_name="Example Store",
        sale_unit_number="123456",
        fee_account="9876543210",
        fee=Decimal("-125.00"),
        currency="NOK",
    )


def test_short_row_pads_with_empty_values():
    tx = decode_row(["TransactionInfo", "08.04.2021", "Example Store"], TRANSACTION_LAYOUT)
    assert isinstance(tx, Transaction)
    assert tx.transaction_id == ""
    assert tx.gross == 0
    assert tx.net == 0


def test_strict_mode_names_the_field():
    row = list(SETTLEMENT_ROW)
    row[6] = "n/a"
    with pytest.raises(InvalidNumberError) as exc_info:
        decode_row(row, SETTLEMENT_LAYOUT, line_number=6)
    assert exc_info.value.field == "gross"
    assert exc_info.value.value == "n/a"


def test_lenient_mode_uses_nan_and_reports():
    row = list(SETTLEMENT_ROW)
    row[6] = "n/a"
    row[11] = "many"
    issues: list[str] = []
    with pytest.warns(DataQualityWarning):
        settlement = decode_row(row, SETTLEMENT_LAYOUT, strict=False, line_number=6, issues=issues)
    assert settlement.gross.is_nan()
    assert settlement.number_of_transactions is None
    assert settlement.net == Decimal("16450.00")
    assert len(issues) == 2
    assert issues[0].startswith("Line 6: Settlement.gross")
