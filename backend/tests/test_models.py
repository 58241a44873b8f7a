from decimal import Decimal

import pytest
from pydantic import ValidationError

from settlement_report.models import Company, Organization, ParsedReport, Settlement


def _settlement(settlement_id: str) -> Settlement:
    return Settlement(
        sales_unit_name="Example Store",
        sale_unit_number="123456",
        settlement_date="12.04.2021",
        settlement_id=settlement_id,
        settlement_account="12345678901",
        gross=Decimal("100.00"),
        currency="NOK",
        fee=Decimal("-1.00"),
        refund=Decimal("0"),
        net=Decimal("99.00"),
        number_of_transactions=1,
    )


def _report(*settlements: Settlement) -> ParsedReport:
    return ParsedReport(
        organization=Organization(organization_number="1", merchant_name="M"),
        company=Company(
            name="M", visiting_address="A", postbox="", zipno="0191",
            place="Oslo", country="Norway", company_number="1",
        ),
        settlements=settlements,
    )


def test_records_are_immutable():
    org = Organization(organization_number="999888777", merchant_name="Payment Provider AS")
    with pytest.raises(ValidationError):
        org.merchant_name = "Other"


def test_dump_by_alias_gives_report_labels():
    dumped = _settlement("2000001").model_dump(by_alias=True)
    assert list(dumped) == [
        "SalesUnitName", "SaleUnitNumber", "SettlementDate", "SettlementID",
        "SettlementAccount", "Gross", "Currency", "Fee", "Refund", "Net",
        "NumberOfTransactions",
    ]


def test_records_accept_report_labels():
    org = Organization(OrganizationNumber="999888777", MerchantName="Payment Provider AS")
    assert org.organization_number == "999888777"


def test_single_settlement_shape():
    report = _report(_settlement("1"))
    assert report.settlement.settlement_id == "1"


def test_no_settlement():
    assert _report().settlement is None


def test_multiple_settlements_require_list_access():
    report = _report(_settlement("1"), _settlement("2"))
    assert [s.settlement_id for s in report.settlements] == ["1", "2"]
    with pytest.raises(ValueError, match="2 settlements"):
        report.settlement
