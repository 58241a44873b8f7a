"""
Core data models for settlement reports.
All monetary values use Decimal for financial precision.

Attribute names are snake_case; every field is aliased to its column label in
the report so ``model_dump(by_alias=True)`` gives back the wire names.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SectionState(str, Enum):
    INITIAL = "INITIAL"
    ORGANIZATION = "ORGANIZATION"
    COMPANY = "COMPANY"
    SETTLEMENT = "SETTLEMENT"
    FEE = "FEE"
    TRANSACTION = "TRANSACTION"


class _Record(BaseModel):
    """Base for immutable report records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# Lenient parsing may produce Decimal("NaN"), so NaN has to survive validation.
def _money(alias: str, description: str) -> Any:
    return Field(default=Decimal("0"), alias=alias, description=description, allow_inf_nan=True)


# ---------------------------------------------------------------------------
# Header blocks
# ---------------------------------------------------------------------------

class Organization(_Record):
    organization_number: str = Field(alias="OrganizationNumber")
    merchant_name: str = Field(alias="MerchantName")


class Company(_Record):
    name: str = Field(alias="Name")
    visiting_address: str = Field(alias="VisitingAddress")
    postbox: str = Field(alias="Postbox", description="Often empty")
    zipno: str = Field(alias="Zipno")
    place: str = Field(alias="Place")
    country: str = Field(alias="Country")
    company_number: str = Field(alias="CompanyNumber")


# ---------------------------------------------------------------------------
# Ledger lines
# ---------------------------------------------------------------------------

class Settlement(_Record):
    """Aggregate payout for one sales unit and settlement date."""

    sales_unit_name: str = Field(alias="SalesUnitName")
    sale_unit_number: str = Field(alias="SaleUnitNumber")
    settlement_date: str = Field(alias="SettlementDate", description="DD.MM.YYYY as printed")
    settlement_id: str = Field(alias="SettlementID")
    settlement_account: str = Field(alias="SettlementAccount")
    gross: Decimal = _money("Gross", "Sum of sales before fees and refunds")
    currency: str = Field(alias="Currency")
    fee: Decimal = _money("Fee", "Negative when charged")
    refund: Decimal = _money("Refund", "Negative when refunded")
    net: Decimal = _money("Net", "Amount paid out")
    # None only when lenient parsing met an unreadable count
    number_of_transactions: Optional[int] = Field(default=0, alias="NumberOfTransactions")


class Fee(_Record):
    """Standalone fee charged outside the per-transaction fees."""

    settlement_date: str = Field(alias="SettlementDate")
    sale_unit_name: str = Field(alias="SaleUnitName")
    sale_unit_number: str = Field(alias="SaleUnitNumber")
    fee_account: str = Field(alias="FeeAccount")
    fee: Decimal = _money("Fee", "Fee amount")
    currency: str = Field(alias="Currency")


class Transaction(_Record):
    sales_date: str = Field(alias="SalesDate")
    sale_unit_name: str = Field(alias="SaleUnitName")
    sale_unit_number: str = Field(alias="SaleUnitNumber")
    transaction_id: str = Field(alias="TransactionId")
    settlement_id: str = Field(alias="SettlementId")
    order_id: str = Field(alias="OrderID")
    settlement_date: str = Field(alias="SettlementDate")
    gross: Decimal = _money("Gross", "Sale amount")
    currency: str = Field(alias="Currency")
    fee: Decimal = _money("Fee", "Per-transaction fee")
    refund: Decimal = _money("Refund", "Negative when refunded")
    net: Decimal = _money("Net", "Gross + fee + refund")


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

class ParsedReport(BaseModel):
    """Complete parsed settlement report."""

    model_config = ConfigDict(frozen=True)

    organization: Organization
    company: Company
    settlements: tuple[Settlement, ...] = ()
    fees: tuple[Fee, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    warnings: tuple[str, ...] = ()     # Data-quality notes from lenient parsing

    @property
    def settlement(self) -> Optional[Settlement]:
        """The single settlement block, for reports that carry exactly one.

        Returns None when the report has no settlement rows and raises
        ValueError when it has several; use ``settlements`` for those.
        """
        if not self.settlements:
            return None
        if len(self.settlements) > 1:
            raise ValueError(
                f"Report contains {len(self.settlements)} settlements; use .settlements"
            )
        return self.settlements[0]
