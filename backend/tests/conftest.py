"""Shared fixtures for the settlement report tests."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_report() -> str:
    """The reference settlement report: one settlement, no fees, 7 transactions."""
    return (FIXTURES / "settlement-report.csv").read_text(encoding="utf-8")


@pytest.fixture
def header_block() -> str:
    """Organization and company blocks every valid report starts with."""
    return (
        "OrganizationNumber,MerchantName\n"
        "999888777,Payment Provider AS\n"
        "Name,VisitingAddress,Postbox,Zipno,Place,Country,CompanyNumber\n"
        "Payment Provider AS,Example Street 123,,0191,Oslo,Norway,999888777\n"
    )
