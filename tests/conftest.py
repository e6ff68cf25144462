"""Shared fixtures: the default chart and the worked example vouchers."""

from datetime import date
from decimal import Decimal

import pytest

from voucher_ledger.config import get_settings
from voucher_ledger.diagnostics import LedgerLogger
from voucher_ledger.masters import default_chart
from voucher_ledger.models import LedgerEvent, Voucher, VoucherLineItem, VoucherType


class RecordingLogger(LedgerLogger):
    """LedgerLogger that keeps events in memory instead of writing them."""

    def __init__(self):
        super().__init__("voucher_ledger.tests")
        self.events: list[LedgerEvent] = []

    def log(self, event: LedgerEvent) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [e.event_type.value for e in self.events]


@pytest.fixture
def chart():
    return default_chart()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def display_settings(monkeypatch):
    """Settings with a plain-text currency and whole-rupee display."""
    monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "Rs.")
    monkeypatch.setenv("LEDGER_AMOUNT_DISPLAY_PLACES", "0")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def sales_voucher():
    """Sales of 1000 to Tech Solutions with 9% CGST + 9% SGST."""
    return Voucher(
        id="v1",
        date=date(2024, 4, 1),
        type=VoucherType.SALES,
        voucher_number="SAL-100",
        party_account_id="acc_customer_a",
        line_items=[
            VoucherLineItem(
                account_id="acc_sales",
                description="Consulting",
                amount=Decimal("1000"),
                gst_rate=Decimal("18"),
                cgst=Decimal("90"),
                sgst=Decimal("90"),
            ),
        ],
        total_amount=Decimal("1180"),
    )


@pytest.fixture
def purchase_voucher():
    """Purchase of 500 from Office Mart with 9% CGST + 9% SGST."""
    return Voucher(
        id="v2",
        date=date(2024, 4, 2),
        type=VoucherType.PURCHASE,
        voucher_number="PUR-100",
        party_account_id="acc_vendor_x",
        line_items=[
            VoucherLineItem(
                account_id="acc_purchase",
                description="Stationery",
                amount=Decimal("500"),
                gst_rate=Decimal("18"),
                cgst=Decimal("45"),
                sgst=Decimal("45"),
                is_debit=True,
            ),
        ],
        total_amount=Decimal("590"),
    )


@pytest.fixture
def receipt_voucher():
    """HDFC receives 1180 from Tech Solutions."""
    return Voucher(
        id="v3",
        date=date(2024, 4, 3),
        type=VoucherType.RECEIPT,
        voucher_number="REC-100",
        party_account_id="acc_hdfc",
        line_items=[
            VoucherLineItem(
                account_id="acc_customer_a",
                description="Tech Solutions",
                amount=Decimal("1180"),
            ),
        ],
        total_amount=Decimal("1180"),
    )


@pytest.fixture
def payment_voucher():
    """Cash pays 590 to Office Mart."""
    return Voucher(
        id="v4",
        date=date(2024, 4, 4),
        type=VoucherType.PAYMENT,
        voucher_number="PAY-100",
        party_account_id="acc_cash",
        line_items=[
            VoucherLineItem(
                account_id="acc_vendor_x",
                description="Office Mart",
                amount=Decimal("590"),
                is_debit=True,
            ),
        ],
        total_amount=Decimal("590"),
    )
