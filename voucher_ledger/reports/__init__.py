"""Report derivers: trial balance, profit & loss, GST, ledger book, compliance."""

from voucher_ledger.reports.compliance import (
    E_WAY_BILL_THRESHOLD,
    compliance_for_voucher,
    evaluate_compliance,
)
from voucher_ledger.reports.gst import get_gst_summary
from voucher_ledger.reports.ledger_book import get_ledger_book
from voucher_ledger.reports.profit_loss import get_profit_and_loss
from voucher_ledger.reports.trial_balance import aggregate_ledger, generate_trial_balance

__all__ = [
    "E_WAY_BILL_THRESHOLD",
    "aggregate_ledger",
    "compliance_for_voucher",
    "evaluate_compliance",
    "generate_trial_balance",
    "get_gst_summary",
    "get_ledger_book",
    "get_profit_and_loss",
]
