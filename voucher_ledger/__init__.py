"""
Voucher Ledger - Source Package

Double-entry posting and reporting engine for small Indian businesses:
vouchers in, ledger entries, trial balance, P&L, GST and ledger books out.

DESIGN PRINCIPLES:
1. Entries are derived from vouchers, never edited
2. Every report is a pure function of entries and the chart of accounts
3. Posting never fails; anomalies are reported, not raised
4. Tax accounts are recognised by role, not by name
"""

__version__ = "1.0.0"
__author__ = "Voucher Ledger Team"

from voucher_ledger.ledger import Ledger
from voucher_ledger.models import (
    Account,
    AccountGroup,
    AccountSubGroup,
    ChartOfAccounts,
    ComplianceFlags,
    GSTSummary,
    Item,
    LedgerBook,
    LedgerEntry,
    ProfitAndLoss,
    TaxRole,
    TrialBalance,
    TrialBalanceRow,
    Voucher,
    VoucherLineItem,
    VoucherType,
)
from voucher_ledger.posting import PostingEngine, post_voucher_to_ledger, rebuild_entries
from voucher_ledger.reports import (
    aggregate_ledger,
    compliance_for_voucher,
    evaluate_compliance,
    generate_trial_balance,
    get_gst_summary,
    get_ledger_book,
    get_profit_and_loss,
)

__all__ = [
    # Engine and snapshot
    "Ledger",
    "PostingEngine",
    "post_voucher_to_ledger",
    "rebuild_entries",
    # Reports
    "aggregate_ledger",
    "compliance_for_voucher",
    "evaluate_compliance",
    "generate_trial_balance",
    "get_gst_summary",
    "get_ledger_book",
    "get_profit_and_loss",
    # Models
    "Account",
    "AccountGroup",
    "AccountSubGroup",
    "ChartOfAccounts",
    "ComplianceFlags",
    "GSTSummary",
    "Item",
    "LedgerBook",
    "LedgerEntry",
    "ProfitAndLoss",
    "TaxRole",
    "TrialBalance",
    "TrialBalanceRow",
    "Voucher",
    "VoucherLineItem",
    "VoucherType",
]
