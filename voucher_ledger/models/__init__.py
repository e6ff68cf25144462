"""
Data Models Package

This package contains all Pydantic models used by the voucher ledger.
Vouchers, accounts, entries and reports all conform to these schemas.
"""

from voucher_ledger.models.account import (
    CONVENTIONAL_TAX_ACCOUNT_IDS,
    Account,
    AccountGroup,
    AccountsLike,
    AccountSubGroup,
    ChartOfAccounts,
    Item,
    TaxComponent,
    TaxDirection,
    TaxRole,
)
from voucher_ledger.models.events import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
    LedgerSeverity,
)
from voucher_ledger.models.ledger import (
    BalanceSide,
    ComplianceFlags,
    GSTComponentRow,
    GSTSummary,
    LedgerBook,
    LedgerBookLine,
    LedgerEntry,
    ProfitAndLoss,
    ProfitAndLossLine,
    TrialBalance,
    TrialBalanceRow,
    format_balance,
)
from voucher_ledger.models.voucher import (
    ValidationIssue,
    ValidationResult,
    Voucher,
    VoucherLineItem,
    VoucherType,
)

__all__ = [
    # Masters
    "CONVENTIONAL_TAX_ACCOUNT_IDS",
    "Account",
    "AccountGroup",
    "AccountsLike",
    "AccountSubGroup",
    "ChartOfAccounts",
    "Item",
    "TaxComponent",
    "TaxDirection",
    "TaxRole",
    # Vouchers
    "ValidationIssue",
    "ValidationResult",
    "Voucher",
    "VoucherLineItem",
    "VoucherType",
    # Ledger and reports
    "BalanceSide",
    "ComplianceFlags",
    "GSTComponentRow",
    "GSTSummary",
    "LedgerBook",
    "LedgerBookLine",
    "LedgerEntry",
    "ProfitAndLoss",
    "ProfitAndLossLine",
    "TrialBalance",
    "TrialBalanceRow",
    "format_balance",
    # Diagnostic events
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
    "LedgerSeverity",
]
