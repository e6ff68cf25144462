"""
Ledger and Report Models

Everything in this module is DERIVED: ledger entries come from posting
vouchers, report rows come from aggregating entries. Nothing here is
stored independently; a new voucher history means new instances.
"""

from datetime import date as date_type  # Alias to avoid confusion with field name
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from voucher_ledger.config import get_settings
from voucher_ledger.models.account import TaxComponent, TaxDirection
from voucher_ledger.models.voucher import VoucherType


ZERO = Decimal("0")


class BalanceSide(str, Enum):
    """Dr/Cr label for a signed balance."""
    DEBIT = "Dr"
    CREDIT = "Cr"

    @classmethod
    def of(cls, balance: Decimal) -> "BalanceSide":
        # Zero is shown as a debit balance
        return cls.DEBIT if balance >= 0 else cls.CREDIT


def format_balance(
    balance: Decimal,
    places: Optional[int] = None,
    currency: Optional[str] = None,
) -> str:
    """
    Format a signed balance as an absolute amount with a Dr/Cr suffix.

    places and currency default to amount_display_places and
    currency_symbol from settings.
    """
    settings = get_settings()
    places = settings.amount_display_places if places is None else places
    currency = settings.currency_symbol if currency is None else currency
    quantum = Decimal(1).scaleb(-places)
    amount = abs(balance).quantize(quantum)
    return f"{currency}{amount:,} {BalanceSide.of(balance).value}"


# =============================================================================
# LEDGER ENTRY
# =============================================================================

class LedgerEntry(BaseModel):
    """
    One side of a double-entry posting.

    At most one of debit/credit is non-zero. A zero-valued line still
    posts an entry with both sides zero.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="'{voucher_id}-{sequence}', unique across the ledger"
    )
    date: date_type
    voucher_id: str
    voucher_type: VoucherType
    account_id: str
    description: str = ""
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @model_validator(mode='after')
    def validate_single_side(self) -> 'LedgerEntry':
        if self.debit != 0 and self.credit != 0:
            raise ValueError("A ledger entry cannot carry both a debit and a credit")
        return self

    @property
    def net(self) -> Decimal:
        """Signed effect on the account (debit positive)."""
        return self.debit - self.credit


# =============================================================================
# TRIAL BALANCE
# =============================================================================

class TrialBalanceRow(BaseModel):
    """Per-account aggregate of gross and netted debits/credits."""

    account_id: str
    account_name: str
    debit_total: Decimal = ZERO
    credit_total: Decimal = ZERO
    net_debit: Decimal = ZERO
    net_credit: Decimal = ZERO


class TrialBalance(BaseModel):
    """
    Trial balance rows plus the entries that could not be placed.

    Orphaned entries reference account ids missing from the chart.
    They are excluded from the rows but never discarded silently.
    """

    rows: list[TrialBalanceRow] = Field(default_factory=list)
    orphaned_entries: list[LedgerEntry] = Field(default_factory=list)

    @property
    def total_net_debit(self) -> Decimal:
        return sum((row.net_debit for row in self.rows), ZERO)

    @property
    def total_net_credit(self) -> Decimal:
        return sum((row.net_credit for row in self.rows), ZERO)

    @property
    def is_balanced(self) -> bool:
        return self.total_net_debit == self.total_net_credit

    @property
    def has_orphans(self) -> bool:
        return len(self.orphaned_entries) > 0

    @property
    def orphaned_account_ids(self) -> list[str]:
        """Distinct unknown account ids, in first-seen order."""
        return list(dict.fromkeys(e.account_id for e in self.orphaned_entries))

    def row_for(self, account_id: str) -> Optional[TrialBalanceRow]:
        for row in self.rows:
            if row.account_id == account_id:
                return row
        return None


# =============================================================================
# PROFIT & LOSS
# =============================================================================

class ProfitAndLossLine(BaseModel):
    account_id: str
    account_name: str
    amount: Decimal


class ProfitAndLoss(BaseModel):
    """
    Income vs expense netting.

    Sign convention: positive net_profit is a profit, negative a loss.
    """

    income: Decimal = ZERO
    expense: Decimal = ZERO
    net_profit: Decimal = ZERO
    income_lines: list[ProfitAndLossLine] = Field(default_factory=list)
    expense_lines: list[ProfitAndLossLine] = Field(default_factory=list)

    @property
    def is_profit(self) -> bool:
        return self.net_profit >= 0

    @property
    def label(self) -> str:
        return "Net Profit" if self.is_profit else "Net Loss"


# =============================================================================
# GST SUMMARY
# =============================================================================

class GSTComponentRow(BaseModel):
    """Tax total for one direction/component pair (e.g. Output CGST)."""

    direction: TaxDirection
    component: TaxComponent
    amount: Decimal = ZERO


class GSTSummary(BaseModel):
    """
    Input tax credit against output tax liability.

    payable > 0: owed to the tax authority.
    payable < 0: refundable / carried-forward credit.
    """

    input_tax: Decimal = ZERO
    output_tax: Decimal = ZERO
    payable: Decimal = ZERO
    input_rows: list[GSTComponentRow] = Field(default_factory=list)
    output_rows: list[GSTComponentRow] = Field(default_factory=list)

    @property
    def is_refundable(self) -> bool:
        return self.payable < 0

    @property
    def label(self) -> str:
        return "Net GST Payable" if self.payable > 0 else "Net Refundable"


# =============================================================================
# LEDGER BOOK
# =============================================================================

class LedgerBookLine(BaseModel):
    """A ledger entry with the account's running balance after it."""

    entry: LedgerEntry
    balance: Decimal

    @property
    def side(self) -> BalanceSide:
        return BalanceSide.of(self.balance)


class LedgerBook(BaseModel):
    """Chronological statement for a single account."""

    account_id: str
    account_name: str = ""
    opening_balance: Decimal = ZERO
    lines: list[LedgerBookLine] = Field(default_factory=list)

    @property
    def closing_balance(self) -> Decimal:
        if self.lines:
            return self.lines[-1].balance
        return self.opening_balance

    @property
    def closing_side(self) -> BalanceSide:
        return BalanceSide.of(self.closing_balance)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.entry.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.entry.credit for line in self.lines), ZERO)

    def closing_display(self, places: Optional[int] = None, currency: Optional[str] = None) -> str:
        return format_balance(self.closing_balance, places, currency)


# =============================================================================
# COMPLIANCE
# =============================================================================

class ComplianceFlags(BaseModel):
    """GST compliance indicators for a voucher or draft."""

    e_way_bill_required: bool = False
    e_invoice_applicable: bool = False
