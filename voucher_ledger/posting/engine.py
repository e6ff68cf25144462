"""
Posting Engine

Posting expands one voucher into balanced debit/credit ledger entries.

GUARANTEES:
- Pure: never mutates the voucher or the chart of accounts
- Total: never raises for any voucher content. Unknown account ids are
  posted verbatim and surface later as orphaned entries.
- Deterministic: the same voucher and chart always give the same
  entries, with the same ids, in the same order

ENTRY ORDER:
Header (party) entry first, then one block per line item in line order:
the line's principal entry followed by its IGST, CGST and SGST entries.

POSTING RULES (per voucher type):
- Sales:    Dr party for total_amount; Cr each line account, Cr output tax
- Purchase: Cr party for total_amount; Dr each line account, Dr input tax
- Receipt:  Dr party (receiving cash/bank) for the sum of line amounts;
            Cr each line account. Tax columns are ignored.
- Payment:  Cr party (paying cash/bank) for the sum of line amounts;
            Dr each line account. Tax columns are ignored.
- Contra, Journal, Debit Note, Credit Note, Expense: no posting rule is
  modelled. They post NO entries. Supply a rule for any of them through
  PostingEngine(rules={...}) to change that.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from voucher_ledger.models.account import (
    AccountsLike,
    ChartOfAccounts,
    TaxComponent,
    TaxDirection,
    TaxRole,
)
from voucher_ledger.models.ledger import LedgerEntry
from voucher_ledger.models.voucher import Voucher, VoucherLineItem, VoucherType


ZERO = Decimal("0")


class EntryWriter:
    """
    Creates the ledger entries for a single voucher.

    Numbers entries '{voucher_id}-1', '{voucher_id}-2', ... in the order
    they are written.
    """

    def __init__(self, voucher: Voucher):
        self._voucher = voucher
        self._sequence = 0
        self.entries: list[LedgerEntry] = []

    def _write(self, account_id: str, debit: Decimal, credit: Decimal, description: str) -> None:
        self._sequence += 1
        self.entries.append(LedgerEntry(
            id=f"{self._voucher.id}-{self._sequence}",
            date=self._voucher.date,
            voucher_id=self._voucher.id,
            voucher_type=self._voucher.type,
            account_id=account_id,
            description=description,
            debit=debit,
            credit=credit,
        ))

    def debit(self, account_id: str, amount: Decimal, description: str) -> None:
        self._write(account_id, amount, ZERO, description)

    def credit(self, account_id: str, amount: Decimal, description: str) -> None:
        self._write(account_id, ZERO, amount, description)


PostingRule = Callable[[Voucher, ChartOfAccounts, EntryWriter], None]


# Posted in this order after each line's principal entry
_TAX_COMPONENTS = (TaxComponent.IGST, TaxComponent.CGST, TaxComponent.SGST)


def _line_tax(line: VoucherLineItem, component: TaxComponent) -> Decimal:
    if component == TaxComponent.IGST:
        return line.igst
    if component == TaxComponent.CGST:
        return line.cgst
    return line.sgst


def _post_line_taxes(
    line: VoucherLineItem,
    direction: TaxDirection,
    chart: ChartOfAccounts,
    writer: EntryWriter,
) -> None:
    for component in _TAX_COMPONENTS:
        amount = _line_tax(line, component)
        if amount <= 0:
            continue
        role = TaxRole.for_tax(direction, component)
        account_id = chart.tax_account_id(role)
        description = f"{role.value} on {line.description}"
        if direction == TaxDirection.OUTPUT:
            writer.credit(account_id, amount, description)
        else:
            writer.debit(account_id, amount, description)


# =============================================================================
# POSTING RULES
# =============================================================================

def post_sales(voucher: Voucher, chart: ChartOfAccounts, writer: EntryWriter) -> None:
    # Party (debtor) is debited for the invoice total
    writer.debit(
        voucher.party_account_id,
        voucher.total_amount,
        f"Sales Invoice #{voucher.voucher_number}",
    )
    for line in voucher.line_items:
        writer.credit(line.account_id, line.amount, f"Sales: {line.description}")
        _post_line_taxes(line, TaxDirection.OUTPUT, chart, writer)


def post_purchase(voucher: Voucher, chart: ChartOfAccounts, writer: EntryWriter) -> None:
    # Party (creditor) is credited for the bill total
    writer.credit(
        voucher.party_account_id,
        voucher.total_amount,
        f"Purchase Invoice #{voucher.voucher_number}",
    )
    for line in voucher.line_items:
        writer.debit(line.account_id, line.amount, f"Purchase: {line.description}")
        _post_line_taxes(line, TaxDirection.INPUT, chart, writer)


def post_receipt(voucher: Voucher, chart: ChartOfAccounts, writer: EntryWriter) -> None:
    # Header is the receiving cash/bank account; lines are the payers
    writer.debit(voucher.party_account_id, voucher.line_amount_total, "Receipt from parties")
    for line in voucher.line_items:
        writer.credit(line.account_id, line.amount, f"Received from {line.description}")


def post_payment(voucher: Voucher, chart: ChartOfAccounts, writer: EntryWriter) -> None:
    # Header is the paying cash/bank account; lines are the payees
    writer.credit(voucher.party_account_id, voucher.line_amount_total, "Payment to parties")
    for line in voucher.line_items:
        writer.debit(line.account_id, line.amount, f"Paid to {line.description}")


def post_nothing(voucher: Voucher, chart: ChartOfAccounts, writer: EntryWriter) -> None:
    """Placeholder rule for voucher types with no modelled posting."""
    return None


DEFAULT_POSTING_RULES: Mapping[VoucherType, PostingRule] = MappingProxyType({
    VoucherType.SALES: post_sales,
    VoucherType.PURCHASE: post_purchase,
    VoucherType.RECEIPT: post_receipt,
    VoucherType.PAYMENT: post_payment,
    VoucherType.CONTRA: post_nothing,
    VoucherType.JOURNAL: post_nothing,
    VoucherType.DEBIT_NOTE: post_nothing,
    VoucherType.CREDIT_NOTE: post_nothing,
    VoucherType.EXPENSE: post_nothing,
})


# =============================================================================
# ENGINE
# =============================================================================

class PostingEngine:
    """
    Table-driven posting engine.

    Holds one PostingRule per voucher type. Rules passed in `rules`
    replace the defaults for their types.
    """

    def __init__(self, rules: Optional[Mapping[VoucherType, PostingRule]] = None):
        merged = dict(DEFAULT_POSTING_RULES)
        if rules:
            merged.update(rules)
        self._rules = MappingProxyType(merged)

    @property
    def rules(self) -> Mapping[VoucherType, PostingRule]:
        return self._rules

    def has_rule(self, voucher_type: VoucherType) -> bool:
        """False for types that fall through to the no-op rule."""
        return self._rules.get(voucher_type, post_nothing) is not post_nothing

    def post(self, voucher: Voucher, accounts: AccountsLike) -> list[LedgerEntry]:
        """Post one voucher. See the module docstring for the rule table."""
        chart = ChartOfAccounts.coerce(accounts)
        writer = EntryWriter(voucher)
        rule = self._rules.get(voucher.type, post_nothing)
        rule(voucher, chart, writer)
        return writer.entries

    def post_all(self, vouchers: Iterable[Voucher], accounts: AccountsLike) -> list[LedgerEntry]:
        """Post a voucher history in order and concatenate the entries."""
        chart = ChartOfAccounts.coerce(accounts)
        entries: list[LedgerEntry] = []
        for voucher in vouchers:
            entries.extend(self.post(voucher, chart))
        return entries


_default_engine = PostingEngine()


def post_voucher_to_ledger(voucher: Voucher, accounts: AccountsLike) -> list[LedgerEntry]:
    """
    Expand a voucher into ordered ledger entries using the default rules.

    Sales, Purchase, Receipt and Payment are posted. Contra, Journal,
    Debit Note, Credit Note and Expense vouchers post no entries.
    """
    return _default_engine.post(voucher, accounts)


def rebuild_entries(
    vouchers: Iterable[Voucher],
    accounts: AccountsLike,
    engine: Optional[PostingEngine] = None,
) -> list[LedgerEntry]:
    """
    Recompute the full entry set from the whole voucher history.

    The previous entry set is never patched; callers discard it and use
    this result.
    """
    return (engine or _default_engine).post_all(vouchers, accounts)
