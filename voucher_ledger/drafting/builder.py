"""
Voucher Drafting

Helpers for the voucher-entry collaborator: building lines from catalog
items, splitting GST, keeping the cached total honest, numbering, and a
live posting preview before the voucher is saved.

DESIGN DECISION: Drafting never rounds.
Tax components are computed exactly in Decimal so the voucher total
always equals the sum of its parts; rounding for display happens at the
presentation edge.
"""

from datetime import date as date_type  # Alias to avoid confusion with field name
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from voucher_ledger.config import get_settings
from voucher_ledger.masters.defaults import DEFAULT_PURCHASE_ACCOUNT_ID, DEFAULT_SALES_ACCOUNT_ID
from voucher_ledger.models.account import AccountsLike, AccountSubGroup, ChartOfAccounts, Item
from voucher_ledger.models.ledger import ComplianceFlags, LedgerEntry
from voucher_ledger.models.voucher import Voucher, VoucherLineItem, VoucherType
from voucher_ledger.posting import PostingEngine, post_voucher_to_ledger
from voucher_ledger.reports.compliance import evaluate_compliance


PREVIEW_VOUCHER_ID = "temp-preview"
PREVIEW_VOUCHER_NUMBER = "PREVIEW"


def compute_line_taxes(
    amount: Decimal,
    gst_rate: Decimal,
    inter_state: bool = False,
) -> tuple[Decimal, Decimal, Decimal]:
    """
    Split GST on a taxable amount.

    Returns (cgst, sgst, igst). Intra-state supply is split evenly
    between CGST and SGST; inter-state supply is all IGST.
    """
    tax = amount * gst_rate / Decimal("100")
    zero = Decimal("0")
    if inter_state:
        return zero, zero, tax
    half = tax / Decimal("2")
    return half, half, zero


def build_line(
    account_id: str,
    amount: Decimal,
    description: str = "",
    gst_rate: Decimal = Decimal("0"),
    inter_state: bool = False,
    is_debit: bool = False,
) -> VoucherLineItem:
    """A direct ledger line (no catalog item)."""
    cgst, sgst, igst = compute_line_taxes(amount, gst_rate, inter_state)
    return VoucherLineItem(
        account_id=account_id,
        description=description,
        amount=amount,
        gst_rate=gst_rate,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        is_debit=is_debit,
    )


def default_line_account(voucher_type: VoucherType) -> Optional[str]:
    if voucher_type == VoucherType.SALES:
        return DEFAULT_SALES_ACCOUNT_ID
    if voucher_type == VoucherType.PURCHASE:
        return DEFAULT_PURCHASE_ACCOUNT_ID
    return None


def line_from_item(
    item: Item,
    voucher_type: VoucherType,
    qty: Decimal = Decimal("1"),
    account_id: Optional[str] = None,
    inter_state: bool = False,
) -> VoucherLineItem:
    """
    Pre-fill a line from a catalog item.

    Description, rate and GST rate come from the item; amount is
    qty x rate. The account defaults to the Sales or Purchase account
    for those voucher types.
    """
    qty = Decimal(qty)
    amount = qty * item.price
    cgst, sgst, igst = compute_line_taxes(amount, item.gst_rate, inter_state)
    return VoucherLineItem(
        item_id=item.id,
        account_id=account_id or default_line_account(voucher_type) or "",
        description=item.name,
        qty=qty,
        rate=item.price,
        amount=amount,
        gst_rate=item.gst_rate,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        is_debit=voucher_type in (VoucherType.PURCHASE, VoucherType.PAYMENT),
    )


def voucher_total(lines: Iterable[VoucherLineItem]) -> Decimal:
    """Sum of amount plus every tax component across lines."""
    return sum((line.gross_amount for line in lines), Decimal("0"))


def next_voucher_number(voucher_type: VoucherType, existing_count: int) -> str:
    """Number vouchers like SAL-100, PUR-101 (offset from settings)."""
    start = get_settings().voucher_number_start
    return f"{voucher_type.number_prefix}-{existing_count + start}"


def default_narration(voucher_type: VoucherType) -> str:
    return f"Being {voucher_type.value} entry made manually"


class VoucherDraft(BaseModel):
    """
    A voucher still being entered.

    Holds no cached total; the total is always recomputed from lines.
    """

    type: VoucherType = VoucherType.SALES
    party_account_id: str = ""
    line_items: list[VoucherLineItem] = Field(default_factory=list)
    date: Optional[date_type] = None
    narration: str = ""

    @property
    def total_amount(self) -> Decimal:
        return voucher_total(self.line_items)

    @property
    def taxable_value(self) -> Decimal:
        return sum((line.amount for line in self.line_items), Decimal("0"))

    @property
    def tax_total(self) -> Decimal:
        return sum((line.tax_total for line in self.line_items), Decimal("0"))

    @property
    def is_ready(self) -> bool:
        """A party and at least one line are required before saving."""
        return bool(self.party_account_id) and len(self.line_items) > 0

    def to_voucher(
        self,
        voucher_number: str,
        voucher_id: Optional[str] = None,
        on_date: Optional[date_type] = None,
    ) -> Voucher:
        """Freeze the draft into a voucher with a consistent cached total."""
        return Voucher(
            id=voucher_id or uuid4().hex[:9],
            date=on_date or self.date or date_type.today(),
            type=self.type,
            voucher_number=voucher_number,
            party_account_id=self.party_account_id,
            line_items=[line.model_copy() for line in self.line_items],
            narration=self.narration or default_narration(self.type),
            total_amount=self.total_amount,
        )

    def preview(
        self,
        accounts: AccountsLike,
        engine: Optional[PostingEngine] = None,
    ) -> list[LedgerEntry]:
        """
        Ledger entries this draft would post.

        Empty until the draft has a party and at least one line.
        """
        if not self.is_ready:
            return []
        voucher = self.to_voucher(
            voucher_number=PREVIEW_VOUCHER_NUMBER,
            voucher_id=PREVIEW_VOUCHER_ID,
        )
        if engine is not None:
            return engine.post(voucher, accounts)
        return post_voucher_to_ledger(voucher, accounts)

    def compliance(self, accounts: AccountsLike) -> ComplianceFlags:
        chart = ChartOfAccounts.coerce(accounts)
        return evaluate_compliance(self.type, self.total_amount, chart.get(self.party_account_id))


# =============================================================================
# SETTLEMENT DRAFTS
# =============================================================================

class SettlementKind(str, Enum):
    """Follow-up vouchers that clear an existing voucher's party."""
    RECEIPT = "RECEIPT"
    PAYMENT = "PAYMENT"
    CREDIT_NOTE = "CN"
    DEBIT_NOTE = "DN"


_SETTLEMENT_TYPES = {
    SettlementKind.RECEIPT: VoucherType.RECEIPT,
    SettlementKind.PAYMENT: VoucherType.PAYMENT,
    SettlementKind.CREDIT_NOTE: VoucherType.CREDIT_NOTE,
    SettlementKind.DEBIT_NOTE: VoucherType.DEBIT_NOTE,
}


def settlement_draft(
    voucher: Voucher,
    kind: SettlementKind,
    accounts: AccountsLike,
) -> VoucherDraft:
    """
    Draft a voucher that settles `voucher` in full.

    Receipts and payments use the first Cash & Bank account as the
    header party; credit and debit notes keep the original party. The
    single line clears the original party for its full total.
    """
    chart = ChartOfAccounts.coerce(accounts)

    if kind in (SettlementKind.RECEIPT, SettlementKind.PAYMENT):
        banks = chart.by_sub_group(AccountSubGroup.CASH_BANK)
        party = banks[0].id if banks else ""
    else:
        party = voucher.party_account_id

    line = VoucherLineItem(
        account_id=voucher.party_account_id,
        description=f"Against {voucher.type.value} #{voucher.voucher_number}",
        amount=voucher.total_amount,
        is_debit=kind in (SettlementKind.PAYMENT, SettlementKind.DEBIT_NOTE),
    )

    return VoucherDraft(
        type=_SETTLEMENT_TYPES[kind],
        party_account_id=party,
        line_items=[line],
    )
