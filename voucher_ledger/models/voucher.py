"""
Voucher Models

A voucher is one recorded business transaction: a header naming the
counter-party plus an ordered list of line items. Vouchers are produced
by the voucher-entry collaborator and consumed by the posting engine.

DESIGN DECISION: The models do NOT reject inconsistent vouchers.
The cached total, empty line lists and unknown accounts are reported by
the VoucherValidator, never silently corrected. Zero and negative
amounts are legitimate (corrective entries).
"""

from datetime import date as date_type  # Alias to avoid confusion with field name
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class VoucherType(str, Enum):
    """Supported voucher types."""
    SALES = "Sales"
    PURCHASE = "Purchase"
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    CONTRA = "Contra"
    JOURNAL = "Journal"
    DEBIT_NOTE = "Debit Note"
    CREDIT_NOTE = "Credit Note"
    EXPENSE = "Expense"

    @property
    def number_prefix(self) -> str:
        """Prefix used in voucher numbers, e.g. SAL for Sales."""
        return self.value.upper()[:3]


class VoucherLineItem(BaseModel):
    """
    A single line on a voucher.

    Tax components are mutually exclusive in practice: intra-state lines
    carry CGST + SGST, inter-state lines carry IGST only.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:9])
    item_id: Optional[str] = Field(
        default=None,
        description="Catalog item this line was filled from"
    )
    account_id: str = Field(
        ...,
        description="Ledger account the line posts to"
    )
    description: str = ""
    qty: Decimal = Decimal("0")
    rate: Decimal = Decimal("0")
    amount: Decimal = Field(
        default=Decimal("0"),
        description="Taxable amount (qty x rate, or entered directly)"
    )
    gst_rate: Decimal = Decimal("0")
    igst: Decimal = Decimal("0")
    cgst: Decimal = Decimal("0")
    sgst: Decimal = Decimal("0")
    # UI hint only; posting derives orientation from the voucher type
    is_debit: bool = False

    @property
    def tax_total(self) -> Decimal:
        return self.igst + self.cgst + self.sgst

    @property
    def gross_amount(self) -> Decimal:
        """Amount plus all tax components."""
        return self.amount + self.tax_total


class Voucher(BaseModel):
    """
    Transaction header plus ordered line items.

    `total_amount` is a cached value that must equal the sum of every
    line's amount and tax components. Line order has no accounting
    meaning but fixes the order of posted ledger entries.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:9])
    date: date_type
    type: VoucherType
    voucher_number: str = Field(
        ...,
        description="Human-readable number, unique within a ledger"
    )
    party_account_id: str = Field(
        default="",
        description="Counter-party (customer, supplier, or cash/bank for receipts/payments)"
    )
    line_items: list[VoucherLineItem] = Field(default_factory=list)
    narration: str = ""
    total_amount: Decimal = Decimal("0")

    @property
    def computed_total(self) -> Decimal:
        """Recomputed total across all lines."""
        return sum((line.gross_amount for line in self.line_items), Decimal("0"))

    @property
    def is_total_consistent(self) -> bool:
        return self.total_amount == self.computed_total

    @property
    def line_amount_total(self) -> Decimal:
        """Sum of line amounts, taxes excluded."""
        return sum((line.amount for line in self.line_items), Decimal("0"))

    @property
    def taxable_value(self) -> Decimal:
        return self.line_amount_total

    @property
    def tax_total(self) -> Decimal:
        return sum((line.tax_total for line in self.line_items), Decimal("0"))


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on a voucher."""

    field: str = Field(
        ...,
        description="Field with the issue (e.g. 'party_account_id', 'line_items[0].igst')"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g. 'missing', 'unknown_account', 'total_mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of the two-stage voucher validation.

    Stage 1: Structural checks (party, lines, accounts, cached total)
    Stage 2: Semantic checks (tax mix, amounts, dates, numbering)
    """

    voucher_id: str
    structure_valid: bool
    semantic_valid: bool
    is_valid: bool = Field(
        ...,
        description="Safe to hand to the posting engine"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")
