"""
Chart of Accounts Models

Accounts are the join key for everything else in the ledger: vouchers
name them, ledger entries post to them, reports group by them.

DESIGN DECISION: Tax-duty accounts carry an explicit TaxRole.
Reports and the posting engine look tax accounts up by role, never by
matching fragments of the account id.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from voucher_ledger.errors import DuplicateAccountError


# =============================================================================
# ENUMS
# =============================================================================

class AccountGroup(str, Enum):
    """Primary classification of an account."""
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSE = "Expense"


class AccountSubGroup(str, Enum):
    """Secondary classification (Tally-style groups)."""
    CURRENT_ASSET = "Current Asset"
    FIXED_ASSET = "Fixed Asset"
    CASH_BANK = "Cash & Bank"
    SUNDRY_DEBTOR = "Sundry Debtor"      # Customers
    SUNDRY_CREDITOR = "Sundry Creditor"  # Suppliers
    DUTIES_TAXES = "Duties & Taxes"
    SALES_ACCOUNT = "Sales Account"
    PURCHASE_ACCOUNT = "Purchase Account"
    INDIRECT_EXPENSE = "Indirect Expense"
    DIRECT_EXPENSE = "Direct Expense"
    CAPITAL_ACCOUNT = "Capital Account"


class TaxDirection(str, Enum):
    INPUT = "input"
    OUTPUT = "output"
    NONE = "none"


class TaxComponent(str, Enum):
    IGST = "IGST"
    CGST = "CGST"
    SGST = "SGST"
    NONE = "none"


class TaxRole(str, Enum):
    """
    Role an account plays in GST accounting.

    Input roles hold tax paid on purchases (reclaimable asset).
    Output roles hold tax collected on sales (liability).
    """
    NONE = "None"
    INPUT_CGST = "Input CGST"
    INPUT_SGST = "Input SGST"
    INPUT_IGST = "Input IGST"
    OUTPUT_CGST = "Output CGST"
    OUTPUT_SGST = "Output SGST"
    OUTPUT_IGST = "Output IGST"

    @property
    def direction(self) -> TaxDirection:
        if self is TaxRole.NONE:
            return TaxDirection.NONE
        if self.value.startswith("Input"):
            return TaxDirection.INPUT
        return TaxDirection.OUTPUT

    @property
    def component(self) -> TaxComponent:
        if self is TaxRole.NONE:
            return TaxComponent.NONE
        return TaxComponent(self.value.split()[-1])

    @classmethod
    def for_tax(cls, direction: TaxDirection, component: TaxComponent) -> "TaxRole":
        """Look up the role for a direction/component pair."""
        for role in cls:
            if role.direction == direction and role.component == component:
                return role
        return cls.NONE


# Account ids used when a chart has no account tagged with a role.
# Postings to these ids still happen; they surface as orphaned entries.
CONVENTIONAL_TAX_ACCOUNT_IDS: dict[TaxRole, str] = {
    TaxRole.INPUT_CGST: "acc_input_cgst",
    TaxRole.INPUT_SGST: "acc_input_sgst",
    TaxRole.INPUT_IGST: "acc_input_igst",
    TaxRole.OUTPUT_CGST: "acc_output_cgst",
    TaxRole.OUTPUT_SGST: "acc_output_sgst",
    TaxRole.OUTPUT_IGST: "acc_output_igst",
}


# =============================================================================
# ACCOUNT / ITEM MODELS
# =============================================================================

class Account(BaseModel):
    """
    A single ledger account.

    Immutable for the lifetime of a ledger computation.
    Opening balance is signed: positive = net debit, negative = net credit.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique account key"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    group: AccountGroup
    sub_group: AccountSubGroup
    opening_balance: Decimal = Field(
        default=Decimal("0"),
        description="Signed opening balance (Dr positive, Cr negative)"
    )
    tax_role: TaxRole = Field(
        default=TaxRole.NONE,
        description="GST role for Duties & Taxes accounts"
    )

    @property
    def is_business_party(self) -> bool:
        """Customers and suppliers (B2B counter-parties)."""
        return self.sub_group in (
            AccountSubGroup.SUNDRY_DEBTOR,
            AccountSubGroup.SUNDRY_CREDITOR,
        )

    @property
    def is_tax_account(self) -> bool:
        return self.tax_role is not TaxRole.NONE

    def describe_effect(self, is_debit: bool) -> str:
        """
        Describe what a debit or credit does to this account.

        These are the modern "golden rules": assets and expenses grow on
        the debit side, liabilities, capital and income on the credit side.
        """
        if self.group == AccountGroup.ASSET:
            return "Asset Increasing ↑" if is_debit else "Asset Decreasing ↓"
        if self.group == AccountGroup.LIABILITY:
            return "Liability Decreasing ↓" if is_debit else "Liability Increasing ↑"
        if self.group == AccountGroup.EQUITY:
            return "Capital Decreasing ↓" if is_debit else "Capital Increasing ↑"
        if self.group == AccountGroup.EXPENSE:
            return "Expense Increasing ↑" if is_debit else "Expense Decreasing ↓"
        if self.group == AccountGroup.INCOME:
            return "Income Decreasing ↓" if is_debit else "Income Increasing ↑"
        return "General Rule"


class Item(BaseModel):
    """
    Catalog item used to pre-fill voucher lines.

    Carries no accounting semantics of its own.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    name: str
    hsn_code: str = Field(
        default="",
        max_length=8,
        description="HSN/SAC tax code"
    )
    price: Decimal = Field(
        default=Decimal("0"),
        description="Unit price in INR"
    )
    gst_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        description="GST rate in percent (e.g. 18)"
    )
    unit: str = "Nos"


# =============================================================================
# CHART OF ACCOUNTS
# =============================================================================

class ChartOfAccounts:
    """
    Ordered, read-only registry of accounts.

    Iteration follows the order accounts were supplied in; the trial
    balance relies on that order. Tax roles are resolved once here.
    """

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: dict[str, Account] = {}
        for account in accounts:
            if account.id in self._accounts:
                raise DuplicateAccountError(account.id)
            self._accounts[account.id] = account

        self._tax_accounts: dict[TaxRole, str] = {}
        for account in self._accounts.values():
            if account.is_tax_account:
                # First account tagged with a role wins
                self._tax_accounts.setdefault(account.tax_role, account.id)

    @classmethod
    def coerce(
        cls,
        accounts: Union["ChartOfAccounts", Sequence[Account], None],
    ) -> "ChartOfAccounts":
        """Accept either a chart or a plain sequence of accounts."""
        if isinstance(accounts, ChartOfAccounts):
            return accounts
        return cls(accounts or ())

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def get(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def tax_account_id(self, role: TaxRole) -> str:
        """
        Account id tagged with `role`.

        Falls back to the conventional id when the chart has no such
        account, so posting never fails for a sparse chart.
        """
        return self._tax_accounts.get(role, CONVENTIONAL_TAX_ACCOUNT_IDS.get(role, ""))

    def by_sub_group(self, sub_group: AccountSubGroup) -> list[Account]:
        return [a for a in self._accounts.values() if a.sub_group == sub_group]

    def by_group(self, group: AccountGroup) -> list[Account]:
        return [a for a in self._accounts.values() if a.group == group]

    def with_account(self, account: Account) -> "ChartOfAccounts":
        """Return a new chart with `account` appended."""
        return ChartOfAccounts([*self._accounts.values(), account])


AccountsLike = Union[ChartOfAccounts, Sequence[Account]]
