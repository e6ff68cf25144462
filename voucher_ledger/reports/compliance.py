"""
GST Compliance Flags

Predicates evaluated on a voucher or a draft, not on posted entries.

- E-Way Bill: consignment value above ₹50,000 on a Sales or Purchase voucher
- E-Invoice: B2B party (Sundry Debtor / Sundry Creditor) on a Sales or
  Credit Note voucher

The E-Way Bill threshold is statutory and deliberately not configurable.
"""

from decimal import Decimal
from typing import Optional

from voucher_ledger.models.account import Account, AccountsLike, ChartOfAccounts
from voucher_ledger.models.ledger import ComplianceFlags
from voucher_ledger.models.voucher import Voucher, VoucherType


E_WAY_BILL_THRESHOLD = Decimal("50000")

_E_WAY_BILL_TYPES = frozenset({VoucherType.SALES, VoucherType.PURCHASE})
_E_INVOICE_TYPES = frozenset({VoucherType.SALES, VoucherType.CREDIT_NOTE})


def evaluate_compliance(
    voucher_type: VoucherType,
    total_amount: Decimal,
    party: Optional[Account],
) -> ComplianceFlags:
    """Evaluate both flags. The threshold comparison is strict (> ₹50,000)."""
    e_way_bill = total_amount > E_WAY_BILL_THRESHOLD and voucher_type in _E_WAY_BILL_TYPES
    is_b2b = party is not None and party.is_business_party
    e_invoice = is_b2b and voucher_type in _E_INVOICE_TYPES
    return ComplianceFlags(
        e_way_bill_required=e_way_bill,
        e_invoice_applicable=e_invoice,
    )


def compliance_for_voucher(voucher: Voucher, accounts: AccountsLike) -> ComplianceFlags:
    """Evaluate flags for a voucher, resolving its party from the chart."""
    chart = ChartOfAccounts.coerce(accounts)
    return evaluate_compliance(
        voucher.type,
        voucher.total_amount,
        chart.get(voucher.party_account_id),
    )
