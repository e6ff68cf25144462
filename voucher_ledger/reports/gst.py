"""
GST Summary

Input tax credit (debits on input-role accounts) against output tax
(credits on output-role accounts). Tax accounts are recognised by the
TaxRole on the account, so renaming an account id never changes the
report.
"""

from decimal import Decimal
from typing import Iterable

from voucher_ledger.models.account import (
    AccountsLike,
    ChartOfAccounts,
    TaxComponent,
    TaxDirection,
)
from voucher_ledger.models.ledger import GSTComponentRow, GSTSummary, LedgerEntry


_COMPONENT_ORDER = (TaxComponent.IGST, TaxComponent.CGST, TaxComponent.SGST)


def get_gst_summary(entries: Iterable[LedgerEntry], accounts: AccountsLike) -> GSTSummary:
    """
    Aggregate GST from ledger entries.

    input_tax  = sum of debits on input-role accounts
    output_tax = sum of credits on output-role accounts
    payable    = output_tax - input_tax (negative means refundable)
    """
    chart = ChartOfAccounts.coerce(accounts)
    input_by_component = {c: Decimal("0") for c in _COMPONENT_ORDER}
    output_by_component = {c: Decimal("0") for c in _COMPONENT_ORDER}

    for entry in entries:
        account = chart.get(entry.account_id)
        if account is None or not account.is_tax_account:
            continue
        role = account.tax_role
        if role.direction == TaxDirection.INPUT:
            input_by_component[role.component] += entry.debit
        elif role.direction == TaxDirection.OUTPUT:
            output_by_component[role.component] += entry.credit

    input_tax = sum(input_by_component.values(), Decimal("0"))
    output_tax = sum(output_by_component.values(), Decimal("0"))

    return GSTSummary(
        input_tax=input_tax,
        output_tax=output_tax,
        payable=output_tax - input_tax,
        input_rows=[
            GSTComponentRow(direction=TaxDirection.INPUT, component=c, amount=input_by_component[c])
            for c in _COMPONENT_ORDER
        ],
        output_rows=[
            GSTComponentRow(direction=TaxDirection.OUTPUT, component=c, amount=output_by_component[c])
            for c in _COMPONENT_ORDER
        ],
    )
