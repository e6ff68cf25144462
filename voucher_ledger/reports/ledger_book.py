"""Per-account ledger book with running balance."""

from decimal import Decimal
from typing import Iterable, Optional

from voucher_ledger.models.account import AccountsLike, ChartOfAccounts
from voucher_ledger.models.ledger import LedgerBook, LedgerBookLine, LedgerEntry


def get_ledger_book(
    entries: Iterable[LedgerEntry],
    account_id: str,
    accounts: Optional[AccountsLike] = None,
) -> LedgerBook:
    """
    Statement for one account.

    Entries keep ledger order, which is voucher creation order. The
    running balance starts at the account's opening balance (zero for an
    account missing from the chart) and moves by debit - credit per entry.
    """
    chart = ChartOfAccounts.coerce(accounts)
    account = chart.get(account_id)
    opening = account.opening_balance if account else Decimal("0")

    balance = opening
    lines = []
    for entry in entries:
        if entry.account_id != account_id:
            continue
        balance = balance + entry.debit - entry.credit
        lines.append(LedgerBookLine(entry=entry, balance=balance))

    return LedgerBook(
        account_id=account_id,
        account_name=account.name if account else "",
        opening_balance=opening,
        lines=lines,
    )
