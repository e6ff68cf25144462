"""
Ledger Aggregator

Folds ledger entries into one trial-balance row per account.

GUARANTEES:
- Rows follow chart-of-accounts order, not value order
- Accounts with zero gross debit and zero gross credit get no row
- No row has both net_debit > 0 and net_credit > 0
- Entries for account ids missing from the chart are returned as
  orphaned entries, never dropped silently
"""

from decimal import Decimal
from typing import Iterable

from voucher_ledger.models.account import AccountsLike, ChartOfAccounts
from voucher_ledger.models.ledger import LedgerEntry, TrialBalance, TrialBalanceRow


ZERO = Decimal("0")


def aggregate_ledger(entries: Iterable[LedgerEntry], accounts: AccountsLike) -> TrialBalance:
    """Build the trial balance and collect entries with unknown accounts."""
    chart = ChartOfAccounts.coerce(accounts)

    totals: dict[str, list[Decimal]] = {account.id: [ZERO, ZERO] for account in chart}
    orphaned: list[LedgerEntry] = []

    for entry in entries:
        bucket = totals.get(entry.account_id)
        if bucket is None:
            orphaned.append(entry)
            continue
        bucket[0] += entry.debit
        bucket[1] += entry.credit

    rows = []
    for account in chart:
        debit_total, credit_total = totals[account.id]
        if debit_total == 0 and credit_total == 0:
            continue
        rows.append(TrialBalanceRow(
            account_id=account.id,
            account_name=account.name,
            debit_total=debit_total,
            credit_total=credit_total,
            net_debit=max(debit_total - credit_total, ZERO),
            net_credit=max(credit_total - debit_total, ZERO),
        ))

    return TrialBalance(rows=rows, orphaned_entries=orphaned)


def generate_trial_balance(entries: Iterable[LedgerEntry], accounts: AccountsLike) -> list[TrialBalanceRow]:
    """Trial balance rows only. Use aggregate_ledger to see orphans too."""
    return aggregate_ledger(entries, accounts).rows
