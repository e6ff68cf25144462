"""Profit & Loss derived from trial balance rows."""

from decimal import Decimal
from typing import Iterable

from voucher_ledger.models.account import AccountGroup, AccountsLike, ChartOfAccounts
from voucher_ledger.models.ledger import ProfitAndLoss, ProfitAndLossLine, TrialBalanceRow


def get_profit_and_loss(rows: Iterable[TrialBalanceRow], accounts: AccountsLike) -> ProfitAndLoss:
    """
    Net income against expense.

    income  = sum of net credits on Income accounts
    expense = sum of net debits on Expense accounts
    net_profit = income - expense (negative means a net loss)

    Rows whose account is not in the chart are ignored.
    """
    chart = ChartOfAccounts.coerce(accounts)
    income_lines: list[ProfitAndLossLine] = []
    expense_lines: list[ProfitAndLossLine] = []

    for row in rows:
        account = chart.get(row.account_id)
        if account is None:
            continue
        if account.group == AccountGroup.INCOME:
            income_lines.append(ProfitAndLossLine(
                account_id=row.account_id,
                account_name=row.account_name,
                amount=row.net_credit,
            ))
        elif account.group == AccountGroup.EXPENSE:
            expense_lines.append(ProfitAndLossLine(
                account_id=row.account_id,
                account_name=row.account_name,
                amount=row.net_debit,
            ))

    income = sum((line.amount for line in income_lines), Decimal("0"))
    expense = sum((line.amount for line in expense_lines), Decimal("0"))

    return ProfitAndLoss(
        income=income,
        expense=expense,
        net_profit=income - expense,
        income_lines=income_lines,
        expense_lines=expense_lines,
    )
