"""
Ledger Snapshot

Ties the posting engine and the report derivers together.

DESIGN DECISION: A Ledger is an immutable snapshot.
- It is built by a full rebuild from the whole voucher history
- Adding a voucher produces a new snapshot; nothing is patched in place
- Every report is derived from the snapshot's entries on demand

The snapshot is the only layer that logs. Posting and report functions
stay pure so any number of callers can use them at once.
"""

from typing import Iterable, Optional, Union
from uuid import UUID

from voucher_ledger.diagnostics import LedgerLogger, create_correlation_id
from voucher_ledger.models.account import AccountsLike, ChartOfAccounts
from voucher_ledger.models.ledger import (
    ComplianceFlags,
    GSTSummary,
    LedgerBook,
    LedgerEntry,
    ProfitAndLoss,
    TrialBalance,
    TrialBalanceRow,
)
from voucher_ledger.models.voucher import Voucher
from voucher_ledger.posting import PostingEngine
from voucher_ledger.register import VoucherSource
from voucher_ledger.reports import (
    aggregate_ledger,
    compliance_for_voucher,
    get_gst_summary,
    get_ledger_book,
    get_profit_and_loss,
)


VoucherHistory = Union[VoucherSource, Iterable[Voucher]]


class Ledger:
    """
    Entries and reports for one voucher history and chart of accounts.

    Use Ledger.rebuild() to construct.
    """

    def __init__(
        self,
        vouchers: tuple[Voucher, ...],
        chart: ChartOfAccounts,
        entries: tuple[LedgerEntry, ...],
        aggregate: TrialBalance,
        engine: PostingEngine,
        logger: Optional[LedgerLogger] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._vouchers = vouchers
        self._chart = chart
        self._entries = entries
        self._aggregate = aggregate
        self._engine = engine
        self._logger = logger
        self._correlation_id = correlation_id

    @classmethod
    def rebuild(
        cls,
        vouchers: VoucherHistory,
        accounts: AccountsLike,
        engine: Optional[PostingEngine] = None,
        logger: Optional[LedgerLogger] = None,
    ) -> "Ledger":
        """
        Post the whole voucher history and aggregate it.

        Args:
            vouchers: Voucher history in creation order, or a register
            accounts: Chart of accounts (a list or ChartOfAccounts)
            engine: Posting engine; defaults to the standard rules
            logger: If given, the rebuild and any anomalies are logged

        Returns:
            A fresh snapshot. The previous snapshot is left untouched.
        """
        if isinstance(vouchers, VoucherSource):
            history = tuple(vouchers.list_vouchers())
        else:
            history = tuple(vouchers)
        chart = ChartOfAccounts.coerce(accounts)
        engine = engine or PostingEngine()
        correlation_id = create_correlation_id()

        entries: list[LedgerEntry] = []
        for voucher in history:
            posted = engine.post(voucher, chart)
            entries.extend(posted)
            if logger is None:
                continue
            if engine.has_rule(voucher.type):
                logger.log_voucher_posted(
                    voucher_id=voucher.id,
                    voucher_type=voucher.type.value,
                    entry_count=len(posted),
                    correlation_id=correlation_id,
                )
            else:
                logger.log_voucher_type_unmodelled(
                    voucher_id=voucher.id,
                    voucher_type=voucher.type.value,
                    correlation_id=correlation_id,
                )

        aggregate = aggregate_ledger(entries, chart)

        if logger:
            logger.log_ledger_rebuilt(
                voucher_count=len(history),
                entry_count=len(entries),
                account_count=len(chart),
                correlation_id=correlation_id,
            )
            if aggregate.has_orphans:
                logger.log_orphaned_entries(
                    account_ids=aggregate.orphaned_account_ids,
                    entry_ids=[e.id for e in aggregate.orphaned_entries],
                    correlation_id=correlation_id,
                )
            if not aggregate.is_balanced:
                logger.log_trial_balance_unbalanced(
                    total_debit=str(aggregate.total_net_debit),
                    total_credit=str(aggregate.total_net_credit),
                    correlation_id=correlation_id,
                )

        return cls(
            vouchers=history,
            chart=chart,
            entries=tuple(entries),
            aggregate=aggregate,
            engine=engine,
            logger=logger,
            correlation_id=correlation_id,
        )

    @property
    def vouchers(self) -> tuple[Voucher, ...]:
        return self._vouchers

    @property
    def chart(self) -> ChartOfAccounts:
        return self._chart

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return self._entries

    @property
    def correlation_id(self) -> Optional[UUID]:
        """Ties together the events logged by the rebuild that made this snapshot."""
        return self._correlation_id

    @property
    def orphaned_entries(self) -> list[LedgerEntry]:
        return list(self._aggregate.orphaned_entries)

    def aggregate(self) -> TrialBalance:
        """Trial balance rows together with orphaned entries."""
        return self._aggregate

    def trial_balance(self) -> list[TrialBalanceRow]:
        return list(self._aggregate.rows)

    def profit_and_loss(self) -> ProfitAndLoss:
        return get_profit_and_loss(self._aggregate.rows, self._chart)

    def gst_summary(self) -> GSTSummary:
        return get_gst_summary(self._entries, self._chart)

    def ledger_book(self, account_id: str) -> LedgerBook:
        return get_ledger_book(self._entries, account_id, self._chart)

    def compliance(self, voucher: Voucher) -> ComplianceFlags:
        return compliance_for_voucher(voucher, self._chart)

    def with_voucher(self, voucher: Voucher) -> "Ledger":
        """New snapshot with `voucher` appended to the history."""
        return Ledger.rebuild(
            self._vouchers + (voucher,),
            self._chart,
            engine=self._engine,
            logger=self._logger,
        )

    def with_chart(self, accounts: AccountsLike) -> "Ledger":
        """New snapshot of the same history against a different chart."""
        return Ledger.rebuild(
            self._vouchers,
            accounts,
            engine=self._engine,
            logger=self._logger,
        )
