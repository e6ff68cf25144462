"""
Ledger Logger

Every rebuild of the ledger, and every condition a caller should know
about (orphaned entries, unmodelled voucher types, an unbalanced trial
balance), is emitted as a structured log event.

The logger:
- Is synchronous; the engine has no suspension points
- Only observes: nothing it logs feeds back into a computation
- Supports correlation IDs to tie together events from one rebuild
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from voucher_ledger.config import LedgerSettings, get_settings
from voucher_ledger.models.events import LedgerEvent, LedgerEventBuilder, LedgerSeverity


def configure_logging(settings: Optional[LedgerSettings] = None) -> None:
    """
    Configure structlog and the level of the `voucher_ledger` stdlib logger.

    Handlers are left to the host application (e.g. logging.basicConfig);
    the root logger is never touched. debug_mode forces DEBUG.
    """
    settings = settings or get_settings()

    level = "DEBUG" if settings.debug_mode else settings.log_level
    logging.getLogger("voucher_ledger").setLevel(level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class LedgerLogger:
    """
    Central diagnostic logging service.

    Writes events to the structured local log only.
    """

    def __init__(self, name: str = "voucher_ledger", settings: Optional[LedgerSettings] = None):
        settings = settings or get_settings()
        self._logger = structlog.get_logger(name).bind(environment=settings.app_environment)

    def log(self, event: LedgerEvent) -> None:
        """Log a ledger event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == LedgerSeverity.ERROR:
            self._logger.error("ledger_event", **log_dict)
        elif event.severity == LedgerSeverity.WARNING:
            self._logger.warning("ledger_event", **log_dict)
        elif event.severity == LedgerSeverity.DEBUG:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

    def log_voucher_posted(
        self,
        voucher_id: str,
        voucher_type: str,
        entry_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(LedgerEventBuilder.voucher_posted(
            voucher_id=voucher_id,
            voucher_type=voucher_type,
            entry_count=entry_count,
            correlation_id=correlation_id,
        ))

    def log_voucher_type_unmodelled(
        self,
        voucher_id: str,
        voucher_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(LedgerEventBuilder.voucher_type_unmodelled(
            voucher_id=voucher_id,
            voucher_type=voucher_type,
            correlation_id=correlation_id,
        ))

    def log_ledger_rebuilt(
        self,
        voucher_count: int,
        entry_count: int,
        account_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(LedgerEventBuilder.ledger_rebuilt(
            voucher_count=voucher_count,
            entry_count=entry_count,
            account_count=account_count,
            correlation_id=correlation_id,
        ))

    def log_orphaned_entries(
        self,
        account_ids: list[str],
        entry_ids: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(LedgerEventBuilder.orphaned_entries_detected(
            account_ids=account_ids,
            entry_ids=entry_ids,
            correlation_id=correlation_id,
        ))

    def log_trial_balance_unbalanced(
        self,
        total_debit: str,
        total_credit: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(LedgerEventBuilder.trial_balance_unbalanced(
            total_debit=total_debit,
            total_credit=total_credit,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        voucher_id: str,
        stage: str,
        issues: list[dict],
    ) -> None:
        self.log(LedgerEventBuilder.validation_failed(
            voucher_id=voucher_id,
            stage=stage,
            issues=issues,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per ledger rebuild; pass it to every event logged during it.
    """
    return uuid4()
