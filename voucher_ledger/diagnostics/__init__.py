"""Diagnostic logging package."""

from voucher_ledger.diagnostics.logger import LedgerLogger, configure_logging, create_correlation_id

__all__ = ["LedgerLogger", "configure_logging", "create_correlation_id"]
