"""Voucher posting package."""

from voucher_ledger.posting.engine import (
    DEFAULT_POSTING_RULES,
    EntryWriter,
    PostingEngine,
    PostingRule,
    post_nothing,
    post_voucher_to_ledger,
    rebuild_entries,
)

__all__ = [
    "DEFAULT_POSTING_RULES",
    "EntryWriter",
    "PostingEngine",
    "PostingRule",
    "post_nothing",
    "post_voucher_to_ledger",
    "rebuild_entries",
]
