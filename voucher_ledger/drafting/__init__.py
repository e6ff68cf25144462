"""Voucher drafting helpers."""

from voucher_ledger.drafting.builder import (
    PREVIEW_VOUCHER_ID,
    SettlementKind,
    VoucherDraft,
    build_line,
    compute_line_taxes,
    default_narration,
    line_from_item,
    next_voucher_number,
    settlement_draft,
    voucher_total,
)

__all__ = [
    "PREVIEW_VOUCHER_ID",
    "SettlementKind",
    "VoucherDraft",
    "build_line",
    "compute_line_taxes",
    "default_narration",
    "line_from_item",
    "next_voucher_number",
    "settlement_draft",
    "voucher_total",
]
