"""Voucher validation package."""

from voucher_ledger.validation.validator import VoucherValidator

__all__ = ["VoucherValidator"]
