"""Default chart of accounts and item catalog."""

from voucher_ledger.masters.defaults import (
    DEFAULT_ACCOUNTS,
    DEFAULT_ITEMS,
    DEFAULT_PURCHASE_ACCOUNT_ID,
    DEFAULT_SALES_ACCOUNT_ID,
    default_chart,
    find_item,
)

__all__ = [
    "DEFAULT_ACCOUNTS",
    "DEFAULT_ITEMS",
    "DEFAULT_PURCHASE_ACCOUNT_ID",
    "DEFAULT_SALES_ACCOUNT_ID",
    "default_chart",
    "find_item",
]
