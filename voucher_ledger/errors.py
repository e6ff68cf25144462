"""Exceptions raised at the ledger's collaborator boundaries.

The posting engine and report derivers never raise; these are only
raised while building masters or registering vouchers.
"""


class LedgerError(Exception):
    """Base class for voucher ledger errors."""
    pass


class DuplicateAccountError(LedgerError):
    """Two accounts in one chart share an id."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Duplicate account id in chart of accounts: {account_id}")


class DuplicateVoucherNumberError(LedgerError):
    """A voucher number is already used in the register."""

    def __init__(self, voucher_number: str):
        self.voucher_number = voucher_number
        super().__init__(f"Voucher number already exists: {voucher_number}")
