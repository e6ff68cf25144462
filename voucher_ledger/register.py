"""
Voucher Register

DESIGN DECISION: The ledger reads vouchers through an abstract source.
This allows us to:
1. Keep posting and reporting independent of where vouchers live
2. Use the in-memory register for tests and previews
3. Swap in a persistent register without touching the engine

The register is append-only. Deleting or amending a posted voucher is
done with a new corrective voucher, never by editing history.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from voucher_ledger.diagnostics import LedgerLogger
from voucher_ledger.drafting import next_voucher_number
from voucher_ledger.errors import DuplicateVoucherNumberError
from voucher_ledger.models.events import LedgerEventBuilder
from voucher_ledger.models.voucher import Voucher, VoucherType


class VoucherSource(ABC):
    """
    Abstract interface for reading the voucher history.

    Any register implementation must return vouchers in creation order.
    """

    @abstractmethod
    def list_vouchers(self) -> list[Voucher]:
        """
        All vouchers in creation order.

        Returns:
            A new list; mutating it does not change the register
        """
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class InMemoryVoucherRegister(VoucherSource):
    """Append-only register held in memory."""

    def __init__(
        self,
        vouchers: Iterable[Voucher] = (),
        logger: Optional[LedgerLogger] = None,
    ):
        self._vouchers: list[Voucher] = []
        self._numbers: set[str] = set()
        self._logger = logger
        for voucher in vouchers:
            self.append(voucher)

    def append(self, voucher: Voucher) -> Voucher:
        """
        Register a voucher at the end of the history.

        Raises:
            DuplicateVoucherNumberError: If the number is already used
        """
        if voucher.voucher_number in self._numbers:
            raise DuplicateVoucherNumberError(voucher.voucher_number)

        # Event is built before the register changes
        event = LedgerEventBuilder.voucher_registered(
            voucher_id=voucher.id,
            voucher_number=voucher.voucher_number,
            amount=str(voucher.total_amount),
        )

        self._vouchers.append(voucher)
        self._numbers.add(voucher.voucher_number)

        if self._logger:
            self._logger.log(event)

        return voucher

    def list_vouchers(self) -> list[Voucher]:
        return list(self._vouchers)

    def count(self) -> int:
        return len(self._vouchers)

    def has_number(self, voucher_number: str) -> bool:
        return voucher_number in self._numbers

    def next_voucher_number(self, voucher_type: VoucherType) -> str:
        """
        Next voucher number for `voucher_type`.

        One running sequence is shared by every type, so after SAL-100
        the next receipt is REC-101.
        """
        return next_voucher_number(voucher_type, self.count())

    def __len__(self) -> int:
        return self.count()
