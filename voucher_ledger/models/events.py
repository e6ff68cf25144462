"""
Diagnostic Event Models

Significant ledger operations produce a structured event: a rebuild,
a posted voucher, an entry whose account is missing from the chart.
Events are emitted to the structured log only; the ledger keeps no
event history of its own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_MAX_LENGTH = 500


class LedgerEventType(str, Enum):
    """Types of events the ledger reports."""
    # Posting
    VOUCHER_POSTED = "voucher_posted"
    VOUCHER_TYPE_UNMODELLED = "voucher_type_unmodelled"

    # Aggregation
    LEDGER_REBUILT = "ledger_rebuilt"
    ORPHANED_ENTRIES_DETECTED = "orphaned_entries_detected"
    TRIAL_BALANCE_UNBALANCED = "trial_balance_unbalanced"

    # Collaborator boundary
    VOUCHER_REGISTERED = "voucher_registered"
    VALIDATION_FAILED = "validation_failed"


class LedgerSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single diagnostic event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: LedgerEventType
    severity: LedgerSeverity = LedgerSeverity.INFO

    # What the event is about, e.g. ("voucher", "a1b2c3")
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    # Ties together events from one rebuild
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=DESCRIPTION_MAX_LENGTH)
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        # Long voucher numbers or ids must not make logging fail
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[:DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.voucher_posted(voucher_id, "Sales", 4, correlation_id)
    """

    @staticmethod
    def voucher_posted(
        voucher_id: str,
        voucher_type: str,
        entry_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.VOUCHER_POSTED,
            severity=LedgerSeverity.DEBUG,
            entity_type="voucher",
            entity_id=voucher_id,
            correlation_id=correlation_id,
            description=f"{voucher_type} voucher posted as {entry_count} entries",
            details={
                "voucher_type": voucher_type,
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def voucher_type_unmodelled(
        voucher_id: str,
        voucher_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.VOUCHER_TYPE_UNMODELLED,
            severity=LedgerSeverity.WARNING,
            entity_type="voucher",
            entity_id=voucher_id,
            correlation_id=correlation_id,
            description=f"No posting rule for {voucher_type}; voucher posted no entries",
            details={"voucher_type": voucher_type},
        )

    @staticmethod
    def ledger_rebuilt(
        voucher_count: int,
        entry_count: int,
        account_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_REBUILT,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Ledger rebuilt from {voucher_count} vouchers ({entry_count} entries)",
            details={
                "voucher_count": voucher_count,
                "entry_count": entry_count,
                "account_count": account_count,
            },
        )

    @staticmethod
    def orphaned_entries_detected(
        account_ids: list[str],
        entry_ids: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ORPHANED_ENTRIES_DETECTED,
            severity=LedgerSeverity.WARNING,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=(
                f"{len(entry_ids)} entries reference accounts missing from the chart"
            ),
            details={
                "account_ids": account_ids,
                "entry_ids": entry_ids,
            },
        )

    @staticmethod
    def trial_balance_unbalanced(
        total_debit: str,
        total_credit: str,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRIAL_BALANCE_UNBALANCED,
            severity=LedgerSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Trial balance debits and credits differ",
            details={
                "total_net_debit": total_debit,
                "total_net_credit": total_credit,
            },
        )

    @staticmethod
    def voucher_registered(
        voucher_id: str,
        voucher_number: str,
        amount: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.VOUCHER_REGISTERED,
            entity_type="voucher",
            entity_id=voucher_id,
            description=f"Voucher registered: {voucher_number} - ₹{amount}",
            details={
                "voucher_number": voucher_number,
                "amount": amount,
            },
        )

    @staticmethod
    def validation_failed(
        voucher_id: str,
        stage: str,
        issues: list[dict],
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.VALIDATION_FAILED,
            severity=LedgerSeverity.WARNING,
            entity_type="voucher",
            entity_id=voucher_id,
            description=f"{stage.capitalize()} validation failed with {len(issues)} issues",
            details={
                "stage": stage,
                "issues": issues,
            },
        )
