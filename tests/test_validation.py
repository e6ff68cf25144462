"""Tests for the two-stage voucher validator."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from voucher_ledger.config import LedgerSettings
from voucher_ledger.models import LedgerEventType, VoucherLineItem, VoucherType
from voucher_ledger.validation import VoucherValidator


@pytest.fixture
def validator():
    return VoucherValidator(settings=LedgerSettings(_env_file=None))


def _issue_types(result):
    return [issue.issue_type for issue in result.issues]


class TestStructuralValidation:
    """Stage 1: party, lines, accounts, cached total."""

    def test_valid_voucher(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher, chart)

        assert result.is_valid
        assert result.structure_valid and result.semantic_valid
        assert result.issues == []

    def test_missing_party(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"party_account_id": ""}), chart)

        assert not result.structure_valid
        assert _issue_types(result) == ["missing"]
        assert result.issues[0].field == "party_account_id"

    def test_unknown_party(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"party_account_id": "acc_ghost"}), chart)
        assert _issue_types(result) == ["unknown_account"]

    def test_no_lines(self, validator, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={"line_items": [], "total_amount": Decimal("0")})
        result = validator.validate(voucher, chart)

        assert not result.is_valid
        assert result.issues[0].field == "line_items"

    def test_unknown_line_account(self, validator, sales_voucher, chart):
        line = sales_voucher.line_items[0].model_copy(update={"account_id": "acc_nowhere"})
        result = validator.validate(sales_voucher.model_copy(update={"line_items": [line]}), chart)

        assert result.issues[0].field == "line_items[0].account_id"

    def test_total_mismatch(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"total_amount": Decimal("1000")}), chart)

        assert _issue_types(result) == ["total_mismatch"]
        assert result.error_count == 1

    def test_semantic_skipped_when_structure_fails(self, validator, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={
            "party_account_id": "",
            "type": VoucherType.JOURNAL,
        })
        result = validator.validate(voucher, chart)

        assert not result.semantic_valid
        assert "unmodelled_type" not in _issue_types(result)


class TestSemanticValidation:
    """Stage 2: tax mix, amounts, dates, numbering, unmodelled types."""

    def _with_line(self, voucher, **updates):
        line = voucher.line_items[0].model_copy(update=updates)
        new_line = VoucherLineItem(**line.model_dump())
        return voucher.model_copy(update={
            "line_items": [new_line],
            "total_amount": new_line.gross_amount,
        })

    def test_mixed_igst_and_cgst(self, validator, sales_voucher, chart):
        result = validator.validate(self._with_line(sales_voucher, igst=Decimal("10")), chart)

        assert result.is_valid
        assert "mixed_tax" in _issue_types(result)
        assert len(result.warnings) == 1

    def test_asymmetric_cgst_sgst(self, validator, sales_voucher, chart):
        result = validator.validate(self._with_line(sales_voucher, sgst=Decimal("80")), chart)
        assert _issue_types(result) == ["asymmetric_tax"]

    def test_negative_amount_is_info(self, validator, sales_voucher, chart):
        voucher = self._with_line(sales_voucher, amount=Decimal("-100"), cgst=Decimal("0"), sgst=Decimal("0"))
        result = validator.validate(voucher, chart)

        assert result.is_valid
        assert result.issues[0].severity == "info"
        assert result.warnings == []

    def test_high_amount(self, sales_voucher, chart):
        validator = VoucherValidator(settings=LedgerSettings(_env_file=None, max_voucher_amount_inr=1000))
        result = validator.validate(sales_voucher, chart)
        assert "suspicious_value" in _issue_types(result)

    def test_future_date(self, validator, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={"date": date.today() + timedelta(days=30)})
        result = validator.validate(voucher, chart)
        assert "future_date" in _issue_types(result)

    def test_near_future_date_tolerated(self, validator, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={"date": date.today() + timedelta(days=3)})
        assert validator.validate(voucher, chart).issues == []

    def test_duplicate_number(self, validator, sales_voucher, chart):
        earlier = sales_voucher.model_copy(update={"id": "older"})
        result = validator.validate(sales_voucher, chart, existing=[earlier])

        assert not result.is_valid
        assert not result.semantic_valid
        assert "duplicate_number" in _issue_types(result)

    def test_same_voucher_is_not_a_duplicate(self, validator, sales_voucher, chart):
        assert validator.validate(sales_voucher, chart, existing=[sales_voucher]).is_valid

    def test_unmodelled_type_warns(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"type": VoucherType.CONTRA}), chart)

        assert result.is_valid
        assert _issue_types(result) == ["unmodelled_type"]


class TestValidatorOutput:
    """Summary text and logging."""

    def test_summary_all_clear(self, validator, sales_voucher, chart):
        assert validator.get_summary(validator.validate(sales_voucher, chart)) == "✅ All checks passed."

    def test_summary_lists_errors(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"party_account_id": ""}), chart)
        summary = validator.get_summary(result)

        assert summary.startswith("❌")
        assert "Party account is required" in summary

    def test_summary_lists_warnings(self, validator, sales_voucher, chart):
        result = validator.validate(sales_voucher.model_copy(update={"type": VoucherType.JOURNAL}), chart)
        assert "⚠️" in validator.get_summary(result)

    def test_failure_logged(self, recording_logger, sales_voucher, chart):
        validator = VoucherValidator(settings=LedgerSettings(_env_file=None), logger=recording_logger)
        validator.validate(sales_voucher.model_copy(update={"total_amount": Decimal("1")}), chart)

        event = recording_logger.events[0]
        assert event.event_type == LedgerEventType.VALIDATION_FAILED
        assert event.details["stage"] == "structure"

    def test_success_not_logged(self, recording_logger, sales_voucher, chart):
        validator = VoucherValidator(settings=LedgerSettings(_env_file=None), logger=recording_logger)
        validator.validate(sales_voucher, chart)
        assert recording_logger.events == []
