"""
Two-Stage Voucher Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - STRUCTURAL VALIDATION:
- Party account present and known to the chart
- At least one line item
- Every line account known to the chart
- Cached total agrees with the lines

STAGE 2 - SEMANTIC VALIDATION:
- GST mix on a line (IGST alongside CGST/SGST)
- CGST/SGST asymmetry
- Negative (corrective) amounts
- Absurd totals and far-future dates
- Reused voucher numbers
- Voucher types that post nothing

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues, and the posting engine
never calls it. Posting stays total; validation is advice for whoever
creates vouchers.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from voucher_ledger.config import LedgerSettings, get_settings
from voucher_ledger.diagnostics import LedgerLogger
from voucher_ledger.models.account import AccountsLike, ChartOfAccounts
from voucher_ledger.models.voucher import (
    ValidationIssue,
    ValidationResult,
    Voucher,
)
from voucher_ledger.posting import DEFAULT_POSTING_RULES, post_nothing


ZERO = Decimal("0")


class VoucherValidator:
    """
    Validates vouchers through a two-stage pipeline.

    Stage 1: Structural validation against the chart of accounts
    Stage 2: Semantic validation (needs `existing` for numbering checks)
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
        logger: Optional[LedgerLogger] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Thresholds for the semantic checks. Defaults to
                      the process-wide settings.
            logger: If given, failed validations are logged.
        """
        self._settings = settings or get_settings()
        self._logger = logger

    def _validate_structure(
        self,
        voucher: Voucher,
        chart: ChartOfAccounts,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Structural validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not voucher.party_account_id:
            issues.append(ValidationIssue(
                field="party_account_id",
                issue_type="missing",
                message="Party account is required",
                severity="error",
                suggested_fix="Select the party (or cash/bank account) for this voucher",
            ))
        elif voucher.party_account_id not in chart:
            issues.append(ValidationIssue(
                field="party_account_id",
                issue_type="unknown_account",
                message=f"Party account '{voucher.party_account_id}' is not in the chart of accounts",
                severity="error",
                suggested_fix="Create the ledger first or pick an existing one",
            ))

        if not voucher.line_items:
            issues.append(ValidationIssue(
                field="line_items",
                issue_type="missing",
                message="Voucher has no line items",
                severity="error",
                suggested_fix="Add at least one item or ledger line",
            ))

        for index, line in enumerate(voucher.line_items):
            if line.account_id not in chart:
                issues.append(ValidationIssue(
                    field=f"line_items[{index}].account_id",
                    issue_type="unknown_account",
                    message=f"Line account '{line.account_id}' is not in the chart of accounts",
                    severity="error",
                    suggested_fix="Pick an existing ledger for this line",
                ))

        if not voucher.is_total_consistent:
            issues.append(ValidationIssue(
                field="total_amount",
                issue_type="total_mismatch",
                message=(
                    f"Total (₹{voucher.total_amount}) doesn't match "
                    f"lines plus tax (₹{voucher.computed_total})"
                ),
                severity="error",
                suggested_fix="Recompute the total from the line items",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def _validate_semantic(
        self,
        voucher: Voucher,
        existing: list[Voucher],
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        for index, line in enumerate(voucher.line_items):
            if line.igst > ZERO and (line.cgst > ZERO or line.sgst > ZERO):
                issues.append(ValidationIssue(
                    field=f"line_items[{index}].igst",
                    issue_type="mixed_tax",
                    message=f"Line '{line.description}' carries both IGST and CGST/SGST",
                    severity="warning",
                    suggested_fix="Use IGST for inter-state supply, CGST+SGST otherwise",
                ))

            if line.cgst != line.sgst:
                issues.append(ValidationIssue(
                    field=f"line_items[{index}].sgst",
                    issue_type="asymmetric_tax",
                    message=f"Line '{line.description}' has CGST ({line.cgst}) != SGST ({line.sgst})",
                    severity="warning",
                    suggested_fix="Intra-state GST splits evenly between CGST and SGST",
                ))

            if line.amount < ZERO:
                issues.append(ValidationIssue(
                    field=f"line_items[{index}].amount",
                    issue_type="negative_amount",
                    message=f"Line '{line.description}' has a negative amount (corrective entry)",
                    severity="info",
                ))

        max_amount = Decimal(str(self._settings.max_voucher_amount_inr))
        if voucher.total_amount > max_amount:
            issues.append(ValidationIssue(
                field="total_amount",
                issue_type="suspicious_value",
                message=f"Amount (₹{voucher.total_amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        max_future_date = date.today() + timedelta(days=self._settings.future_date_tolerance_days)
        if voucher.date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Voucher date ({voucher.date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        if any(
            other.voucher_number == voucher.voucher_number and other.id != voucher.id
            for other in existing
        ):
            issues.append(ValidationIssue(
                field="voucher_number",
                issue_type="duplicate_number",
                message=f"Voucher number {voucher.voucher_number} is already used",
                severity="error",
                suggested_fix="Use the next number in the series",
            ))

        if DEFAULT_POSTING_RULES.get(voucher.type, post_nothing) is post_nothing:
            issues.append(ValidationIssue(
                field="type",
                issue_type="unmodelled_type",
                message=f"{voucher.type.value} vouchers do not post to the ledger",
                severity="warning",
                suggested_fix="Its entries will not appear in any report",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        voucher: Voucher,
        accounts: AccountsLike,
        existing: Iterable[Voucher] = (),
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            voucher: The voucher to validate
            accounts: Chart of accounts the voucher will post against
            existing: Vouchers already registered (for numbering checks)

        Returns:
            ValidationResult with all issues found
        """
        chart = ChartOfAccounts.coerce(accounts)
        all_issues = []

        # Stage 1: Structural validation
        structure_valid, structure_issues = self._validate_structure(voucher, chart)
        all_issues.extend(structure_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if structure_valid:
            semantic_valid, semantic_issues = self._validate_semantic(voucher, list(existing))
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        result = ValidationResult(
            voucher_id=voucher.id,
            structure_valid=structure_valid,
            semantic_valid=semantic_valid,
            is_valid=structure_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

        if self._logger is not None and not result.is_valid:
            self._logger.log_validation_failed(
                voucher_id=voucher.id,
                stage="structure" if not structure_valid else "semantic",
                issues=[issue.model_dump() for issue in all_issues if issue.severity == "error"],
            )

        return result

    def get_summary(self, result: ValidationResult) -> str:
        """Human-readable summary of validation results."""
        if result.is_valid and not result.warnings:
            return "✅ All checks passed."

        lines = []

        if result.has_errors:
            lines.append("❌ This voucher cannot be saved yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
