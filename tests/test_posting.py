"""Tests for the posting engine."""

import pytest
from datetime import date
from decimal import Decimal

from voucher_ledger.models import (
    Account,
    AccountGroup,
    AccountSubGroup,
    ChartOfAccounts,
    TaxRole,
    Voucher,
    VoucherLineItem,
    VoucherType,
)
from voucher_ledger.posting import (
    DEFAULT_POSTING_RULES,
    PostingEngine,
    post_voucher_to_ledger,
    rebuild_entries,
)


def _totals(entries):
    debit = sum((e.debit for e in entries), Decimal("0"))
    credit = sum((e.credit for e in entries), Decimal("0"))
    return debit, credit


class TestSalesPosting:
    """Sales: Dr party for the total, Cr line accounts and output tax."""

    def test_sales_entries(self, sales_voucher, chart):
        entries = post_voucher_to_ledger(sales_voucher, chart)

        assert [(e.account_id, e.debit, e.credit) for e in entries] == [
            ("acc_customer_a", Decimal("1180"), Decimal("0")),
            ("acc_sales", Decimal("0"), Decimal("1000")),
            ("acc_output_cgst", Decimal("0"), Decimal("90")),
            ("acc_output_sgst", Decimal("0"), Decimal("90")),
        ]

    def test_sales_entry_ids_and_descriptions(self, sales_voucher, chart):
        entries = post_voucher_to_ledger(sales_voucher, chart)

        assert [e.id for e in entries] == ["v1-1", "v1-2", "v1-3", "v1-4"]
        assert entries[0].description == "Sales Invoice #SAL-100"
        assert entries[1].description == "Sales: Consulting"
        assert entries[2].description == "Output CGST on Consulting"
        assert all(e.date == sales_voucher.date for e in entries)
        assert all(e.voucher_type == VoucherType.SALES for e in entries)

    def test_inter_state_sales_posts_igst(self, chart):
        voucher = Voucher(
            id="v5",
            date=date(2024, 4, 5),
            type=VoucherType.SALES,
            voucher_number="SAL-101",
            party_account_id="acc_customer_a",
            line_items=[
                VoucherLineItem(account_id="acc_sales", description="Laptop",
                                amount=Decimal("45000"), igst=Decimal("8100")),
            ],
            total_amount=Decimal("53100"),
        )
        entries = post_voucher_to_ledger(voucher, chart)

        assert [e.account_id for e in entries] == ["acc_customer_a", "acc_sales", "acc_output_igst"]
        assert entries[2].credit == Decimal("8100")

    def test_tax_order_per_line(self, chart):
        """Per line: principal, then IGST, CGST, SGST; blocks follow line order."""
        voucher = Voucher(
            id="v6",
            date=date(2024, 4, 6),
            type=VoucherType.SALES,
            voucher_number="SAL-102",
            party_account_id="acc_customer_a",
            line_items=[
                VoucherLineItem(account_id="acc_sales", description="A", amount=Decimal("100"),
                                igst=Decimal("1"), cgst=Decimal("2"), sgst=Decimal("3")),
                VoucherLineItem(account_id="acc_sales", description="B", amount=Decimal("10")),
            ],
            total_amount=Decimal("116"),
        )
        entries = post_voucher_to_ledger(voucher, chart)

        assert [e.description for e in entries] == [
            "Sales Invoice #SAL-102",
            "Sales: A",
            "Output IGST on A",
            "Output CGST on A",
            "Output SGST on A",
            "Sales: B",
        ]


class TestPurchasePosting:
    """Purchase: Cr party for the total, Dr line accounts and input tax."""

    def test_purchase_entries(self, purchase_voucher, chart):
        entries = post_voucher_to_ledger(purchase_voucher, chart)

        assert [(e.account_id, e.debit, e.credit) for e in entries] == [
            ("acc_vendor_x", Decimal("0"), Decimal("590")),
            ("acc_purchase", Decimal("500"), Decimal("0")),
            ("acc_input_cgst", Decimal("45"), Decimal("0")),
            ("acc_input_sgst", Decimal("45"), Decimal("0")),
        ]
        assert entries[0].description == "Purchase Invoice #PUR-100"
        assert entries[2].description == "Input CGST on Stationery"


class TestSettlementPosting:
    """Receipt and Payment post line amounts only; tax columns are ignored."""

    def test_receipt_entries(self, receipt_voucher, chart):
        entries = post_voucher_to_ledger(receipt_voucher, chart)

        assert [(e.account_id, e.debit, e.credit) for e in entries] == [
            ("acc_hdfc", Decimal("1180"), Decimal("0")),
            ("acc_customer_a", Decimal("0"), Decimal("1180")),
        ]
        assert entries[0].description == "Receipt from parties"
        assert entries[1].description == "Received from Tech Solutions"

    def test_payment_entries(self, payment_voucher, chart):
        entries = post_voucher_to_ledger(payment_voucher, chart)

        assert [(e.account_id, e.debit, e.credit) for e in entries] == [
            ("acc_cash", Decimal("0"), Decimal("590")),
            ("acc_vendor_x", Decimal("590"), Decimal("0")),
        ]
        assert entries[1].description == "Paid to Office Mart"

    def test_receipt_ignores_tax(self, receipt_voucher, chart):
        line = receipt_voucher.line_items[0].model_copy(update={"cgst": Decimal("10")})
        voucher = receipt_voucher.model_copy(
            update={"line_items": [line], "total_amount": Decimal("1190")}
        )
        entries = post_voucher_to_ledger(voucher, chart)

        assert len(entries) == 2
        assert _totals(entries) == (Decimal("1180"), Decimal("1180"))


class TestPostingGuarantees:
    """Balance, determinism and totality."""

    @pytest.mark.parametrize("fixture_name", [
        "sales_voucher", "purchase_voucher", "receipt_voucher", "payment_voucher",
    ])
    def test_consistent_voucher_balances(self, fixture_name, chart, request):
        voucher = request.getfixturevalue(fixture_name)
        debit, credit = _totals(post_voucher_to_ledger(voucher, chart))
        assert debit == credit

    def test_deterministic(self, sales_voucher, chart):
        assert post_voucher_to_ledger(sales_voucher, chart) == post_voucher_to_ledger(sales_voucher, chart)

    def test_does_not_mutate_voucher(self, sales_voucher, chart):
        before = sales_voucher.model_dump()
        post_voucher_to_ledger(sales_voucher, chart)
        assert sales_voucher.model_dump() == before

    def test_inconsistent_total_posts_unbalanced(self, sales_voucher, chart):
        """The cached total is used verbatim for the header."""
        voucher = sales_voucher.model_copy(update={"total_amount": Decimal("1200")})
        debit, credit = _totals(post_voucher_to_ledger(voucher, chart))
        assert debit - credit == Decimal("20")

    def test_zero_and_negative_taxes_not_posted(self, chart):
        voucher = Voucher(
            id="v7",
            date=date(2024, 4, 7),
            type=VoucherType.SALES,
            voucher_number="SAL-103",
            party_account_id="acc_customer_a",
            line_items=[
                VoucherLineItem(account_id="acc_sales", description="Free sample",
                                amount=Decimal("0"), cgst=Decimal("-1")),
            ],
            total_amount=Decimal("-1"),
        )
        entries = post_voucher_to_ledger(voucher, chart)

        assert [e.account_id for e in entries] == ["acc_customer_a", "acc_sales"]
        assert entries[1].debit == Decimal("0") and entries[1].credit == Decimal("0")

    def test_unknown_accounts_posted_verbatim(self, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={"party_account_id": "acc_ghost"})
        entries = post_voucher_to_ledger(voucher, chart)
        assert entries[0].account_id == "acc_ghost"

    def test_empty_voucher_posts_header_only(self, chart):
        voucher = Voucher(
            id="v8",
            date=date(2024, 4, 8),
            type=VoucherType.SALES,
            voucher_number="SAL-104",
            party_account_id="acc_customer_a",
        )
        entries = post_voucher_to_ledger(voucher, chart)
        assert len(entries) == 1
        assert entries[0].debit == Decimal("0")

    def test_sparse_chart_uses_conventional_tax_ids(self, sales_voucher):
        entries = post_voucher_to_ledger(sales_voucher, [])
        assert entries[2].account_id == "acc_output_cgst"

    def test_tax_account_found_by_role(self, sales_voucher, chart):
        custom = ChartOfAccounts([
            Account(id="cgst_liab", name="CGST Payable", group=AccountGroup.LIABILITY,
                    sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.OUTPUT_CGST),
        ])
        entries = post_voucher_to_ledger(sales_voucher, custom)
        assert entries[2].account_id == "cgst_liab"
        assert entries[3].account_id == "acc_output_sgst"


class TestUnmodelledTypes:
    """Types without a posting rule post nothing."""

    @pytest.mark.parametrize("voucher_type", [
        VoucherType.CONTRA,
        VoucherType.JOURNAL,
        VoucherType.DEBIT_NOTE,
        VoucherType.CREDIT_NOTE,
        VoucherType.EXPENSE,
    ])
    def test_no_entries(self, voucher_type, sales_voucher, chart):
        voucher = sales_voucher.model_copy(update={"type": voucher_type})
        assert post_voucher_to_ledger(voucher, chart) == []

    def test_every_type_has_a_rule(self):
        assert set(DEFAULT_POSTING_RULES) == set(VoucherType)

    def test_has_rule(self):
        engine = PostingEngine()
        assert engine.has_rule(VoucherType.SALES)
        assert not engine.has_rule(VoucherType.JOURNAL)


class TestPostingEngineRules:
    """Custom rules extend the table."""

    def test_custom_rule_for_contra(self, chart):
        def post_contra(voucher, chart, writer):
            writer.debit(voucher.party_account_id, voucher.line_amount_total, "Contra in")
            for line in voucher.line_items:
                writer.credit(line.account_id, line.amount, "Contra out")

        engine = PostingEngine(rules={VoucherType.CONTRA: post_contra})
        voucher = Voucher(
            id="c1",
            date=date(2024, 4, 9),
            type=VoucherType.CONTRA,
            voucher_number="CON-100",
            party_account_id="acc_hdfc",
            line_items=[VoucherLineItem(account_id="acc_cash", amount=Decimal("2000"))],
            total_amount=Decimal("2000"),
        )
        entries = engine.post(voucher, chart)

        assert [e.id for e in entries] == ["c1-1", "c1-2"]
        assert engine.has_rule(VoucherType.CONTRA)
        assert not PostingEngine().has_rule(VoucherType.CONTRA)

    def test_rules_are_read_only(self):
        engine = PostingEngine()
        with pytest.raises(TypeError):
            engine.rules[VoucherType.JOURNAL] = None


class TestRebuild:
    """Full recompute from the voucher history."""

    def test_rebuild_concatenates_in_order(self, sales_voucher, purchase_voucher, chart):
        entries = rebuild_entries([sales_voucher, purchase_voucher], chart)
        assert [e.voucher_id for e in entries] == ["v1"] * 4 + ["v2"] * 4

    def test_rebuild_is_idempotent(self, sales_voucher, purchase_voucher, chart):
        vouchers = [sales_voucher, purchase_voucher]
        assert rebuild_entries(vouchers, chart) == rebuild_entries(vouchers, chart)

    def test_entry_ids_unique(self, sales_voucher, purchase_voucher, receipt_voucher, chart):
        entries = rebuild_entries([sales_voucher, purchase_voucher, receipt_voucher], chart)
        ids = [e.id for e in entries]
        assert len(ids) == len(set(ids))

    def test_empty_history(self, chart):
        assert rebuild_entries([], chart) == []
