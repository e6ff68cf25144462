"""
Default masters: a small Indian trading-company chart of accounts and
item catalog. The six GST accounts are tagged with their tax roles.
"""

from decimal import Decimal
from typing import Optional

from voucher_ledger.models.account import (
    Account,
    AccountGroup,
    AccountSubGroup,
    ChartOfAccounts,
    Item,
    TaxRole,
)


DEFAULT_ACCOUNTS: tuple[Account, ...] = (
    Account(id="acc_cash", name="Cash in Hand", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.CASH_BANK, opening_balance=Decimal("50000")),
    Account(id="acc_hdfc", name="HDFC Bank", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.CASH_BANK, opening_balance=Decimal("150000")),
    Account(id="acc_sales", name="Sales Account", group=AccountGroup.INCOME,
            sub_group=AccountSubGroup.SALES_ACCOUNT),
    Account(id="acc_purchase", name="Purchase Account", group=AccountGroup.EXPENSE,
            sub_group=AccountSubGroup.PURCHASE_ACCOUNT),
    Account(id="acc_customer_a", name="Tech Solutions Ltd (Customer)", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.SUNDRY_DEBTOR),
    Account(id="acc_vendor_x", name="Office Mart (Supplier)", group=AccountGroup.LIABILITY,
            sub_group=AccountSubGroup.SUNDRY_CREDITOR),
    Account(id="acc_input_cgst", name="Input CGST", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.INPUT_CGST),
    Account(id="acc_input_sgst", name="Input SGST", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.INPUT_SGST),
    Account(id="acc_input_igst", name="Input IGST", group=AccountGroup.ASSET,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.INPUT_IGST),
    Account(id="acc_output_cgst", name="Output CGST", group=AccountGroup.LIABILITY,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.OUTPUT_CGST),
    Account(id="acc_output_sgst", name="Output SGST", group=AccountGroup.LIABILITY,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.OUTPUT_SGST),
    Account(id="acc_output_igst", name="Output IGST", group=AccountGroup.LIABILITY,
            sub_group=AccountSubGroup.DUTIES_TAXES, tax_role=TaxRole.OUTPUT_IGST),
    Account(id="acc_electricity", name="Electricity Expense", group=AccountGroup.EXPENSE,
            sub_group=AccountSubGroup.INDIRECT_EXPENSE),
)


DEFAULT_ITEMS: tuple[Item, ...] = (
    Item(id="item_laptop", name="Dell Laptop", hsn_code="8471",
         price=Decimal("45000"), gst_rate=Decimal("18"), unit="Nos"),
    Item(id="item_mouse", name="Logitech Mouse", hsn_code="8471",
         price=Decimal("500"), gst_rate=Decimal("18"), unit="Nos"),
    Item(id="item_service", name="Consulting Service", hsn_code="9983",
         price=Decimal("5000"), gst_rate=Decimal("18"), unit="Hrs"),
    Item(id="item_paper", name="A4 Paper Rim", hsn_code="4802",
         price=Decimal("200"), gst_rate=Decimal("12"), unit="Pkt"),
)


# Default line accounts when an item is picked on a Sales/Purchase voucher
DEFAULT_SALES_ACCOUNT_ID = "acc_sales"
DEFAULT_PURCHASE_ACCOUNT_ID = "acc_purchase"


def default_chart() -> ChartOfAccounts:
    return ChartOfAccounts(DEFAULT_ACCOUNTS)


def find_item(item_id: str) -> Optional[Item]:
    for item in DEFAULT_ITEMS:
        if item.id == item_id:
            return item
    return None
