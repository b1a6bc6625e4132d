"""Sale form validation helpers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...models.sale import Sale
from .._forms import RecordForm


class SaleForm(RecordForm):
    """Represents sale input prior to validation."""

    FIELDS = ("date", "product_name", "category", "quantity", "amount", "salesperson_id")

    def __init__(self) -> None:
        super().__init__()
        self.date: Optional[datetime] = None
        self.product_name = ""
        self.category = ""
        self.quantity: Optional[int] = None
        self.amount: Optional[int] = None
        self.salesperson_id: Optional[int] = None

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()
        self.date = self._date("date")
        self.product_name = self._required_text("product_name", "製品名", 128)
        self.category = self._required_text("category", "カテゴリ", 64)
        self.quantity = self._integer("quantity", "数量", minimum=1, required=False) or 1
        self.amount = self._integer("amount", "金額", minimum=0)
        self.salesperson_id = self._integer(
            "salesperson_id", "販売者", minimum=1, required=False
        )
        return not self.errors

    def apply(self, sale: Sale | None = None) -> Sale:
        """Copy validated values onto ``sale`` (or a new one)."""

        target = sale or Sale(date=self.date, product_name=self.product_name, amount=self.amount)
        target.date = self.date
        target.product_name = self.product_name
        target.category = self.category
        target.quantity = self.quantity
        target.amount = self.amount
        target.salesperson_id = self.salesperson_id
        return target
