"""Purchase form validation helpers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...models.purchase import Purchase
from .._forms import RecordForm


class PurchaseForm(RecordForm):
    """Represents purchase input prior to validation."""

    FIELDS = ("date", "product_name", "amount")

    def __init__(self) -> None:
        super().__init__()
        self.date: Optional[datetime] = None
        self.product_name = ""
        self.amount: Optional[int] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.date = self._date("date")
        self.product_name = self._required_text("product_name", "製品名", 128)
        self.amount = self._integer("amount", "金額", minimum=0)
        return not self.errors

    def apply(self, purchase: Purchase | None = None) -> Purchase:
        target = purchase or Purchase(date=self.date, product_name=self.product_name, amount=self.amount)
        target.date = self.date
        target.product_name = self.product_name
        target.amount = self.amount
        return target
