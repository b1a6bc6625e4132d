"""Product form validation helpers."""

from __future__ import annotations

from typing import Optional

from ...models.product import Product, StockStatus
from .._forms import RecordForm

_STOCK_VALUES = {status.value for status in StockStatus}


class ProductForm(RecordForm):
    FIELDS = ("name", "category", "price", "stock")

    def __init__(self) -> None:
        super().__init__()
        self.name = ""
        self.category = ""
        self.price: Optional[int] = None
        self.stock = StockStatus.IN_STOCK.value

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._required_text("name", "製品名", 128)
        self.category = self._required_text("category", "カテゴリ", 64)
        self.price = self._integer("price", "価格", minimum=0)
        stock = self.raw_data.get("stock", "") or StockStatus.IN_STOCK.value
        if stock not in _STOCK_VALUES:
            self._add_error("stock", f"在庫状況は {', '.join(sorted(_STOCK_VALUES))} のいずれかです。")
        self.stock = stock
        return not self.errors

    def apply(self, product: Product | None = None) -> Product:
        target = product or Product(name=self.name, category=self.category, price=self.price)
        target.name = self.name
        target.category = self.category
        target.price = self.price
        target.stock = self.stock
        return target
