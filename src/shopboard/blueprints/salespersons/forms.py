"""Salesperson form validation helpers."""

from __future__ import annotations

from typing import Optional

from ...models.salesperson import Salesperson
from .._forms import RecordForm


class SalespersonForm(RecordForm):
    FIELDS = ("name", "email", "phone", "is_active")

    def __init__(self) -> None:
        super().__init__()
        self.name = ""
        self.email: Optional[str] = None
        self.phone: Optional[str] = None
        self.is_active = True

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._required_text("name", "名前", 64)
        self.email = self.raw_data.get("email") or None
        if self.email and "@" not in self.email:
            self._add_error("email", "有効なメールアドレスを入力してください。")
        self.phone = self.raw_data.get("phone") or None
        self.is_active = self._boolean("is_active", default=True)
        return not self.errors

    def apply(self, salesperson: Salesperson | None = None) -> Salesperson:
        target = salesperson or Salesperson(name=self.name)
        target.name = self.name
        target.email = self.email
        target.phone = self.phone
        target.is_active = self.is_active
        return target
