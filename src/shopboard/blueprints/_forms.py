"""Form binding and field parsing shared by the record forms."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar, Optional, TypeVar

F = TypeVar("F", bound="RecordForm")

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d")


class RecordForm:
    """Holds raw request values and accumulated validation errors."""

    FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self.errors: dict[str, list[str]] = {}
        self.raw_data: dict[str, str] = {}

    @classmethod
    def from_mapping(cls: type[F], data: Mapping[str, Any]) -> F:
        """Create a form populated from request data."""

        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        self.raw_data = {}
        for key in self.FIELDS:
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, str):
                value_str = value
            else:
                value_str = str(value)
            self.raw_data[key] = value_str.strip()

    def validate(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)

    def _required_text(self, field: str, label: str, max_length: int) -> str:
        value = self.raw_data.get(field, "")
        if not value:
            self._add_error(field, f"{label}を入力してください。")
        elif len(value) > max_length:
            self._add_error(field, f"{label}は{max_length}文字以内で入力してください。")
        return value

    def _date(self, field: str) -> Optional[datetime]:
        raw = self.raw_data.get(field, "")
        if not raw:
            self._add_error(field, "日付を入力してください。")
            return None
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(raw, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            self._add_error(field, "有効な日付を入力してください (YYYY-MM-DD)。")
            return None

    def _integer(self, field: str, label: str, *, minimum: int, required: bool = True) -> Optional[int]:
        raw = self.raw_data.get(field, "")
        if not raw:
            if required:
                self._add_error(field, f"{label}を入力してください。")
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            self._add_error(field, f"{label}は整数で入力してください。")
            return None
        if value < minimum:
            self._add_error(field, f"{label}は{minimum}以上で入力してください。")
            return None
        return value

    def _boolean(self, field: str, default: bool) -> bool:
        raw = self.raw_data.get(field, "").lower()
        if not raw:
            return default
        return raw in {"1", "true", "yes", "on"}
