"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from flask import current_app, request
from werkzeug.exceptions import BadRequest

from ..context import AppContext
from ..services.periods import parse_month


def get_context() -> AppContext:
    return current_app.extensions["shopboard"]


def reference_month_arg() -> datetime:
    """Return the ``?month=YYYY-MM`` argument, defaulting to the current month."""

    raw = request.args.get("month", "").strip()
    if not raw:
        now = get_context().now()
        return datetime(now.year, now.month, 1)
    try:
        return parse_month(raw)
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc


def json_number(value: Any) -> Any:
    """JSON has no inf/nan; send them as null."""

    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def json_safe(data: dict[str, Any]) -> dict[str, Any]:
    return {
        key: json_safe(value) if isinstance(value, dict) else json_number(value)
        for key, value in data.items()
    }


def request_payload() -> dict[str, Any]:
    """Return JSON body or form fields as a plain dict."""

    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise BadRequest("Expected a JSON object.")
        return payload
    return request.form.to_dict(flat=True)


def uploaded_csv() -> bytes:
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise BadRequest("ファイルを選択してください。")
    return upload.read()
