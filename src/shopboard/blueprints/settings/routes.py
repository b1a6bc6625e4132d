"""Sales target settings routes."""

from __future__ import annotations

from flask import jsonify
from werkzeug.exceptions import BadRequest

from ...services import targets as targets_service
from .._helpers import get_context, request_payload
from . import bp


@bp.get("/targets")
def get_targets():
    return jsonify(get_context().sales_targets().as_dict())


@bp.put("/targets")
def update_targets():
    """Merge a partial ``{daily, weekly, monthly, yearly}`` update."""

    ctx = get_context()
    changes = request_payload()
    if not changes:
        raise BadRequest("No target values supplied.")
    try:
        updated = targets_service.update_targets(
            ctx.settings_repo, defaults=ctx.default_targets, **changes
        )
    except KeyError as exc:
        raise BadRequest(f"Unknown target period: {exc.args[0]}") from exc
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc
    return jsonify(updated.as_dict())
