"""Salesperson routes."""

from __future__ import annotations

from flask import jsonify, request
from werkzeug.exceptions import NotFound

from ...logging_config import get_logger
from ...models.salesperson import Salesperson
from .._helpers import get_context, request_payload
from . import bp
from .forms import SalespersonForm

logger = get_logger(__name__)


def salesperson_to_dict(person: Salesperson) -> dict:
    return {
        "id": person.id,
        "name": person.name,
        "email": person.email,
        "phone": person.phone,
        "is_active": person.is_active,
    }


@bp.get("/")
def list_salespersons():
    active_only = request.args.get("active", "").lower() in {"1", "true", "yes"}
    rows = get_context().salesperson_repo.list_all(active_only=active_only)
    return jsonify({"salespersons": [salesperson_to_dict(person) for person in rows]})


@bp.post("/")
def create_salesperson():
    form = SalespersonForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    person = get_context().salesperson_repo.create(form.apply())
    logger.info("Salesperson created", extra={"salesperson_id": person.id})
    return jsonify(salesperson_to_dict(person)), 201


@bp.put("/<int:salesperson_id>")
def update_salesperson(salesperson_id: int):
    ctx = get_context()
    existing = ctx.salesperson_repo.get_by_id(salesperson_id)
    if existing is None:
        raise NotFound(f"Salesperson {salesperson_id} was not found")
    form = SalespersonForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    return jsonify(salesperson_to_dict(ctx.salesperson_repo.update(form.apply(existing))))


@bp.delete("/<int:salesperson_id>")
def delete_salesperson(salesperson_id: int):
    if not get_context().salesperson_repo.delete(salesperson_id):
        raise NotFound(f"Salesperson {salesperson_id} was not found")
    logger.info("Salesperson deleted", extra={"salesperson_id": salesperson_id})
    return "", 204
