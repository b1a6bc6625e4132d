"""Purchase routes."""

from __future__ import annotations

from flask import Response, jsonify
from werkzeug.exceptions import NotFound

from ...logging_config import get_logger
from ...models.purchase import Purchase
from ...services import export_csv, import_csv
from .._helpers import get_context, reference_month_arg, request_payload, uploaded_csv
from . import bp
from .forms import PurchaseForm

logger = get_logger(__name__)


def purchase_to_dict(purchase: Purchase) -> dict:
    return {
        "id": purchase.id,
        "date": purchase.date.isoformat(),
        "product_name": purchase.product_name,
        "amount": purchase.amount,
    }


@bp.get("/")
def list_purchases():
    ctx = get_context()
    month = reference_month_arg()
    rows = ctx.purchase_repo.list_for_month(month.year, month.month)
    return jsonify(
        {
            "month": month.strftime("%Y-%m"),
            "count": len(rows),
            "total_amount": sum(purchase.amount for purchase in rows),
            "purchases": [purchase_to_dict(purchase) for purchase in rows],
        }
    )


@bp.post("/")
def create_purchase():
    form = PurchaseForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400

    purchase = get_context().purchase_repo.create(form.apply())
    logger.info("Purchase created", extra={"purchase_id": purchase.id, "amount": purchase.amount})
    return jsonify(purchase_to_dict(purchase)), 201


@bp.put("/<int:purchase_id>")
def update_purchase(purchase_id: int):
    ctx = get_context()
    existing = ctx.purchase_repo.get_by_id(purchase_id)
    if existing is None:
        raise NotFound(f"Purchase {purchase_id} was not found")

    form = PurchaseForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400

    purchase = ctx.purchase_repo.update(form.apply(existing))
    return jsonify(purchase_to_dict(purchase))


@bp.delete("/<int:purchase_id>")
def delete_purchase(purchase_id: int):
    if not get_context().purchase_repo.delete(purchase_id):
        raise NotFound(f"Purchase {purchase_id} was not found")
    logger.info("Purchase deleted", extra={"purchase_id": purchase_id})
    return "", 204


@bp.post("/import")
def import_purchases():
    """Import the selected month's rows from an uploaded CSV file."""

    month = reference_month_arg()
    result = import_csv.import_purchases(
        uploaded_csv(), month, repository=get_context().purchase_repo
    )
    return jsonify(
        {
            "added": result.added,
            "skipped": result.skipped,
            "errors": result.errors,
            "message": result.message(),
        }
    )


@bp.get("/export")
def export_purchases():
    ctx = get_context()
    month = reference_month_arg()
    rows = ctx.purchase_repo.list_for_month(month.year, month.month)
    try:
        text = export_csv.purchases_csv_text(rows, month)
    except ValueError as exc:
        raise NotFound(str(exc)) from exc

    filename = export_csv.export_filename("purchases", month)
    return Response(
        export_csv.encode_csv(text),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
