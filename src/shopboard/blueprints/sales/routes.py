"""Sales routes."""

from __future__ import annotations

from flask import Response, jsonify, request
from werkzeug.exceptions import NotFound

from ...logging_config import get_logger
from ...models.sale import Sale
from ...services import export_csv, import_csv
from .._helpers import get_context, reference_month_arg, request_payload, uploaded_csv
from . import bp
from .forms import SaleForm

logger = get_logger(__name__)


def sale_to_dict(sale: Sale) -> dict:
    return {
        "id": sale.id,
        "date": sale.date.isoformat(),
        "product_name": sale.product_name,
        "category": sale.category,
        "quantity": sale.quantity,
        "amount": sale.amount,
        "salesperson_id": sale.salesperson_id,
        "salesperson_name": sale.salesperson_name,
    }


def _validated_form() -> SaleForm:
    ctx = get_context()
    form = SaleForm.from_mapping(request_payload())
    valid = form.validate()
    if valid and form.salesperson_id is not None:
        if ctx.salesperson_repo.get_by_id(form.salesperson_id) is None:
            form._add_error("salesperson_id", "販売者が見つかりません。")
    return form


@bp.get("/")
def list_sales():
    """List the selected month's sales, optionally narrowed by ``q``."""

    ctx = get_context()
    month = reference_month_arg()
    rows = ctx.sale_repo.search(month.year, month.month, request.args.get("q"))
    return jsonify(
        {
            "month": month.strftime("%Y-%m"),
            "count": len(rows),
            "total_amount": sum(sale.amount for sale in rows),
            "sales": [sale_to_dict(sale) for sale in rows],
        }
    )


@bp.get("/recent")
def recent_sales():
    limit = request.args.get("limit", default=5, type=int)
    rows = get_context().sale_repo.recent(limit=max(1, min(limit, 50)))
    return jsonify({"sales": [sale_to_dict(sale) for sale in rows]})


@bp.post("/")
def create_sale():
    """Persist a new sale from submitted data."""

    form = _validated_form()
    if form.errors:
        return jsonify({"errors": form.errors}), 400

    sale = get_context().sale_repo.create(form.apply())
    logger.info("Sale created", extra={"sale_id": sale.id, "amount": sale.amount})
    return jsonify(sale_to_dict(sale)), 201


@bp.put("/<int:sale_id>")
def update_sale(sale_id: int):
    ctx = get_context()
    existing = ctx.sale_repo.get_by_id(sale_id)
    if existing is None:
        raise NotFound(f"Sale {sale_id} was not found")

    form = _validated_form()
    if form.errors:
        return jsonify({"errors": form.errors}), 400

    sale = ctx.sale_repo.update(form.apply(existing))
    logger.info("Sale updated", extra={"sale_id": sale.id})
    return jsonify(sale_to_dict(sale))


@bp.delete("/<int:sale_id>")
def delete_sale(sale_id: int):
    if not get_context().sale_repo.delete(sale_id):
        raise NotFound(f"Sale {sale_id} was not found")
    logger.info("Sale deleted", extra={"sale_id": sale_id})
    return "", 204


@bp.post("/import")
def import_sales():
    """Import the selected month's rows from an uploaded CSV file."""

    ctx = get_context()
    month = reference_month_arg()
    result = import_csv.import_sales(
        uploaded_csv(),
        month,
        repository=ctx.sale_repo,
        salespersons=ctx.salesperson_repo,
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
def export_sales():
    """Download the selected month's sales as CSV."""

    ctx = get_context()
    month = reference_month_arg()
    rows = ctx.sale_repo.list_for_month(month.year, month.month)
    try:
        text = export_csv.sales_csv_text(rows, month)
    except ValueError as exc:
        raise NotFound(str(exc)) from exc

    filename = export_csv.export_filename("sales", month)
    return Response(
        export_csv.encode_csv(text),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
