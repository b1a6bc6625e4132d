"""Product catalogue routes."""

from __future__ import annotations

from flask import jsonify
from werkzeug.exceptions import NotFound

from ...models.product import Product
from .._helpers import get_context, request_payload
from . import bp
from .forms import ProductForm


def product_to_dict(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "price": product.price,
        "stock": product.stock,
    }


@bp.get("/")
def list_products():
    rows = get_context().product_repo.list_all()
    return jsonify({"products": [product_to_dict(product) for product in rows]})


@bp.get("/<int:product_id>")
def get_product(product_id: int):
    product = get_context().product_repo.get_by_id(product_id)
    if product is None:
        raise NotFound(f"Product {product_id} was not found")
    return jsonify(product_to_dict(product))


@bp.post("/")
def create_product():
    form = ProductForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    product = get_context().product_repo.create(form.apply())
    return jsonify(product_to_dict(product)), 201


@bp.put("/<int:product_id>")
def update_product(product_id: int):
    ctx = get_context()
    existing = ctx.product_repo.get_by_id(product_id)
    if existing is None:
        raise NotFound(f"Product {product_id} was not found")
    form = ProductForm.from_mapping(request_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    return jsonify(product_to_dict(ctx.product_repo.update(form.apply(existing))))


@bp.delete("/<int:product_id>")
def delete_product(product_id: int):
    if not get_context().product_repo.delete(product_id):
        raise NotFound(f"Product {product_id} was not found")
    return "", 204
