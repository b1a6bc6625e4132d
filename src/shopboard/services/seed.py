"""Demo data for a fresh database."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from ..models import Product, Purchase, Sale, Salesperson, StockStatus

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

_PRODUCTS = (
    ("CBDオイル 10%", "CBD", 8800),
    ("CBDグミ", "CBD", 3300),
    ("CBNオイル 5%", "CBN", 9900),
    ("CBGバーム", "CBG", 4400),
    ("ヘンプティー", "その他", 1650),
)
_SALESPERSONS = ("佐藤", "鈴木", "高橋")


@dataclass(slots=True)
class SeedSummary:
    salespersons: int = 0
    products: int = 0
    sales: int = 0
    purchases: int = 0
    skipped: bool = False


def run_demo_seed(ctx: AppContext, *, days: int = 120, seed: int = 7) -> SeedSummary:
    """Populate ``days`` of sales and purchases ending today.

    Does nothing when sales already exist.
    """

    if ctx.sale_repo.recent(limit=1):
        logger.info("Demo seed skipped; sales already present")
        return SeedSummary(skipped=True)

    rng = random.Random(seed)
    summary = SeedSummary()

    people = [ctx.salesperson_repo.create(Salesperson(name=name)) for name in _SALESPERSONS]
    summary.salespersons = len(people)

    for name, category, price in _PRODUCTS:
        stock = rng.choice([status.value for status in StockStatus])
        ctx.product_repo.create(Product(name=name, category=category, price=price, stock=stock))
        summary.products += 1

    today = ctx.now().replace(hour=0, minute=0, second=0, microsecond=0)
    for offset in range(days):
        day = today - timedelta(days=offset)
        for _ in range(rng.randint(0, 4)):
            name, category, price = rng.choice(_PRODUCTS)
            quantity = rng.randint(1, 3)
            ctx.sale_repo.create(
                Sale(
                    date=day + timedelta(hours=rng.randint(10, 19)),
                    product_name=name,
                    category=category,
                    quantity=quantity,
                    amount=price * quantity,
                    salesperson_id=rng.choice(people).id,
                )
            )
            summary.sales += 1
        if day.weekday() == 0:
            name, _category, price = rng.choice(_PRODUCTS)
            ctx.purchase_repo.create(
                Purchase(date=day, product_name=name, amount=price * rng.randint(5, 15) // 2)
            )
            summary.purchases += 1

    logger.info(
        "Demo data seeded",
        extra={"sales": summary.sales, "purchases": summary.purchases},
    )
    return summary
