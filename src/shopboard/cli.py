"""Flask CLI commands for ShopBoard."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from flask import current_app

from .services import export_csv, import_csv
from .services import targets as targets_service
from .services.dashboard import DASHBOARD_TABS, OVERVIEW_TAB, load_dashboard
from .services.periods import parse_month

_KINDS = click.Choice(["sales", "purchases"])


def _context():
    return current_app.extensions["shopboard"]


def _month_option(value: str | None) -> datetime:
    if not value:
        now = _context().now()
        return datetime(now.year, now.month, 1)
    try:
        return parse_month(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--month") from exc


def _format_rate(value) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}%"


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("shopboard-import")
    @click.argument("kind", type=_KINDS)
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--month", help="Reference month (YYYY-MM); rows outside it are skipped.")
    def shopboard_import(kind: str, path: Path, month: str | None) -> None:
        """Import a sales or purchases CSV file for one month."""

        ctx = _context()
        reference = _month_option(month)
        try:
            if kind == "sales":
                result = import_csv.import_sales(
                    path, reference, repository=ctx.sale_repo, salespersons=ctx.salesperson_repo
                )
            else:
                result = import_csv.import_purchases(path, reference, repository=ctx.purchase_repo)
        except import_csv.CsvImportError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(result.message())
        for error in result.errors:
            click.echo(f"  {error}", err=True)

    @app.cli.command("shopboard-export")
    @click.argument("kind", type=_KINDS)
    @click.option("--month", help="Month to export (YYYY-MM).")
    @click.option(
        "--output-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory for the CSV file (defaults to <data dir>/exports).",
    )
    def shopboard_export(kind: str, month: str | None, output_dir: Path | None) -> None:
        """Export one month of sales or purchases as CSV."""

        ctx = _context()
        reference = _month_option(month)
        target_dir = output_dir or Path(ctx.config.DATA_DIR) / "exports"
        try:
            if kind == "sales":
                path = export_csv.export_sales_csv(
                    sales=ctx.sale_repo.list_for_month(reference.year, reference.month),
                    reference_month=reference,
                    output_dir=target_dir,
                )
            else:
                path = export_csv.export_purchases_csv(
                    purchases=ctx.purchase_repo.list_for_month(reference.year, reference.month),
                    reference_month=reference,
                    output_dir=target_dir,
                )
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Export written: {path}")

    @app.cli.command("shopboard-summary")
    @click.option("--month", help="Reference month (YYYY-MM).")
    @click.option("--tab", type=click.Choice(DASHBOARD_TABS), default=OVERVIEW_TAB, show_default=True)
    def shopboard_summary(month: str | None, tab: str) -> None:
        """Print the dashboard figures for a month and tab."""

        ctx = _context()
        data = load_dashboard(
            sales=ctx.sale_repo.list_all(),
            purchases=ctx.purchase_repo.list_all(),
            targets=ctx.sales_targets(),
            reference_month=_month_option(month),
            tab=tab,
            now=ctx.now(),
            week_start=ctx.config.WEEK_START,
        )
        if data.sales is None:
            click.echo("No sales recorded.")
        else:
            click.echo(f"{data.sales.period_label}: ¥{data.sales.total_amount:,}")
            click.echo(f"  件数: {data.sales.sales_count}")
            click.echo(f"  平均購入額: ¥{data.sales.average_purchase:,.0f}")
            click.echo(f"  目標: ¥{data.sales.target_amount:,.0f} ({_format_rate(data.sales.achievement_rate)})")
            click.echo(f"  {data.sales.comparison_label}: {_format_rate(data.sales.comparison_rate)}")
        if data.profit is not None:
            click.echo(f"利益: ¥{data.profit.profit:,} ({_format_rate(data.profit.profit_rate)})")
        click.echo(f"売れ筋製品: {data.top_product}")

    @app.cli.command("shopboard-targets")
    @click.option("--daily", type=float)
    @click.option("--weekly", type=float)
    @click.option("--monthly", type=float)
    @click.option("--yearly", type=float)
    def shopboard_targets(**values: float | None) -> None:
        """Show the sales targets, updating any period passed as an option."""

        ctx = _context()
        changes = {key: value for key, value in values.items() if value is not None}
        try:
            if changes:
                current = targets_service.update_targets(
                    ctx.settings_repo, defaults=ctx.default_targets, **changes
                )
            else:
                current = ctx.sales_targets()
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

        for period, amount in current.as_dict().items():
            click.echo(f"{period}: ¥{amount:,.0f}")

    @app.cli.command("shopboard-seed")
    @click.option("--days", type=click.IntRange(min=1), default=120, show_default=True)
    def shopboard_seed(days: int) -> None:
        """Seed demo salespersons, products, sales and purchases."""

        from .services.seed import run_demo_seed

        summary = run_demo_seed(_context(), days=days)
        if summary.skipped:
            click.echo("Sales already exist; nothing seeded.")
        else:
            click.echo(
                f"Seeded {summary.sales} sales and {summary.purchases} purchases "
                f"({summary.products} products, {summary.salespersons} salespersons)."
            )
