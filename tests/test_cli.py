"""Tests for the Flask CLI commands."""

from __future__ import annotations

from datetime import datetime

from shopboard.models import Sale


def test_targets_command_shows_and_updates(runner, ctx):
    shown = runner.invoke(args=["shopboard-targets"])
    assert shown.exit_code == 0
    assert "monthly: ¥700,000" in shown.output

    updated = runner.invoke(args=["shopboard-targets", "--daily", "45000"])
    assert updated.exit_code == 0
    assert ctx.sales_targets().daily == 45000


def test_targets_command_rejects_negative(runner):
    result = runner.invoke(args=["shopboard-targets", "--weekly", "-1"])

    assert result.exit_code != 0


def test_import_and_export_commands(runner, ctx, tmp_path):
    source = tmp_path / "in.csv"
    source.write_bytes("日付,製品名,金額\n2024/03/03,CBDグミ,3300\n".encode("utf-8-sig"))

    imported = runner.invoke(args=["shopboard-import", "sales", str(source), "--month", "2024-03"])
    assert imported.exit_code == 0, imported.output
    assert "1件のデータをインポートしました。" in imported.output

    out_dir = tmp_path / "out"
    exported = runner.invoke(
        args=["shopboard-export", "sales", "--month", "2024-03", "--output-dir", str(out_dir)]
    )
    assert exported.exit_code == 0, exported.output
    assert (out_dir / "sales_2024_03.csv").exists()


def test_export_command_fails_for_empty_month(runner, tmp_path):
    result = runner.invoke(
        args=["shopboard-export", "purchases", "--month", "2024-01", "--output-dir", str(tmp_path)]
    )

    assert result.exit_code != 0
    assert "エクスポートするデータがありません" in result.output


def test_import_command_reports_bad_file(runner, tmp_path):
    source = tmp_path / "bad.csv"
    source.write_text("foo,bar\n1,2\n", encoding="utf-8")

    result = runner.invoke(args=["shopboard-import", "purchases", str(source), "--month", "2024-03"])

    assert result.exit_code != 0
    assert "必要なヘッダーがありません" in result.output


def test_summary_command(runner, ctx):
    ctx.sale_repo.create(
        Sale(date=datetime(2024, 3, 15, 10), product_name="CBDオイル", category="CBD", amount=8800)
    )

    result = runner.invoke(args=["shopboard-summary", "--tab", "daily"])

    assert result.exit_code == 0, result.output
    assert "日次売上: ¥8,800" in result.output
    assert "売れ筋製品: CBDオイル" in result.output


def test_summary_command_without_sales(runner):
    result = runner.invoke(args=["shopboard-summary"])

    assert result.exit_code == 0
    assert "No sales recorded." in result.output


def test_seed_command_is_idempotent(runner, ctx):
    first = runner.invoke(args=["shopboard-seed", "--days", "30"])
    assert first.exit_code == 0, first.output
    assert len(ctx.salesperson_repo.list_all()) == 3
    assert len(ctx.product_repo.list_all()) == 5

    second = runner.invoke(args=["shopboard-seed"])
    assert "nothing seeded" in second.output
    assert len(ctx.salesperson_repo.list_all()) == 3
