"""Tests for plan rendering."""

from io import StringIO

from rich.console import Console

from restack.cli.rendering import build_plan_table, render_plan
from restack.core.planner import PlannedRebase, RebasePlan


def _render(plan: RebasePlan) -> str:
    buffer = StringIO()
    render_plan(plan, console=Console(file=buffer, width=100, color_system=None))
    return buffer.getvalue()


def test_plan_table_has_one_row_per_entry() -> None:
    plan = RebasePlan(
        target="main",
        entries=(PlannedRebase("feature", "leaf"), PlannedRebase("old", "behind")),
    )

    table = build_plan_table(plan)

    assert table.row_count == 2
    assert [column.header for column in table.columns] == ["#", "branch", "reason"]


def test_render_plan_lists_branches_and_reasons() -> None:
    plan = RebasePlan(
        target="main",
        entries=(PlannedRebase("feature", "leaf"), PlannedRebase("old", "behind")),
    )

    output = _render(plan)

    assert "Rebase onto main" in output
    assert "feature" in output
    assert "leaf (tip of a chain)" in output
    assert "behind (already in target)" in output


def test_render_empty_plan() -> None:
    output = _render(RebasePlan(target="trunk", entries=()))

    assert output.strip() == "Nothing to rebase onto trunk."
