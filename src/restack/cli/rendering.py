"""Rendering of rebase plans for human consumption."""

from rich.console import Console
from rich.table import Table

from restack.core.planner import RebasePlan

_REASON_LABELS = {
    "leaf": "leaf (tip of a chain)",
    "behind": "behind (already in target)",
}


def build_plan_table(plan: RebasePlan) -> Table:
    """Build a table with one row per planned rebase."""
    table = Table(show_header=True, header_style="bold", title=f"Rebase onto {plan.target}")
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("branch", style="cyan", no_wrap=True)
    table.add_column("reason", no_wrap=True)
    for index, entry in enumerate(plan.entries, start=1):
        table.add_row(str(index), entry.branch, _REASON_LABELS[entry.reason])
    return table


def render_plan(plan: RebasePlan, console: Console | None = None) -> None:
    """Print the plan to stderr, or a one-liner when it is empty."""
    if console is None:
        console = Console(stderr=True)

    if not plan.entries:
        console.print(f"Nothing to rebase onto [bold]{plan.target}[/bold].")
        return

    console.print(build_plan_table(plan))
