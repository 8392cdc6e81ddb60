"""Command-line entry point."""

import logging
import os

import click

from restack.cli.output import user_output
from restack.cli.rendering import render_plan
from restack.core.context import RestackContext, create_context
from restack.core.errors import RestackError
from restack.core.planner import RebasePlan
from restack.core.restack import run_restack

DEBUG_ENV_VAR = "RESTACK_DEBUG"

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def configure_logging(*, verbose: bool) -> None:
    """Enable debug logging when --verbose or RESTACK_DEBUG is set."""
    if verbose or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.command("restack", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="restack")
@click.option(
    "-t",
    "--target",
    metavar="BRANCH",
    default=None,
    help="Branch to rebase onto (default: target_branch from config, else main, else master).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show the rebase plan without fetching, pulling, or rebasing.",
)
@click.option("-q", "--quiet", is_flag=True, help="Only print errors.")
@click.option("-v", "--verbose", is_flag=True, help="Log every git command and phase.")
@click.pass_context
def cli(
    click_ctx: click.Context, target: str | None, dry_run: bool, quiet: bool, verbose: bool
) -> None:
    """Rebase every local branch, across all worktrees, onto the integration branch.

    Branches built on top of each other stay that way: only the tips of
    dependency chains (and branches already merged into the target) are rebased
    explicitly, and `git rebase --update-refs` carries everything in between.

    Every worktree is returned to its original branch afterwards, even when a
    rebase fails.
    """
    configure_logging(verbose=verbose)

    try:
        # Only create context if not already provided (e.g., by tests)
        if click_ctx.obj is None:
            click_ctx.obj = create_context(dry_run=dry_run, quiet=quiet)
        ctx: RestackContext = click_ctx.obj

        def show_plan(plan: RebasePlan) -> None:
            if not quiet:
                render_plan(plan)

        result = run_restack(
            ctx,
            requested_target=target if target is not None else ctx.config.target_branch,
            on_plan=show_plan,
        )
    except RestackError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    if ctx.dry_run:
        ctx.feedback.success(
            f"✓ Dry run complete: {len(result.plan.entries)} branch(es) would be rebased"
        )
        return

    ctx.feedback.success(
        f"✓ Rebased {len(result.plan.entries)} branch(es) onto '{result.target}' "
        f"({result.target_commit[:7]})"
    )


def main() -> None:
    """CLI entry point used by the `restack` console script."""
    cli()
