"""Tests for the initial repository snapshot."""

from pathlib import Path

import pytest

from restack.core.errors import DiscoveryError
from restack.core.inventory import (
    Worktree,
    build_inventory,
    find_operating_worktree,
    resolve_target,
)
from tests.fakes.git import FakeGit
from tests.test_utils.repos import ROOT, WT_A, WT_B, stacked_chain_repo


def test_build_inventory_snapshots_worktrees_and_branches() -> None:
    git = stacked_chain_repo()

    inventory = build_inventory(git, ROOT, requested_target=None)

    assert inventory.worktrees == (
        Worktree(ROOT, "main"),
        Worktree(WT_A, "a"),
        Worktree(WT_B, "b"),
    )
    assert dict(inventory.branches) == {"main": "M0", "a": "A0", "b": "B0"}
    assert inventory.target == "main"
    assert inventory.target_commit == "M0"
    assert inventory.operating_worktree == Worktree(ROOT, "main")


def test_build_inventory_runs_no_mutating_commands() -> None:
    git = stacked_chain_repo()

    build_inventory(git, WT_B / "src", requested_target="main")

    assert git.operations == []


def test_build_inventory_from_linked_worktree_subdirectory() -> None:
    git = stacked_chain_repo()

    inventory = build_inventory(git, WT_A / "docs" / "api", requested_target=None)

    assert inventory.operating_worktree == Worktree(WT_A, "a")


def test_build_inventory_rejects_detached_worktree() -> None:
    git = stacked_chain_repo(detached_worktrees={Path("/test/worktrees/spike"): "A0"})

    with pytest.raises(DiscoveryError, match="detached HEAD"):
        build_inventory(git, ROOT, requested_target=None)


def test_build_inventory_rejects_prunable_worktree() -> None:
    git = stacked_chain_repo(prunable_worktrees={WT_B})

    with pytest.raises(DiscoveryError, match="git worktree prune"):
        build_inventory(git, ROOT, requested_target=None)


def test_build_inventory_rejects_worktree_on_unknown_branch() -> None:
    git = FakeGit(
        commits={"M0": None},
        branches={"main": "M0"},
        worktrees=[(ROOT, "main"), (WT_A, "ghost")],
    )

    with pytest.raises(DiscoveryError, match="'ghost', which is not a local branch"):
        build_inventory(git, ROOT, requested_target=None)


def test_build_inventory_rejects_cwd_outside_all_worktrees() -> None:
    git = stacked_chain_repo()

    with pytest.raises(DiscoveryError, match="Unable to find the current directory"):
        build_inventory(git, Path("/elsewhere"), requested_target=None)


def test_build_inventory_rejects_missing_requested_target() -> None:
    git = stacked_chain_repo()

    with pytest.raises(DiscoveryError, match="Target branch 'develop' does not exist"):
        build_inventory(git, ROOT, requested_target="develop")


def test_with_branch_commit_returns_updated_copy() -> None:
    inventory = build_inventory(stacked_chain_repo(), ROOT, requested_target=None)

    updated = inventory.with_branch_commit("main", "M1")

    assert updated.target_commit == "M1"
    assert inventory.target_commit == "M0"
    assert updated.branches["a"] == "A0"


@pytest.mark.parametrize(
    ("branches", "requested", "expected"),
    [
        ({"main": "1", "master": "2", "dev": "3"}, "dev", "dev"),
        ({"main": "1", "master": "2"}, None, "main"),
        ({"master": "2", "feature": "3"}, None, "master"),
    ],
)
def test_resolve_target(branches: dict[str, str], requested: str | None, expected: str) -> None:
    assert resolve_target(branches, requested) == expected


def test_resolve_target_without_main_or_master() -> None:
    with pytest.raises(DiscoveryError, match="pass --target"):
        resolve_target({"trunk": "1"}, None)


def test_find_operating_worktree_prefers_deepest_nested_worktree() -> None:
    outer = Worktree(Path("/repo"), "main")
    inner = Worktree(Path("/repo/.worktrees/feature"), "feature")

    found = find_operating_worktree([outer, inner], Path("/repo/.worktrees/feature/src"))

    assert found == inner


def test_find_operating_worktree_does_not_match_sibling_prefix() -> None:
    worktrees = [Worktree(Path("/repo"), "main")]

    with pytest.raises(DiscoveryError):
        find_operating_worktree(worktrees, Path("/repo-other"))
