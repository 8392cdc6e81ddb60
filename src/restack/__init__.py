"""Keep every local branch rebased onto the integration branch across worktrees."""
