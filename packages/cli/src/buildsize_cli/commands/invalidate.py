"""invalidate command — drop a repository's cached baseline."""

from __future__ import annotations

import click
from rich.console import Console

from buildsize_store.baseline import BaselineCache
from buildsize_store.state import RepoState

console = Console()


@click.command("invalidate")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.pass_context
def invalidate_cmd(ctx, repo: str):
    """Clear the cached base-branch snapshot for a repository.

    The next PR event rebuilds the base branch. Merges clear it
    automatically; use this after pushing to the base branch directly.
    """
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise click.BadParameter("expected owner/name", param_hint="--repo")

    state = RepoState(ctx.obj["config"]["data_dir"], owner, name)
    with state.lock():
        cleared = BaselineCache(state).clear()

    if cleared:
        console.print(f"[green]Cleared cached baseline for {repo}.[/green]")
    else:
        console.print(f"[yellow]No cached baseline for {repo}.[/yellow]")
