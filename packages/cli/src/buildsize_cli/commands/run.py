"""run command — handle one pull_request event."""

from __future__ import annotations

import click
from rich.console import Console

from buildsize_core.builder import BuildError
from buildsize_core.event import load_event
from buildsize_core.runner import CommentError, Outcome, handle_event

console = Console()

_OUTCOME_MESSAGES = {
    Outcome.IGNORED: "[dim]Ignoring {action} action.[/dim]",
    Outcome.COMMENTED: "[green]Updated build size comment on {repo}#{pr}.[/green]",
    Outcome.BASELINE_CLEARED: "[green]PR #{pr} merged. Cleared cached baseline for {repo}.[/green]",
    Outcome.NOOP: "[dim]Nothing to do for {action} on {repo}#{pr}.[/dim]",
}


@click.command("run")
@click.option(
    "--payload",
    "payload_path",
    default="payload.json",
    show_default=True,
    type=click.Path(dir_okay=False),
    envvar="BUILDSIZE_PAYLOAD",
    help="Path to the pull_request event payload (JSON).",
)
@click.pass_context
def run_cmd(ctx, payload_path: str):
    """Measure a pull request's build size and comment on it.

    Reads a GitHub pull_request event payload. `opened` and `synchronize`
    build the base branch (cached) and the PR head and post the size diff;
    a merged `closed` event clears the cached baseline. Other actions are
    ignored.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token with pull-request write access (or use gh CLI)
    """
    config = ctx.obj["config"]

    try:
        event = load_event(payload_path, monitored_actions=config["actions"])
    except FileNotFoundError:
        raise click.UsageError(f"Event payload not found: {payload_path}")
    except ValueError as e:
        raise click.ClickException(f"Invalid event payload: {e}")

    if event.action in ("opened", "synchronize") and not config.get("github_token"):
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    try:
        outcome = handle_event(event, config)
    except (BuildError, CommentError, ValueError) as e:
        raise click.ClickException(str(e))

    console.print(_OUTCOME_MESSAGES[outcome].format(action=event.action, repo=event.repo, pr=event.pr_number))
