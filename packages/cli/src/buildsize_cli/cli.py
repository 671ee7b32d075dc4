"""CLI entry point for buildsize.

Commands:
  run         — handle one pull_request event payload (the CI entry point)
  measure     — snapshot a local build output directory
  compare     — diff two snapshot files and print the comment body
  invalidate  — drop the cached baseline for a repository
  init        — write .buildsize.yml and a GitHub Actions workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from buildsize_cli.commands.compare import compare_cmd
from buildsize_cli.commands.init import init_cmd
from buildsize_cli.commands.invalidate import invalidate_cmd
from buildsize_cli.commands.measure import measure_cmd
from buildsize_cli.commands.run import run_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("buildsize"),
    prog_name="buildsize",
)
@click.option(
    "--config",
    "config_path",
    default=".buildsize.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="BUILDSIZE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every build step.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Report build output size changes on GitHub pull requests."""
    from buildsize_core.config import load_config
    from buildsize_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(run_cmd)
main.add_command(measure_cmd)
main.add_command(compare_cmd)
main.add_command(invalidate_cmd)
main.add_command(init_cmd)
