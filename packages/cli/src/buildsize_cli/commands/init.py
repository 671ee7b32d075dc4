"""init command — set up buildsize for a repository.

Writes .buildsize.yml with the build commands and output directory, and
optionally a GitHub Actions workflow that feeds pull_request events to
`buildsize run`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml
from rich.console import Console

from buildsize_core.config import DEFAULT_CONFIG

console = Console()
logger = logging.getLogger(__name__)

_WORKFLOW_TEMPLATE = """\
name: Build size

on:
  pull_request:
    types: [opened, synchronize, closed]

concurrency:
  group: buildsize-${{{{ github.repository }}}}
  cancel-in-progress: false

jobs:
  build-size:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      pull-requests: write

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Set up Node
        uses: actions/setup-node@v4
        with:
          node-version: "20"

      - name: Restore buildsize state
        uses: actions/cache@v4
        with:
          path: {data_dir}
          key: buildsize-${{{{ github.run_id }}}}
          restore-keys: buildsize-

      - name: Install buildsize
        run: pip install "buildsize=={version}"

      - name: Report build size
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
        run: |
          cp "$GITHUB_EVENT_PATH" payload.json
          buildsize run --payload payload.json
"""


@click.command("init")
@click.option("--yes", "-y", is_flag=True, help="Accept defaults without prompting.")
def init_cmd(yes: bool):
    """Create .buildsize.yml and a GitHub Actions workflow."""
    console.print("\n[bold cyan]buildsize init[/bold cyan] — repository setup\n")

    config: dict = {}
    for key, label in (
        ("base_branch", "Base branch to compare against"),
        ("install_command", "Install command"),
        ("build_command", "Build command"),
        ("output_dir", "Build output directory"),
    ):
        default = DEFAULT_CONFIG[key]
        config[key] = default if yes else click.prompt(label, default=default)

    _write_config(config)
    console.print("[green]Created .buildsize.yml[/green]")

    setup_ci = yes or click.confirm("\nGenerate .github/workflows/buildsize.yml for GitHub Actions?", default=True)
    if setup_ci:
        _write_workflow(DEFAULT_CONFIG["data_dir"])
        console.print("[green]Created .github/workflows/buildsize.yml[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")


def _write_config(config: dict) -> None:
    """Write or update .buildsize.yml, preserving any existing keys."""
    path = Path(".buildsize.yml")
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current buildsize version from the installed package metadata."""
    try:
        from importlib.metadata import version

        return version("buildsize")
    except Exception as e:
        logger.debug("Could not read installed version: %s", e)
        return "0.1.0"


def _write_workflow(data_dir: str) -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    workflow_path = workflow_dir / "buildsize.yml"
    workflow_path.write_text(_WORKFLOW_TEMPLATE.format(data_dir=data_dir, version=_get_version()))
