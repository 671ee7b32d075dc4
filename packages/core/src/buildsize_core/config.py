import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "data_dir": "data",
    "base_branch": "master",
    "output_dir": "dist",
    "install_command": "npm ci",
    "build_command": "npm run build",
    "remote_url": "https://github.com/{owner}/{name}",
    "git_timeout": 300,
    "build_timeout": 1800,
    "actions": ["opened", "closed", "synchronize"],
}


def load_config(config_path: str = ".buildsize.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .buildsize.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "actions": list(DEFAULT_CONFIG["actions"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def remote_url(config: dict, owner: str, name: str) -> str:
    """Expand the ``remote_url`` template for one repository."""
    return config["remote_url"].format(owner=owner, name=name)
