"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from apidoc.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "loader": {
        "node_modules_dir": "node_modules",
        "dist_dir": "dist",
        # None selects the schema bundled with the package
        "schema_path": None,
    },
    "documentation": {
        "min_summary_length": 10,
    },
    "validation": {
        # "error" reports top-level exports without @public/@beta/...; "allow" does not
        "missing_release_tags": "allow",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
