"""Config scaffolding for `wsfmt init`."""

from __future__ import annotations

from pathlib import Path

from wsfmt.config import CONFIG_NAME

_WSFMT_TOML_TEMPLATE = """\
[format]
tab_width = 4
indent_style = "spaces"
line_ending = "lf"
max_blank_lines = 2
final_newline = true
collapse_spaces = false

[files]
include = ["*.txt"]
"""


def init_config(directory: Path | None = None) -> Path:
    """Write a default wsfmt.toml into ``directory``. Returns its path."""
    base = directory or Path.cwd()
    config_path = base / CONFIG_NAME

    if config_path.exists():
        raise FileExistsError(f"'{config_path}' already exists")

    base.mkdir(parents=True, exist_ok=True)
    config_path.write_text(_WSFMT_TOML_TEMPLATE)
    return config_path
