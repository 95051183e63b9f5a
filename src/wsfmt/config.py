"""TOML config loading for wsfmt.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "wsfmt.toml"

INDENT_STYLES = ("spaces", "tabs", "keep")
LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass
class FormatConfig:
    tab_width: int = 4
    indent_style: str = "spaces"
    line_ending: str = "lf"
    max_blank_lines: int = 2
    final_newline: bool = True
    collapse_spaces: bool = False

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError(f"tab_width must be positive, got {self.tab_width}")
        if self.indent_style not in INDENT_STYLES:
            raise ValueError(
                f"indent_style must be one of {', '.join(INDENT_STYLES)}, "
                f"got {self.indent_style!r}"
            )
        if self.line_ending not in LINE_ENDINGS:
            raise ValueError(
                f"line_ending must be one of {', '.join(LINE_ENDINGS)}, "
                f"got {self.line_ending!r}"
            )
        if self.max_blank_lines < 0:
            raise ValueError(
                f"max_blank_lines must not be negative, got {self.max_blank_lines}"
            )

    @property
    def newline(self) -> str:
        return LINE_ENDINGS[self.line_ending]


@dataclass
class FilesConfig:
    include: list[str] = field(default_factory=lambda: ["*.txt"])


@dataclass
class WsfmtConfig:
    format: FormatConfig = field(default_factory=FormatConfig)
    files: FilesConfig = field(default_factory=FilesConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find wsfmt.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> WsfmtConfig:
    """Parse a wsfmt.toml file into a WsfmtConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = WsfmtConfig()

    if "format" in data:
        fmt = data["format"]
        config.format = FormatConfig(
            tab_width=fmt.get("tab_width", 4),
            indent_style=fmt.get("indent_style", "spaces"),
            line_ending=fmt.get("line_ending", "lf"),
            max_blank_lines=fmt.get("max_blank_lines", 2),
            final_newline=fmt.get("final_newline", True),
            collapse_spaces=fmt.get("collapse_spaces", False),
        )

    if "files" in data:
        files = data["files"]
        config.files = FilesConfig(
            include=files.get("include", ["*.txt"]),
        )

    return config
