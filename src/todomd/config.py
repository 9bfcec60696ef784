"""Configuration loading and defaults for todomd."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from .navigation import MAX_NAV_DEPTH

# Environment variable naming the todo file
TODO_FILE_ENV = "TODOMD_FILE"


def get_config_dir() -> Path:
    """Get the todomd config directory (XDG-style)."""
    return Path.home() / ".config" / "todomd"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


@dataclass
class Config:
    """Application configuration."""

    todo_file: str = ""  # used when neither --file nor TODOMD_FILE is set
    max_nav_depth: int = MAX_NAV_DEPTH
    date_format: str = "%b %-d, %Y"
    header_title: bool = False
    watch: bool = True
    log_level: str = "WARNING"

    def get_todo_file(self) -> Path | None:
        """Get the configured default todo file, if any."""
        if not self.todo_file:
            return None
        return Path(self.todo_file).expanduser()

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        if not config_path.exists():
            default_config = cls()
            default_config.save()
            return default_config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        defaults = cls()
        return cls(
            todo_file=data.get("todo_file", defaults.todo_file),
            max_nav_depth=int(data.get("max_nav_depth", defaults.max_nav_depth)),
            date_format=data.get("date_format", defaults.date_format),
            header_title=bool(data.get("header_title", defaults.header_title)),
            watch=bool(data.get("watch", defaults.watch)),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # Build TOML content manually (tomllib is read-only)
        lines = [
            "# todomd Configuration",
            "",
            "# Todo file used when neither --file nor TODOMD_FILE is given",
            f'todo_file = "{self.todo_file}"',
            "",
            "# Maximum depth of linked file navigation",
            f"max_nav_depth = {self.max_nav_depth}",
            "",
            "# strftime format for the header date",
            f'date_format = "{self.date_format}"',
            "",
            '# Show the document\'s "# " title in the header instead of the file name',
            f"header_title = {str(self.header_title).lower()}",
            "",
            "# Reload the open file when another program changes it",
            f"watch = {str(self.watch).lower()}",
            "",
            "# Logging level (DEBUG, INFO, WARNING, ERROR)",
            f'log_level = "{self.log_level}"',
        ]

        config_path.write_text("\n".join(lines) + "\n")
