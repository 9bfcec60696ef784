"""Entry point for todomd."""

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from textual.logging import TextualHandler

from .app import run_app
from .config import TODO_FILE_ENV, Config
from .navigation import NavigationStack
from .session import EditorSession
from .todofile import TodoFile


def get_version() -> str:
    try:
        return version("todomd")
    except PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todomd",
        description="A minimal TUI for editing markdown todo files.",
        epilog=f"If -f/--file is not provided, reads from the {TODO_FILE_ENV} "
        "environment variable, then from todo_file in the config file.",
    )
    parser.add_argument(
        "-f", "--file", default="", help=f"Path to markdown todo file (overrides {TODO_FILE_ENV})"
    )
    parser.add_argument(
        "--return",
        dest="return_paths",
        default="",
        help="Comma-separated file paths for back-navigation stack",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show version information"
    )
    return parser


def resolve_todo_file(file_arg: str, config: Config) -> Path | None:
    """Pick the todo file: --file flag, then environment, then config."""
    if file_arg:
        return Path(file_arg)
    env_path = os.environ.get(TODO_FILE_ENV, "")
    if env_path:
        return Path(env_path)
    return config.get_todo_file()


def parse_return_paths(value: str) -> list[Path]:
    """Split the --return value, skipping blanks and missing files."""
    paths = []
    for part in value.split(","):
        trimmed = part.strip()
        if not trimmed:
            continue
        path = Path(trimmed)
        if not path.exists():
            print(f"Warning: return path not found: {trimmed}", file=sys.stderr)
            continue
        paths.append(path)
    return paths


def configure_logging(level: str) -> None:
    """Route log records to the Textual devtools console."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        handlers=[TextualHandler()],
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for todomd."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"todomd {get_version()}")
        return 0

    try:
        config = Config.load()
        configure_logging(config.log_level)

        file_path = resolve_todo_file(args.file, config)
        if file_path is None:
            print("Error: no todo file specified", file=sys.stderr)
            print(
                f"  Set {TODO_FILE_ENV} environment variable, or use -f/--file flag",
                file=sys.stderr,
            )
            return 1

        if not file_path.exists():
            print(f"Error: file not found: {file_path}", file=sys.stderr)
            return 1

        nav_stack = NavigationStack.from_paths(
            parse_return_paths(args.return_paths), config.max_nav_depth
        )

        try:
            todo_file = TodoFile.parse(file_path)
        except OSError as e:
            print(f"Error: loading file: {e}", file=sys.stderr)
            return 1

        run_app(EditorSession(todo_file, nav_stack), config)

        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
