"""Shared fixtures for todomd tests."""

from pathlib import Path

import pytest

SAMPLE_MARKDOWN = """# Weekend Tasks

Some notes about this weekend.

- [x] Clean the kitchen
- [ ] Buy groceries
- [ ] Call dentist

## Later

- [ ] Fix the fence
"""


@pytest.fixture
def write_todo(tmp_path):
    """Factory writing markdown content to a file under tmp_path."""

    def _write(content: str, name: str = "test.md") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return path

    return _write


@pytest.fixture
def sample_todo(write_todo):
    """A todo file with headings, prose and four items."""
    return write_todo(SAMPLE_MARKDOWN)


@pytest.fixture
def linked_files(tmp_path):
    """A main file linking to a work file and a missing file."""
    docs = tmp_path / "docs"
    (docs / "sub").mkdir(parents=True)

    (docs / "main.md").write_text(
        "# Main\n\n"
        "- [ ] todo:sub/work.md\n"
        "- [ ] todo:missing.md\n"
        "- [ ] todo:main.md\n"
        "- [ ] todo:\n"
        "- [ ] Regular task\n"
    )
    (docs / "sub" / "work.md").write_text("# Work\n\n- [ ] Write report\n- [x] todo:../main.md\n")
    return docs


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point config loading at a temp directory."""
    directory = tmp_path / ".config" / "todomd"
    monkeypatch.setattr("todomd.config.get_config_dir", lambda: directory)
    monkeypatch.setattr("todomd.config.get_config_path", lambda: directory / "config.toml")
    return directory
