"""Tests for todomd.navigation module."""

from pathlib import Path

import pytest

from todomd.navigation import (
    MAX_NAV_DEPTH,
    LinkTargetNotFoundError,
    MaxDepthExceededError,
    NavigationEntry,
    NavigationError,
    NavigationStack,
    SelfLinkError,
)
from todomd.todofile import TodoFile


class TestNavigationStack:
    def test_starts_empty(self):
        stack = NavigationStack()
        assert stack.is_empty()
        assert len(stack) == 0
        assert stack.max_depth == MAX_NAV_DEPTH == 50

    def test_push_pop_lifo(self):
        stack = NavigationStack()
        stack.push(NavigationEntry(Path("a.md"), 1))
        stack.push(NavigationEntry(Path("b.md"), 2))
        assert stack.pop() == NavigationEntry(Path("b.md"), 2)
        assert stack.pop() == NavigationEntry(Path("a.md"), 1)
        assert stack.pop() is None

    def test_push_past_max_depth(self):
        stack = NavigationStack()
        for i in range(MAX_NAV_DEPTH):
            stack.push(NavigationEntry(Path(f"{i}.md")))
        with pytest.raises(MaxDepthExceededError, match=r"maximum navigation depth \(50\) reached"):
            stack.push(NavigationEntry(Path("extra.md")))
        assert len(stack) == MAX_NAV_DEPTH

    def test_from_paths(self):
        stack = NavigationStack.from_paths([Path("a.md"), Path("b.md")])
        assert len(stack) == 2
        assert stack.pop() == NavigationEntry(Path("b.md"), 0)

    def test_from_paths_truncates(self):
        stack = NavigationStack.from_paths([Path(f"{i}.md") for i in range(5)], max_depth=3)
        assert len(stack) == 3


class TestResolveTarget:
    def test_relative_target(self, linked_files):
        stack = NavigationStack()
        resolved = stack.resolve_target(linked_files / "main.md", "sub/work.md")
        assert resolved == linked_files / "sub" / "work.md"

    def test_self_link(self, linked_files):
        stack = NavigationStack()
        with pytest.raises(SelfLinkError, match="cannot link to current file"):
            stack.resolve_target(linked_files / "main.md", "main.md")

    def test_self_link_through_dot_segments(self, linked_files):
        stack = NavigationStack()
        with pytest.raises(SelfLinkError):
            stack.resolve_target(linked_files / "main.md", "sub/../main.md")

    def test_missing_target(self, linked_files):
        stack = NavigationStack()
        with pytest.raises(LinkTargetNotFoundError, match="file not found"):
            stack.resolve_target(linked_files / "main.md", "missing.md")

    def test_full_stack(self, linked_files):
        stack = NavigationStack(max_depth=1)
        stack.push(NavigationEntry(Path("x.md")))
        with pytest.raises(MaxDepthExceededError):
            stack.resolve_target(linked_files / "main.md", "sub/work.md")

    def test_errors_share_base(self):
        assert issubclass(SelfLinkError, NavigationError)
        assert issubclass(LinkTargetNotFoundError, NavigationError)
        assert issubclass(MaxDepthExceededError, NavigationError)


class TestNavigate:
    def test_navigate_pushes_entry(self, linked_files):
        stack = NavigationStack()
        main = TodoFile.parse(linked_files / "main.md")
        work = stack.navigate(main, 3, "sub/work.md")

        assert work.path == linked_files / "sub" / "work.md"
        assert work.todo_count() == 2
        assert stack.pop() == NavigationEntry(main.path, 3)

    def test_navigate_back_and_forth(self, linked_files):
        stack = NavigationStack()
        main = TodoFile.parse(linked_files / "main.md")
        work = stack.navigate(main, 0, "sub/work.md")
        # A -> B -> A is allowed; only direct self links are rejected
        again = stack.navigate(work, 1, "../main.md")
        assert again.todo_count() == main.todo_count()
        assert len(stack) == 2

    def test_rejected_navigation_leaves_stack(self, linked_files):
        stack = NavigationStack()
        main = TodoFile.parse(linked_files / "main.md")
        for target in ("main.md", "missing.md"):
            with pytest.raises(NavigationError):
                stack.navigate(main, 0, target)
        assert stack.is_empty()

    def test_max_depth_leaves_stack_full(self, linked_files):
        stack = NavigationStack()
        for i in range(MAX_NAV_DEPTH):
            stack.push(NavigationEntry(Path(f"{i}.md")))
        main = TodoFile.parse(linked_files / "main.md")
        with pytest.raises(MaxDepthExceededError):
            stack.navigate(main, 0, "sub/work.md")
        assert len(stack) == MAX_NAV_DEPTH

    def test_unreadable_target_leaves_stack(self, linked_files):
        (linked_files / "folder.md").mkdir()
        stack = NavigationStack()
        main = TodoFile.parse(linked_files / "main.md")
        with pytest.raises(OSError):
            stack.navigate(main, 0, "folder.md")
        assert stack.is_empty()
