"""Shared fixtures for sysreport tests."""

from typing import Dict, Optional, Sequence

import pytest

from sysreport.hardware.commands import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner returning canned results keyed by a substring of the command."""

    def __init__(
        self,
        responses: Optional[Dict[str, CommandResult]] = None,
        default: Optional[CommandResult] = None,
    ) -> None:
        self.responses = responses or {}
        self.default = default or CommandResult(127, "", "not found")
        self.calls: list = []

    def run(self, argv: Sequence[str]) -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        command = " ".join(argv)
        for key, result in self.responses.items():
            if key in command:
                return result
        return self.default


@pytest.fixture
def make_runner():
    """Build a FakeRunner from {substring: CommandResult}."""

    def _make(responses=None, default=None) -> FakeRunner:
        return FakeRunner(responses, default)

    return _make


@pytest.fixture
def sysfs(tmp_path):
    """Create files under a fake /sys root."""
    root = tmp_path / "sys"
    root.mkdir()

    def _write(relative: str, content: str):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    _write.root = root
    return _write
