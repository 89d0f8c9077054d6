"""
Shared test fixtures: a colorless console, recording fakes for the command
runner / cleaner / registry, and a sample `winget list` table.
"""

from pathlib import Path

import pytest

from winget_reinstaller.core.console import Console
from winget_reinstaller.core.process import CommandResult
from winget_reinstaller.domain.config import ConfigStore
from winget_reinstaller.domain.models import AppRecord
from winget_reinstaller.services.cleanup import CleanupResult


def winget_table(rows, widths=(35, 35, 17, 17, 8)) -> str:
    """Render rows the way `winget list` pads its columns."""
    header = ["Name", "Id", "Version", "Available", "Source"]
    lines = ["".join(h.ljust(w) for h, w in zip(header, widths)).rstrip(), "-" * sum(widths)]
    for row in rows:
        lines.append("".join(str(c).ljust(w) for c, w in zip(row, widths)).rstrip())
    return "\n".join(lines) + "\n"


SAMPLE_ROWS = [
    ("7-Zip", "7zip.7zip", "22.00", "", "winget"),
    ("Git", "Git.Git", "2.41.0", "2.42.0", "winget"),
    ("GitKraken", "Axosoft.GitKraken", "9.8.2", "", "winget"),
    ("Spotify Music", "9NCBCSZSJRSB", "1.2.22.982.0", "", "msstore"),
]


@pytest.fixture
def listing_text() -> str:
    return winget_table(SAMPLE_ROWS)


@pytest.fixture
def console() -> Console:
    return Console(color=False)


@pytest.fixture
def cfg(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "config")


class FakeRunner:
    """Records every command; exit codes come from `codes[(verb, id)]`."""

    dry_run = False

    def __init__(self, codes=None, stdout=""):
        self.codes = dict(codes or {})
        self.stdout = stdout
        self.calls = []

    def run(self, cmd, log_stdout=True):
        self.calls.append(list(cmd))
        verb = cmd[1] if len(cmd) > 1 else ""
        pid = cmd[cmd.index("--id") + 1] if "--id" in cmd else None
        return CommandResult(self.codes.get((verb, pid), 0), self.stdout, "")

    def verbs(self):
        return [(c[1], c[c.index("--id") + 1]) for c in self.calls if "--id" in c]


class FakeCleaner:
    dry_run = False

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def remove(self, location):
        self.calls.append(location)
        return self.result or CleanupResult(path=location)


class FakeBackend:
    def __init__(self, entries):
        self.entries = entries
        self.calls = []

    def __call__(self, hive, path):
        self.calls.append((hive, path))
        value = self.entries.get((hive, path), [])
        if isinstance(value, Exception):
            raise value
        return list(value)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_cleaner() -> FakeCleaner:
    return FakeCleaner()


def make_app(name, pid, version="1.0", source="winget", location=None) -> AppRecord:
    return AppRecord(name=name, identifier=pid, version=version, source=source, install_location=location)


@pytest.fixture
def catalog():
    return [
        make_app("Visual Studio Code", "Microsoft.VisualStudioCode", "1.83.1"),
        make_app("7-Zip", "7zip.7zip", "22.00"),
        make_app("Spotify Music", "9NCBCSZSJRSB", "1.2.22", source="msstore"),
        make_app("Git", "Git.Git", "2.41.0"),
        make_app("GitKraken", "Axosoft.GitKraken", "9.8.2"),
    ]
