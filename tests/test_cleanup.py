"""
Tests for removing leftover install folders.
"""

import os
import stat
from pathlib import Path

import pytest

from winget_reinstaller.services.cleanup import (
    Cleaner,
    DryRunCleaner,
    is_protected,
    make_cleaner,
    normalize_location,
)


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    root = tmp_path / "Program Files" / "App"
    (root / "bin").mkdir(parents=True)
    (root / "data" / "cache").mkdir(parents=True)
    (root / "bin" / "app.exe").write_text("exe")
    (root / "data" / "settings.ini").write_text("[x]")
    (root / "data" / "cache" / "blob").write_text("blob")
    ro = root / "bin" / "readonly.dll"
    ro.write_text("dll")
    os.chmod(ro, stat.S_IREAD)
    os.chmod(root / "data" / "cache", stat.S_IREAD | stat.S_IEXEC)
    return root


class TestCleaner:
    def test_removes_tree_including_read_only_items(self, console, install_dir):
        res = Cleaner(console).remove(str(install_dir))
        assert res.ok
        assert not install_dir.exists()
        assert res.removed == 8
        assert install_dir.parent.exists()

    def test_missing_location_is_a_no_op(self, console, tmp_path, capsys):
        res = Cleaner(console).remove(str(tmp_path / "gone"))
        assert res.skipped and res.ok
        assert "already gone" in capsys.readouterr().out

    @pytest.mark.parametrize("location", [None, "", "   ", '""'])
    def test_no_location_recorded(self, console, location):
        res = Cleaner(console).remove(location)
        assert res.skipped
        assert res.path is None
        assert res.ok

    def test_quoted_location(self, console, install_dir):
        res = Cleaner(console).remove(f'"{install_dir}"')
        assert res.ok
        assert not install_dir.exists()

    def test_locked_item_is_reported_and_skipped(self, console, install_dir, monkeypatch, capsys):
        locked = os.path.join(str(install_dir), "bin", "app.exe")
        real_unlink = os.unlink

        def unlink(path, *args, **kwargs):
            if os.path.basename(str(path)) == "app.exe":
                raise PermissionError(13, "The process cannot access the file", path)
            return real_unlink(path, *args, **kwargs)

        monkeypatch.setattr(os, "unlink", unlink)
        res = Cleaner(console).remove(str(install_dir))
        assert res.failed == [locked]
        assert not res.ok
        assert os.path.exists(locked)
        assert not (install_dir / "data").exists()
        assert not (install_dir / "bin" / "readonly.dll").exists()
        out = capsys.readouterr().out
        assert "Could not remove" in out
        assert "Cleanup left 1 item(s)" in out
        assert res.removed == 5

    def test_links_to_outside_are_removed_not_followed(self, console, install_dir, tmp_path):
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        target = outside / "outside.txt"
        target.write_text("keep me")
        os.chmod(target, 0o600)
        (outside / "sub").mkdir()
        (outside / "sub" / "nested.txt").write_text("keep me too")
        try:
            os.symlink(target, install_dir / "bin" / "shared.txt")
            os.symlink(outside / "sub", install_dir / "data" / "shared", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks are not available here")
        before = stat.S_IMODE(os.stat(target).st_mode)

        res = Cleaner(console).remove(str(install_dir))

        assert res.ok
        assert not install_dir.exists()
        assert target.read_text() == "keep me"
        assert stat.S_IMODE(os.stat(target).st_mode) == before
        assert (outside / "sub" / "nested.txt").read_text() == "keep me too"
        assert res.removed == 10

    def test_filesystem_root_is_protected(self):
        assert is_protected(Path(Path.cwd().anchor))

    def test_ordinary_folder_is_not_protected(self, install_dir):
        assert not is_protected(install_dir)

    def test_refuses_well_known_folder(self, console, tmp_path, monkeypatch):
        shared = tmp_path / "ProgramData"
        shared.mkdir()
        (shared / "keep.txt").write_text("x")
        monkeypatch.setenv("ProgramData", str(shared))
        assert is_protected(shared)
        res = Cleaner(console).remove(str(shared))
        assert res.error
        assert (shared / "keep.txt").exists()


class TestDryRunCleaner:
    def test_reports_but_keeps_files(self, console, install_dir, capsys):
        res = DryRunCleaner(console).remove(str(install_dir))
        assert res.removed == 0
        assert (install_dir / "bin" / "app.exe").exists()
        assert "[dry-run] would remove" in capsys.readouterr().out

    def test_make_cleaner(self, console):
        assert isinstance(make_cleaner(console, True), DryRunCleaner)
        assert isinstance(make_cleaner(console, False), Cleaner)


def test_normalize_location():
    assert normalize_location('  "C:\\Program Files\\App"  ') == "C:\\Program Files\\App"
    assert normalize_location(None) is None
