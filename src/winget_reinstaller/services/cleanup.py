import os
import shutil
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from ..core.console import Console

PROTECTED_ENV = ("ProgramFiles", "ProgramFiles(x86)", "ProgramW6432", "ProgramData",
                 "SystemRoot", "windir", "USERPROFILE", "APPDATA", "LOCALAPPDATA")

_RETRYABLE = ("unlink", "remove", "rmdir")

@dataclass
class CleanupResult:
    path: Optional[str] = None
    skipped: bool = False
    removed: int = 0
    failed: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed

def normalize_location(location: Optional[str]) -> Optional[str]:
    if not location:
        return None
    s = location.strip().strip('"').strip()
    return s or None

def _key(p: Path) -> str:
    return os.path.normcase(os.path.normpath(str(p)))

def is_protected(path: Path) -> bool:
    """Filesystem roots and shared system folders are never removed wholesale."""
    resolved = path.resolve()
    if resolved == Path(resolved.anchor):
        return True
    protected = {_key(Path.home())}
    for var in PROTECTED_ENV:
        v = os.environ.get(var)
        if v:
            protected.add(_key(Path(v)))
    return _key(resolved) in protected

def _within(base: str, p: str) -> bool:
    """True when p, with links and junctions resolved, is still under base."""
    real = os.path.normcase(os.path.realpath(p))
    try:
        return os.path.commonpath([base, real]) == base
    except ValueError:
        return False

def _make_writable(p: str, is_dir: bool):
    # os.chmod follows links; a link's target may live outside the folder
    if os.path.islink(p):
        return
    mode = os.lstat(p).st_mode
    extra = stat.S_IWRITE | (stat.S_IREAD | stat.S_IEXEC if is_dir else 0)
    os.chmod(p, mode | extra)

def _scan(root: str, console: Console, unlock: bool = False) -> int:
    """
    Counts root plus every entry under it. Links and junctions are counted
    but never entered. With unlock=True, directories are made writable on
    the way down so the delete pass can empty them.
    """
    if not os.path.lexists(root):
        return 0
    base = os.path.normcase(os.path.realpath(root))
    count = 1
    for dirpath, dirnames, filenames in os.walk(root):
        count += len(dirnames) + len(filenames)
        keep = []
        for n in dirnames:
            full = os.path.join(dirpath, n)
            if os.path.islink(full) or not _within(base, full):
                continue
            if unlock:
                try:
                    _make_writable(full, True)
                except OSError as e:
                    console.debug(f"chmod failed for {full}: {e}")
            keep.append(n)
        dirnames[:] = keep
    return count

def _holds_failed(p: str, res: CleanupResult) -> bool:
    prefix = p.rstrip(os.sep) + os.sep
    return any(f.startswith(prefix) for f in res.failed)

def _target(location: Optional[str], console: Console, res: CleanupResult) -> Optional[Path]:
    loc = normalize_location(location)
    if not loc:
        console.info("No install location recorded; nothing to clean.")
        res.skipped = True
        return None
    res.path = loc
    path = Path(loc)
    if not path.exists():
        console.info(f"Install location already gone: {loc}")
        res.skipped = True
        return None
    if is_protected(path):
        res.error = f"refusing to remove protected folder {loc}"
        console.warn(f"Refusing to remove protected folder: {loc}")
        return None
    return path

class Cleaner:
    """Removes what an uninstaller left behind in the install folder."""

    dry_run = False

    def __init__(self, console: Console):
        self.console = console

    def remove(self, location: Optional[str]) -> CleanupResult:
        res = CleanupResult()
        path = _target(location, self.console, res)
        if path is None:
            return res
        if path.is_file() or path.is_symlink():
            self._remove_one(str(path), res)
            return res
        root = str(path)
        self.console.info(f"Removing leftovers in {root}")
        try:
            _make_writable(root, True)
        except OSError as e:
            self.console.debug(f"chmod failed for {root}: {e}")
        total = _scan(root, self.console, unlock=True)

        def on_exc(func, p, exc):
            self._retry(func, p, exc, root, res)

        if sys.version_info >= (3, 12):
            shutil.rmtree(root, onexc=on_exc)
        else:
            shutil.rmtree(root, onerror=lambda func, p, info: on_exc(func, p, info[1]))

        res.removed = total - _scan(root, self.console)
        if res.failed:
            self.console.warn(f"Cleanup left {len(res.failed)} item(s) in {root}")
        else:
            self.console.ok(f"Removed {root} ({res.removed} item(s))")
        return res

    def _retry(self, func, p: str, exc: BaseException, root: str, res: CleanupResult):
        """rmtree error hook: clear the read-only bit and try once more."""
        if isinstance(exc, FileNotFoundError):
            return
        if getattr(func, "__name__", "") in _RETRYABLE:
            try:
                parent = os.path.dirname(p)
                if parent.startswith(root):
                    _make_writable(parent, True)
                _make_writable(p, os.path.isdir(p) and not os.path.islink(p))
                func(p)
                return
            except FileNotFoundError:
                return
            except OSError as e:
                exc = e
        if _holds_failed(p, res):
            return
        res.failed.append(p)
        self.console.warn(f"Could not remove {p}: {getattr(exc, 'strerror', None) or exc}")

    def _remove_one(self, p: str, res: CleanupResult):
        try:
            os.unlink(p)
            res.removed += 1
        except FileNotFoundError:
            pass
        except OSError as e:
            res.failed.append(p)
            self.console.warn(f"Could not remove {p}: {e.strerror or e}")

class DryRunCleaner:
    dry_run = True

    def __init__(self, console: Console):
        self.console = console

    def remove(self, location: Optional[str]) -> CleanupResult:
        res = CleanupResult()
        path = _target(location, self.console, res)
        if path is not None:
            self.console.info(f"[dry-run] would remove {path}")
            res.skipped = True
        return res

def make_cleaner(console: Console, dry_run: bool):
    return DryRunCleaner(console) if dry_run else Cleaner(console)
