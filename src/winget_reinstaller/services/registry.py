import platform
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from ..core.console import Console
from ..domain.models import SystemInventoryRecord

UNINSTALL_PATHS = [
    ("HKLM", r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"),
    ("HKLM", r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall"),
    ("HKCU", r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"),
]

VALUE_NAMES = ("DisplayName", "DisplayVersion", "InstallLocation", "Publisher")

# (hive, path) -> [(source_key, {value name: value})]
Backend = Callable[[str, str], Iterable[Tuple[str, Dict[str, str]]]]

def winreg_backend(hive_name: str, path: str) -> Iterable[Tuple[str, Dict[str, str]]]:
    """Read-only walk of one uninstall key; every handle is opened with KEY_READ."""
    import winreg
    hive = {"HKLM": winreg.HKEY_LOCAL_MACHINE, "HKCU": winreg.HKEY_CURRENT_USER}[hive_name]
    try:
        root = winreg.OpenKey(hive, path, 0, winreg.KEY_READ)
    except OSError:
        return
    with root as k:
        i = 0
        while True:
            try:
                sub = winreg.EnumKey(k, i)
            except OSError:
                break
            i += 1
            values: Dict[str, str] = {}
            try:
                with winreg.OpenKey(k, sub, 0, winreg.KEY_READ) as sk:
                    for vn in VALUE_NAMES:
                        try:
                            values[vn] = winreg.QueryValueEx(sk, vn)[0]
                        except OSError:
                            pass
            except OSError:
                continue
            yield f"{hive_name}\\{path}\\{sub}", values

def _clean(v) -> Optional[str]:
    s = str(v).strip() if v is not None else ""
    return s or None

class RegistryReader:
    def __init__(self, console: Console, backend: Optional[Backend] = None, locations=None):
        self.console = console
        self.backend = backend
        self.locations = list(locations or UNINSTALL_PATHS)

    def _backend(self) -> Optional[Backend]:
        if self.backend is not None:
            return self.backend
        if platform.system() != "Windows":
            return None
        return winreg_backend

    def read_all(self) -> List[SystemInventoryRecord]:
        """Every location merged into one flat list, before dedup."""
        backend = self._backend()
        if backend is None:
            self.console.warn("Registry is not available on this platform; install locations will be unknown.")
            return []
        rows: List[SystemInventoryRecord] = []
        for hive, path in self.locations:
            self.console.debug(f"Scanning {hive}\\{path}")
            try:
                entries = list(backend(hive, path))
            except OSError as e:
                self.console.warn(f"Could not read {hive}\\{path}: {e}")
                continue
            for key, values in entries:
                name = _clean(values.get("DisplayName"))
                if not name:
                    continue
                rows.append(SystemInventoryRecord(
                    display_name=name,
                    display_version=_clean(values.get("DisplayVersion")),
                    install_location=_clean(values.get("InstallLocation")),
                    publisher=_clean(values.get("Publisher")),
                    source_key=key,
                ))
        return rows

    def read(self) -> List[SystemInventoryRecord]:
        seen = set()
        out: List[SystemInventoryRecord] = []
        for r in self.read_all():
            if r.display_name in seen:
                continue
            seen.add(r.display_name)
            out.append(r)
        self.console.info(f"Registry: {len(out)} installed programs.")
        return out
