import ctypes
from .console import Console
from .errors import PrivilegeError

def is_admin() -> bool:
    try:
        return ctypes.windll.shell32.IsUserAnAdmin() != 0
    except Exception:
        return False

def require_admin(console: Console, action_label: str = "Reinstalling applications"):
    """
    Raises PrivilegeError when the process is not elevated. Uninstall/install
    of machine-wide packages needs an Administrator terminal.
    """
    if is_admin():
        return
    console.info("Re-open Terminal/PowerShell as Administrator and try again, or use --dry-run.")
    raise PrivilegeError(f"{action_label} requires Administrator.")
