from .admin import is_admin, require_admin
from .console import Console
from .errors import ReinstallerError, ToolMissingError, PrivilegeError, EmptyInventoryError
from .process import CommandResult, DryRunProcess, Process, make_runner

__all__ = [
    "is_admin",
    "require_admin",
    "Console",
    "ReinstallerError",
    "ToolMissingError",
    "PrivilegeError",
    "EmptyInventoryError",
    "CommandResult",
    "DryRunProcess",
    "Process",
    "make_runner",
]
