class ReinstallerError(RuntimeError):
    """Fatal condition that stops the run before any pipeline executes."""


class ToolMissingError(ReinstallerError):
    pass


class PrivilegeError(ReinstallerError):
    pass


class EmptyInventoryError(ReinstallerError):
    pass
