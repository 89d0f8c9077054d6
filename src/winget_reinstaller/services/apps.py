import shutil
from typing import List, Optional
from ..core.console import Console
from ..core.errors import EmptyInventoryError, ToolMissingError
from ..domain.models import AppRecord, InventoryRecord
from .catalog import build_catalog
from .inventory import parse_inventory
from .registry import RegistryReader

LIST_ARGS = ["list", "--accept-source-agreements"]

class AppService:
    def __init__(self, console: Console, proc, registry: Optional[RegistryReader] = None, winget: str = "winget"):
        self.console = console
        self.proc = proc
        self.registry = registry or RegistryReader(console)
        self.winget = winget

    def check_environment(self) -> str:
        exe = shutil.which(self.winget)
        if not exe:
            raise ToolMissingError(f"{self.winget} not found in PATH. Install 'App Installer' from Microsoft Store.")
        self.console.debug(f"Using {exe}")
        return exe

    def list_installed(self) -> List[InventoryRecord]:
        res = self.proc.run([self.winget] + LIST_ARGS, log_stdout=False)
        records = parse_inventory(res.stdout)
        if not records:
            raise EmptyInventoryError(f"'{self.winget} list' returned no packages (exit {res.code}).")
        self.console.info(f"{self.winget}: {len(records)} installed packages.")
        return records

    def load_catalog(self) -> List[AppRecord]:
        inventory = self.list_installed()
        system = self.registry.read()
        catalog = build_catalog(inventory, system)
        located = sum(1 for a in catalog if a.install_location)
        self.console.info(f"Catalog: {len(catalog)} apps, {located} with a known install location.")
        return catalog
