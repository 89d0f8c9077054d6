from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True)
class InventoryRecord:
    """One row of the package manager's installed listing."""
    name: str
    identifier: str
    version: str
    source: str


@dataclass(frozen=True)
class SystemInventoryRecord:
    """One installed-software entry from the OS uninstall registry."""
    display_name: str
    display_version: Optional[str] = None
    install_location: Optional[str] = None
    publisher: Optional[str] = None
    source_key: Any = None


@dataclass(eq=False)
class AppRecord:
    name: str
    identifier: str
    version: str
    source: str
    install_location: Optional[str] = None
    publisher: Optional[str] = None
    source_key: Any = None

    def label(self) -> str:
        ver = self.version or "?"
        return f"{self.name} [{self.identifier} {ver}]"


# Parse results for a single listing line.

@dataclass(frozen=True)
class FourColumnRow:
    record: InventoryRecord


@dataclass(frozen=True)
class FiveColumnRow:
    record: InventoryRecord
    available: str


@dataclass(frozen=True)
class MalformedRow:
    text: str
    columns: int


ParsedRow = Union[FourColumnRow, FiveColumnRow, MalformedRow]


class FinalState(str, Enum):
    PENDING = "Pending"
    UNINSTALL_FAILED = "UninstallFailed"
    CLEANED = "Cleaned"
    REINSTALLED = "Reinstalled"
    REINSTALL_FAILED = "ReinstallFailed"

    @property
    def failed(self) -> bool:
        return self in (FinalState.UNINSTALL_FAILED, FinalState.REINSTALL_FAILED)


@dataclass(eq=False)
class PipelineOutcome:
    app: AppRecord
    uninstall_code: Optional[int] = None
    cleanup_attempted: bool = False
    cleanup_error: Optional[str] = None
    reinstall_code: Optional[int] = None
    final_state: FinalState = FinalState.PENDING
    removed_items: int = 0
    failed_items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.app.name,
            "id": self.app.identifier,
            "version": self.app.version,
            "source": self.app.source,
            "install_location": self.app.install_location,
            "uninstall_code": self.uninstall_code,
            "cleanup_attempted": self.cleanup_attempted,
            "cleanup_error": self.cleanup_error,
            "removed_items": self.removed_items,
            "reinstall_code": self.reinstall_code,
            "final_state": self.final_state.value,
        }
