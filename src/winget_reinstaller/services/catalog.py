from typing import Dict, Iterable, List, Optional
from ..domain.models import AppRecord, InventoryRecord, SystemInventoryRecord

PREFIX_BOUNDARY = "-("

def prefix_matches(name: str, display_name: str) -> bool:
    """
    True when display_name is name followed by end of string, whitespace, '-'
    or '('. "7-Zip" matches "7-Zip 22.00"; "Git" does not match "GitKraken".
    """
    if not name or not display_name.startswith(name):
        return False
    rest = display_name[len(name):]
    return rest == "" or rest[0].isspace() or rest[0] in PREFIX_BOUNDARY

def find_system_record(name: str, system: List[SystemInventoryRecord],
                       exact: Optional[Dict[str, SystemInventoryRecord]] = None) -> Optional[SystemInventoryRecord]:
    if exact is None:
        exact = _exact_index(system)
    hit = exact.get(name)
    if hit is not None:
        return hit
    for rec in system:
        if prefix_matches(name, rec.display_name):
            return rec
    return None

def _exact_index(system: Iterable[SystemInventoryRecord]) -> Dict[str, SystemInventoryRecord]:
    idx: Dict[str, SystemInventoryRecord] = {}
    for rec in system:
        idx.setdefault(rec.display_name, rec)
    return idx

def make_app(inv: InventoryRecord, sysrec: Optional[SystemInventoryRecord]) -> AppRecord:
    if sysrec is None:
        return AppRecord(inv.name, inv.identifier, inv.version, inv.source)
    return AppRecord(
        name=inv.name,
        identifier=inv.identifier,
        version=sysrec.display_version or inv.version,
        source=inv.source,
        install_location=sysrec.install_location,
        publisher=sysrec.publisher,
        source_key=sysrec.source_key,
    )

def build_catalog(inventory: List[InventoryRecord], system: List[SystemInventoryRecord]) -> List[AppRecord]:
    """One AppRecord per inventory record, in inventory order."""
    exact = _exact_index(system)
    return [make_app(inv, find_system_record(inv.name, system, exact)) for inv in inventory]
