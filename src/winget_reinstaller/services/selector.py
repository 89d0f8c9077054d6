import re
from typing import Callable, List, Optional, Sequence
from ..core.console import Console
from ..domain.models import AppRecord

STORE_SOURCE = "msstore"

Picker = Callable[[List[AppRecord]], List[AppRecord]]

def wildcard_match(pattern: str, name: str) -> bool:
    """Case-insensitive shell-style match; only * and ? are special."""
    rx = "".join(".*" if ch == "*" else "." if ch == "?" else re.escape(ch) for ch in pattern)
    return re.fullmatch(rx, name, flags=re.IGNORECASE | re.DOTALL) is not None

def sort_by_name(apps: Sequence[AppRecord]) -> List[AppRecord]:
    return sorted(apps, key=lambda a: (a.name.casefold(), a.name, a.identifier))

class Selector:
    def __init__(self, console: Console, store_source: str = STORE_SOURCE):
        self.console = console
        self.store_source = store_source

    def filter_store(self, catalog: Sequence[AppRecord], include_store: bool) -> List[AppRecord]:
        if include_store:
            return list(catalog)
        kept = [a for a in catalog if a.source != self.store_source]
        dropped = len(catalog) - len(kept)
        if dropped:
            self.console.debug(f"Excluded {dropped} {self.store_source} package(s); use --include-store to keep them.")
        return kept

    def by_ids(self, candidates: Sequence[AppRecord], ids: Sequence[str]) -> List[AppRecord]:
        index = {}
        for a in candidates:
            index.setdefault(a.identifier, a)
        picked: List[AppRecord] = []
        for pid in ids:
            app = index.get(pid)
            if app is None:
                self.console.warn(f"No installed package with id '{pid}'.")
                continue
            if app not in picked:
                picked.append(app)
        return picked

    def by_names(self, candidates: Sequence[AppRecord], names: Sequence[str]) -> List[AppRecord]:
        picked: List[AppRecord] = []
        for pattern in names:
            hits = sort_by_name([a for a in candidates if wildcard_match(pattern, a.name)])
            if not hits:
                self.console.warn(f"No installed package matches '{pattern}'.")
                continue
            if len(hits) > 1:
                self.console.info(f"'{pattern}' matches {len(hits)} packages; using {hits[0].name}.")
            if hits[0] not in picked:
                picked.append(hits[0])
        return picked

    def resolve(self, catalog: Sequence[AppRecord], ids: Optional[Sequence[str]] = None,
                names: Optional[Sequence[str]] = None, include_store: bool = False,
                picker: Optional[Picker] = None) -> List[AppRecord]:
        """
        Exactly one mode runs: ids, else names, else the interactive picker.
        Unmatched ids/names are warned about and skipped.
        """
        candidates = self.filter_store(catalog, include_store)
        if ids:
            if names:
                self.console.debug("Both ids and names given; names are ignored.")
            return self.by_ids(candidates, ids)
        if names:
            return self.by_names(candidates, names)
        if picker is None:
            self.console.warn("No ids, names or picker given.")
            return []
        return list(picker(sort_by_name(candidates)))
