import re
from typing import List
from ..domain.models import FiveColumnRow, FourColumnRow, InventoryRecord, MalformedRow, ParsedRow

HEADER_LINES = 2

_COLUMN_SPLIT = re.compile(r"\s{2,}")
_SEPARATOR = re.compile(r"-{3,}")
# winget draws a spinner (\ | / -) before the table while it loads sources
_SPINNER = re.compile(r"[\s\\|/\-]*")

def split_columns(line: str) -> List[str]:
    return [c for c in _COLUMN_SPLIT.split(line.strip()) if c]

def is_separator(line: str) -> bool:
    return bool(_SEPARATOR.fullmatch(line.strip()))

def classify_line(line: str) -> ParsedRow:
    """
    4 columns: Name, Id, Version, Source.
    5 columns: Name, Id, Version, Available, Source (Available is dropped).
    Anything else is malformed; names containing double spaces end up here too.
    """
    cols = split_columns(line)
    if len(cols) == 4:
        name, pid, version, source = cols
        return FourColumnRow(InventoryRecord(name, pid, version, source))
    if len(cols) == 5:
        name, pid, version, available, source = cols
        return FiveColumnRow(InventoryRecord(name, pid, version, source), available)
    return MalformedRow(line, len(cols))

def _table_lines(text: str) -> List[str]:
    lines = [ln.rstrip("\r").split("\r")[-1] for ln in (text or "").split("\n")]
    start = 0
    while start < len(lines) and _SPINNER.fullmatch(lines[start]) and not is_separator(lines[start]):
        start += 1
    return lines[start + HEADER_LINES:]

def parse_rows(text: str) -> List[ParsedRow]:
    rows: List[ParsedRow] = []
    for line in _table_lines(text):
        if not line.strip() or is_separator(line):
            continue
        rows.append(classify_line(line))
    return rows

def parse_inventory(text: str) -> List[InventoryRecord]:
    """Records from a `winget list` table, unique by identifier (first wins)."""
    seen = set()
    records: List[InventoryRecord] = []
    for row in parse_rows(text):
        if isinstance(row, MalformedRow):
            continue
        rec = row.record
        if rec.identifier in seen:
            continue
        seen.add(rec.identifier)
        records.append(rec)
    return records
