from .apps import AppService
from .catalog import build_catalog, prefix_matches
from .cleanup import Cleaner, DryRunCleaner, make_cleaner
from .inventory import parse_inventory
from .pipeline import PipelineExecutor
from .registry import RegistryReader
from .selector import Selector, wildcard_match

__all__ = [
    "AppService",
    "build_catalog",
    "prefix_matches",
    "Cleaner",
    "DryRunCleaner",
    "make_cleaner",
    "parse_inventory",
    "PipelineExecutor",
    "RegistryReader",
    "Selector",
    "wildcard_match",
]
