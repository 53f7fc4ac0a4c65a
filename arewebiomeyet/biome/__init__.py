"""Biome rule catalog — fetch, parse, match."""

from .fetch import PARSERS, fetch_biome_rules
from .matcher import analyze_compatibility, find_biome_equivalent, find_mapping, strip_plugin_prefix

__all__ = [
    "PARSERS",
    "fetch_biome_rules",
    "analyze_compatibility",
    "find_biome_equivalent",
    "find_mapping",
    "strip_plugin_prefix",
]
