"""Parser for Biome's structured rules catalog (metadata/rules.json)."""

from __future__ import annotations

import json
from typing import Any

from ..models import BiomeRules, RuleMapping


def _eslint_sources(descriptor: dict[str, Any]) -> list[str]:
    """ESLint-family rule ids listed in a descriptor's `sources`."""
    out: list[str] = []
    for entry in descriptor.get("sources") or []:
        if not isinstance(entry, dict):
            continue
        source = entry.get("source")
        if not isinstance(source, dict):
            continue
        for tool, rule_id in source.items():
            if str(tool).lower().startswith("eslint") and isinstance(rule_id, str) and rule_id:
                out.append(rule_id)
    return out


def _languages(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    lints = data.get("lints")
    if isinstance(lints, dict) and isinstance(lints.get("languages"), dict):
        return lints["languages"]
    languages = data.get("languages")
    return languages if isinstance(languages, dict) else {}


def parse_catalog_data(data: Any, source: str = "") -> BiomeRules:
    """Walk language -> category -> rule -> descriptor. Malformed entries are skipped."""
    mappings: list[RuleMapping] = []
    exclusive: list[str] = []
    for language, categories in _languages(data).items():
        if not isinstance(categories, dict):
            continue
        for category, rules in categories.items():
            if not isinstance(rules, dict):
                continue
            label = f"{language}/{category}"
            for key, descriptor in rules.items():
                if not isinstance(descriptor, dict):
                    continue
                biome_rule = descriptor.get("name") or key
                if not isinstance(biome_rule, str):
                    continue
                if not descriptor.get("sources"):
                    exclusive.append(biome_rule)
                    continue
                for eslint_rule in _eslint_sources(descriptor):
                    mappings.append(RuleMapping(eslint_rule, biome_rule, label))
    return BiomeRules(mappings=mappings, exclusive_rules=exclusive, sources=[source] if source else [])


def parse_catalog(content: str, source: str = "") -> BiomeRules:
    """Parse catalog JSON text. Raises ValueError if the document is not JSON."""
    return parse_catalog_data(json.loads(content), source)
