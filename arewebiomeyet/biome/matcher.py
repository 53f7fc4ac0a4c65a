"""Match ESLint rule ids against the Biome mapping table."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..models import BiomeRules, CompatibilityReport, CompatibleRule, RuleMapping

# Order matters: first matching prefix is stripped, and only that one
PLUGIN_PREFIXES = (
    "@typescript-eslint/",
    "@next/next/",
    "@tanstack/query/",
    "react/",
    "react-hooks/",
    "import/",
    "jsx-a11y/",
    "drizzle/",
    "turbo/",
    "prettier/",
    "simple-import-sort/",
    "prefer-function-component/",
)


def strip_plugin_prefix(rule_id: str, extra_prefixes: Sequence[str] = ()) -> str:
    """'react-hooks/exhaustive-deps' -> 'exhaustive-deps'. Unknown prefixes are kept."""
    for prefix in (*PLUGIN_PREFIXES, *extra_prefixes):
        if prefix and rule_id.startswith(prefix):
            return rule_id[len(prefix):]
    return rule_id


def _index(mappings: Iterable[RuleMapping]) -> dict[str, RuleMapping]:
    index: dict[str, RuleMapping] = {}
    for m in mappings:
        index.setdefault(m.eslint_rule, m)  # first wins
    return index


def _lookup(index: dict[str, RuleMapping], rule_id: str, extra_prefixes: Sequence[str]) -> RuleMapping | None:
    mapping = index.get(rule_id)
    if mapping is not None:
        return mapping
    stripped = strip_plugin_prefix(rule_id, extra_prefixes)
    if stripped != rule_id:
        return index.get(stripped)
    return None


def find_mapping(rule_id: str, rules: BiomeRules, extra_prefixes: Sequence[str] = ()) -> RuleMapping | None:
    """Exact match first, then retry once with the plugin prefix stripped."""
    return _lookup(_index(rules.mappings), rule_id, extra_prefixes)


def find_biome_equivalent(rule_id: str, rules: BiomeRules, extra_prefixes: Sequence[str] = ()) -> str | None:
    mapping = find_mapping(rule_id, rules, extra_prefixes)
    return mapping.biome_rule if mapping else None


def analyze_compatibility(
    eslint_rules: Iterable[str],
    rules: BiomeRules,
    extra_prefixes: Sequence[str] = (),
) -> CompatibilityReport:
    """Split eslint_rules into compatible (with Biome target) and incompatible, in input order."""
    index = _index(rules.mappings)
    report = CompatibilityReport()
    for rule_id in eslint_rules:
        mapping = _lookup(index, rule_id, extra_prefixes)
        if mapping is None:
            report.incompatible.append(rule_id)
        else:
            report.compatible.append(CompatibleRule(rule_id, mapping.biome_rule, mapping.category))
    return report
