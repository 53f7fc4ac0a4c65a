"""Parser for the `sources.mdx` pages of the Biome website.

The pages list, per upstream linter, a two-column table of
`| [eslint-rule](url) | [biomeRule](url) |` rows under a `### <linter>` heading,
followed by a `## Biome exclusive rules` bullet list.
"""

from __future__ import annotations

import re

from ..models import BiomeRules, RuleMapping

TABLE_DIVIDER = "| ---- | ---- |"
EXCLUSIVE_HEADING = "## Biome exclusive rules"
HEADER_MARKER = "Rules name"

_LINK_RE = re.compile(r"\[([^\]]+)\]\(")
_NAME_RE = re.compile(r"\[([^\]]+)\]")


def clean_section_name(section: str) -> str:
    """'ESLint | Rules name' -> 'ESLint'. Empty falls back to 'ESLint'."""
    cleaned = re.sub(r"Rules name.*$", "", section, flags=re.IGNORECASE)
    return cleaned.replace("|", "").strip() or "ESLint"


def parse_table_row(line: str, section: str) -> RuleMapping | None:
    """Mapping from a row holding two markdown links, else None."""
    columns = [c.strip() for c in line.split("|")]
    columns = [c for c in columns if c]
    if len(columns) < 2:
        return None
    eslint_match = _LINK_RE.search(columns[0])
    biome_match = _LINK_RE.search(columns[1])
    if not eslint_match or not biome_match:
        return None
    eslint_rule = eslint_match.group(1).strip()
    biome_rule = biome_match.group(1).strip()
    if not eslint_rule or not biome_rule:
        return None
    if HEADER_MARKER in eslint_rule or HEADER_MARKER in biome_rule:
        return None
    return RuleMapping(eslint_rule, biome_rule, clean_section_name(section))


def parse_markdown(content: str, source: str = "") -> BiomeRules:
    """Scan the page line by line; a bad row is dropped, never fatal."""
    mappings: list[RuleMapping] = []
    exclusive: list[str] = []
    section = ""
    in_table = False
    in_exclusive = False

    for raw in content.splitlines():
        line = raw.strip()

        if line.startswith(EXCLUSIVE_HEADING):
            in_exclusive = True
            in_table = False
            continue
        if line.startswith("## "):
            in_exclusive = False
            in_table = False
            continue
        if in_exclusive:
            if line.startswith("- ["):
                m = _NAME_RE.search(line)
                if m:
                    exclusive.append(m.group(1))
            continue

        if line.startswith("### "):
            section = line[4:].strip()
            in_table = False
            continue
        if TABLE_DIVIDER in line:
            in_table = True
            continue
        if in_table and "|" in line and "[" in line and "](" in line:
            mapping = parse_table_row(line, section)
            if mapping:
                mappings.append(mapping)
        elif in_table and "|" not in line and line:
            in_table = False

    return BiomeRules(mappings=mappings, exclusive_rules=exclusive, sources=[source] if source else [])
