"""Tests for Biome rule parsing, fetching and matching."""

import json

import httpx
import pytest

from arewebiomeyet.biome import analyze_compatibility, find_biome_equivalent, strip_plugin_prefix
from arewebiomeyet.biome.catalog import parse_catalog, parse_catalog_data
from arewebiomeyet.biome.fetch import fetch_biome_rules
from arewebiomeyet.biome.markdown import clean_section_name, parse_markdown, parse_table_row
from arewebiomeyet.config import Settings
from arewebiomeyet.errors import RuleFetchError
from arewebiomeyet.models import BiomeRules, RuleMapping

SOURCES_MDX = """\
---
title: Rules sources
---

## Biome exclusive rules
- [noAccumulatingSpread](/linter/rules/no-accumulating-spread)
- [useSortedClasses](/linter/rules/use-sorted-classes)

## Rules from other sources

### JS
| JS Rules name | Biome Rules name |
| ---- | ---- |
| [no-var](https://eslint.org/docs/latest/rules/no-var) |[useVar](/linter/rules/no-var) |
| [no-debugger](https://eslint.org/docs/latest/rules/no-debugger) |[noDebugger](/linter/rules/no-debugger) |
| not a rule | at all |
Some paragraph closes the table.
| [eqeqeq](https://eslint.org/docs/latest/rules/eqeqeq) |[noDoubleEquals](/linter/rules/no-double-equals) |

### eslint-plugin-jsx-a11y
| eslint-plugin-jsx-a11y Rules name | Biome Rules name |
| ---- | ---- |
| [alt-text](https://github.com/x/alt-text.md) |[useAltText](/linter/rules/use-alt-text) |
"""

CATALOG = {
    "lints": {
        "languages": {
            "javascript": {
                "style": {
                    "noVar": {"name": "noVar", "sources": [{"kind": "sameLogic", "source": {"eslint": "no-var"}}]},
                    "useBlockStatements": {
                        "name": "useBlockStatements",
                        "sources": [
                            {"kind": "sameLogic", "source": {"eslint": "curly"}},
                            {"kind": "inspired", "source": {"clippy": "needless_return"}},
                        ],
                    },
                    "useShorthandArrayType": {"name": "useShorthandArrayType", "sources": []},
                },
                "suspicious": {
                    "noExplicitAny": {
                        "name": "noExplicitAny",
                        "sources": [{"kind": "sameLogic", "source": {"eslintTypeScript": "no-explicit-any"}}],
                    },
                    "broken": "not a descriptor",
                    "noWeird": {"name": "noWeird", "sources": ["garbage", {"source": None}]},
                },
            },
            "css": {"correctness": {"noUnknownUnit": {"name": "noUnknownUnit"}}},
        }
    }
}


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


# --- markdown ---------------------------------------------------------------


def test_markdown_row_under_heading():
    """A link row inside an open table under `### JS` maps source -> target."""
    content = "### JS\n| ---- | ---- |\n| [no-var](url) | [useVar](url) |\n"
    rules = parse_markdown(content)
    assert rules.mappings == [RuleMapping("no-var", "useVar", "JS")]


def test_markdown_full_page():
    """Tables, closing lines, header rows and exclusive list are all handled."""
    rules = parse_markdown(SOURCES_MDX, "https://example.test/js.mdx")
    pairs = [(m.eslint_rule, m.biome_rule, m.category) for m in rules.mappings]
    assert ("no-var", "useVar", "JS") in pairs
    assert ("no-debugger", "noDebugger", "JS") in pairs
    assert ("alt-text", "useAltText", "eslint-plugin-jsx-a11y") in pairs
    # closed by the paragraph, so not collected
    assert all(m.eslint_rule != "eqeqeq" for m in rules.mappings)
    assert rules.exclusive_rules == ["noAccumulatingSpread", "useSortedClasses"]
    assert rules.sources == ["https://example.test/js.mdx"]


def test_markdown_rows_outside_table_ignored():
    """Link rows before any table divider are not collected."""
    rules = parse_markdown("### JS\n| [no-var](u) | [useVar](u) |\n")
    assert rules.mappings == []


def test_parse_table_row_skips_header_restatement():
    """Header rows and single-column rows yield no mapping."""
    assert parse_table_row("| [JS Rules name](u) | [Biome Rules name](u) |", "JS") is None
    assert parse_table_row("| [only-one](u) |", "JS") is None


def test_clean_section_name():
    """Section labels drop the 'Rules name' suffix and fall back to ESLint."""
    assert clean_section_name("ESLint Rules name | x") == "ESLint"
    assert clean_section_name("") == "ESLint"
    assert clean_section_name("typescript-eslint") == "typescript-eslint"


# --- catalog ----------------------------------------------------------------


def test_catalog_descriptor_with_source():
    """A descriptor with an eslint source maps to language/category."""
    data = {"languages": {"javascript": {"style": {"noVar": {"name": "noVar", "sources": [{"source": {"eslint": "no-var"}}]}}}}}
    rules = parse_catalog_data(data)
    assert rules.mappings == [RuleMapping("no-var", "noVar", "javascript/style")]
    assert rules.exclusive_rules == []


def test_catalog_descriptor_without_sources_is_exclusive():
    """Empty or absent sources make the rule Biome-exclusive."""
    for descriptor in ({"name": "noVar", "sources": []}, {"name": "noVar"}):
        rules = parse_catalog_data({"languages": {"javascript": {"style": {"noVar": descriptor}}}})
        assert rules.mappings == []
        assert rules.exclusive_rules == ["noVar"]


def test_catalog_full_document():
    """Only ESLint-family sources map; malformed entries are skipped."""
    rules = parse_catalog(json.dumps(CATALOG), "https://example.test/rules.json")
    pairs = {(m.eslint_rule, m.biome_rule, m.category) for m in rules.mappings}
    assert pairs == {
        ("no-var", "noVar", "javascript/style"),
        ("curly", "useBlockStatements", "javascript/style"),
        ("no-explicit-any", "noExplicitAny", "javascript/suspicious"),
    }
    assert set(rules.exclusive_rules) == {"useShorthandArrayType", "noUnknownUnit"}
    assert rules.sources == ["https://example.test/rules.json"]


def test_catalog_invalid_json_raises_value_error():
    """A non-JSON catalog raises ValueError for the fetcher to handle."""
    with pytest.raises(ValueError):
        parse_catalog("<html>not json</html>")


# --- matching ---------------------------------------------------------------


def test_strip_plugin_prefix_once():
    """At most one known prefix is removed; unknown ids are unchanged."""
    assert strip_plugin_prefix("@typescript-eslint/no-explicit-any") == "no-explicit-any"
    assert strip_plugin_prefix("react-hooks/exhaustive-deps") == "exhaustive-deps"
    assert strip_plugin_prefix("import/react/foo") == "react/foo"
    assert strip_plugin_prefix("no-var") == "no-var"
    assert strip_plugin_prefix("unicorn/no-null") == "unicorn/no-null"
    assert strip_plugin_prefix("unicorn/no-null", ["unicorn/"]) == "no-null"


def test_end_to_end_compatibility():
    """One of two rules maps -> 50%."""
    rules = BiomeRules(mappings=[RuleMapping("no-var", "useVar", "JS")])
    report = analyze_compatibility(["no-var", "@typescript-eslint/no-explicit-any"], rules)
    assert [(c.eslint, c.biome) for c in report.compatible] == [("no-var", "useVar")]
    assert report.incompatible == ["@typescript-eslint/no-explicit-any"]
    assert report.compatibility_rate == 50


def test_prefixed_rule_matches_stripped_source():
    """A plugin-prefixed rule matches its bare source id."""
    rules = BiomeRules(mappings=[RuleMapping("no-explicit-any", "noExplicitAny", "javascript/suspicious")])
    report = analyze_compatibility(["@typescript-eslint/no-explicit-any"], rules)
    assert report.compatible[0].biome == "noExplicitAny"
    assert report.compatible[0].category == "javascript/suspicious"


def test_exact_match_beats_stripped_and_first_wins():
    """Exact ids are tried first and the first duplicate entry wins."""
    rules = BiomeRules(mappings=[
        RuleMapping("react/jsx-key", "useJsxKeyInIterable", "A"),
        RuleMapping("jsx-key", "wrong", "B"),
        RuleMapping("react/jsx-key", "duplicate", "C"),
    ])
    assert find_biome_equivalent("react/jsx-key", rules) == "useJsxKeyInIterable"
    assert find_biome_equivalent("missing", rules) is None


def test_empty_rule_set_rate_zero():
    """No enabled rules gives a rate of 0."""
    report = analyze_compatibility([], BiomeRules(mappings=[RuleMapping("a", "b", "c")]))
    assert report.compatibility_rate == 0
    assert report.total == 0


def test_rate_bounds():
    """All-compatible is 100, none-compatible is 0."""
    rules = BiomeRules(mappings=[RuleMapping("a", "A", "x"), RuleMapping("b", "B", "x")])
    assert analyze_compatibility(["a", "b"], rules).compatibility_rate == 100
    assert analyze_compatibility(["c"], rules).compatibility_rate == 0


# --- fetching ---------------------------------------------------------------


def test_fetch_catalog_source():
    """A successful catalog fetch yields its mappings and records the source."""
    def handler(request):
        return httpx.Response(200, json=CATALOG)

    rules = fetch_biome_rules(Settings(catalog_urls=["https://example.test/rules.json"]), _client(handler))
    assert len(rules.mappings) == 3
    assert rules.sources == ["https://example.test/rules.json"]


def test_fetch_partial_failure_proceeds():
    """One markdown page down: the others still load."""
    def handler(request):
        if request.url.path.endswith("css.mdx"):
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, text=SOURCES_MDX)

    settings = Settings(
        source="markdown",
        markdown_urls=["https://example.test/css.mdx", "https://example.test/js.mdx"],
    )
    rules = fetch_biome_rules(settings, _client(handler))
    assert rules.sources == ["https://example.test/js.mdx"]
    assert any(m.eslint_rule == "no-var" for m in rules.mappings)


def test_fetch_all_sources_fail():
    """Every source returning an HTTP error raises RuleFetchError."""
    def handler(request):
        return httpx.Response(500, text="boom")

    settings = Settings(source="markdown", markdown_urls=["https://example.test/a", "https://example.test/b"])
    with pytest.raises(RuleFetchError):
        fetch_biome_rules(settings, _client(handler))


def test_fetch_transport_error_is_skipped():
    """A connection error skips that source and keeps the rest."""
    def handler(request):
        if request.url.host == "down.test":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=CATALOG)

    settings = Settings(catalog_urls=["https://down.test/rules.json", "https://example.test/rules.json"])
    rules = fetch_biome_rules(settings, _client(handler))
    assert rules.sources == ["https://example.test/rules.json"]


def test_fetch_unparsable_sole_source_fails():
    """A sole source that cannot be parsed raises RuleFetchError."""
    def handler(request):
        return httpx.Response(200, text="<html></html>")

    with pytest.raises(RuleFetchError):
        fetch_biome_rules(Settings(catalog_urls=["https://example.test/rules.json"]), _client(handler))
