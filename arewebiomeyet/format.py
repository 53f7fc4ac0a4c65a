"""Output formatting — terminal box layout, Markdown, JSON."""

import shutil
from typing import List

import click

from .models import AnalysisResult


def _get_width() -> int:
    try:
        return min(72, shutil.get_terminal_size((72, 24)).columns)
    except OSError:
        return 72


def _wrap(text: str, indent: int = 0, width: int = 72) -> List[str]:
    """Wrap text to width, first line has indent, following lines +2."""
    prefix = " " * indent
    extra = "  "
    lines = []
    rest = text
    first = True
    while rest:
        max_len = width - (indent if first else indent + len(extra))
        if len(rest) <= max_len:
            lines.append(prefix + rest)
            break
        break_at = rest.rfind(" ", 0, max_len + 1)
        if break_at <= 0:
            break_at = max_len
        chunk = rest[:break_at].strip()
        rest = rest[break_at:].strip()
        lines.append(prefix + chunk)
        prefix = " " * indent + extra
        first = False
    return lines


def _rate_color(rate: float) -> str:
    if rate >= 90:
        return "green"
    if rate >= 50:
        return "yellow"
    return "red"


def to_json_dict(result: AnalysisResult):
    """Bare sorted rule list in rules-only mode, full report otherwise."""
    if result.report is None:
        return list(result.eslint_rules)
    return {
        "eslintRules": list(result.eslint_rules),
        "totalRules": len(result.eslint_rules),
        "biomeCompatibility": result.report.to_dict(),
    }


def format_rules(result: AnalysisResult) -> str:
    return "\n".join(result.eslint_rules)


def format_human(result: AnalysisResult, verbose: bool = False) -> str:
    """Build the human terminal output as a single string."""
    width = _get_width()
    report = result.report
    lines = []

    lines.append("┌" + "─" * (width - 2) + "┐")
    lines.append(" are-we-biome-yet · Biome compatibility")
    lines.append(click.style(f" {result.target}", dim=True))
    lines.append("─" * width)

    if verbose or report is None:
        lines.append(f" ESLINT RULES ({len(result.eslint_rules)} enabled)")
        for rule in result.eslint_rules:
            lines.append(f"  {rule}")
        lines.append("─" * width)

    if report is None:
        lines.append("└" + "─" * (width - 2) + "┘")
        return "\n".join(lines)

    rate = report.compatibility_rate
    lines.append(click.style(f" Compatibility Rate  {rate:.1f}%", fg=_rate_color(rate), bold=True))
    lines.append(click.style(f" Compatible Rules    {len(report.compatible)}/{len(result.eslint_rules)}", dim=True))
    lines.append("─" * width)

    if report.compatible:
        lines.append(" COMPATIBLE RULES")
        for c in report.compatible:
            text = f"● {c.eslint} → {c.biome}"
            if verbose:
                text = f"{text} [{c.category}]"
            for ln in _wrap(text, indent=2, width=width):
                lines.append(click.style(ln, fg="green"))
    if report.incompatible:
        lines.append(" INCOMPATIBLE RULES")
        for rule in report.incompatible:
            for ln in _wrap(f"○ {rule} (no Biome equivalent)", indent=2, width=width):
                lines.append(click.style(ln, fg="red"))
    if not result.eslint_rules:
        lines.append(" No enabled ESLint rules found.")

    lines.append("─" * width)
    lines.append(" SUMMARY")
    lines.append(f"  • {len(report.compatible)} rules have Biome equivalents")
    lines.append(f"  • {len(report.incompatible)} rules need alternative solutions")
    exclusive = len(result.biome_rules.exclusive_rules) if result.biome_rules else 0
    lines.append(f"  • {exclusive} Biome-exclusive rules available")
    lines.append("─" * width)
    footer = " Run with --json for machine output  ·  --markdown for PRs"
    if len(footer) > width:
        footer = " --json  ·  --markdown  ·  --help"
    lines.append(click.style(footer, dim=True))
    lines.append("└" + "─" * (width - 2) + "┘")

    return "\n".join(lines)


def format_markdown(result: AnalysisResult) -> str:
    """Markdown output for docs/PRs."""
    report = result.report
    lines = [f"# are-we-biome-yet: {result.target}", ""]
    if report is None:
        lines.append(f"## ESLint rules ({len(result.eslint_rules)} enabled)")
        lines.extend(f"- `{rule}`" for rule in result.eslint_rules)
        return "\n".join(lines)

    lines.append(f"**Biome compatibility: {report.compatibility_rate:.1f}%** "
                 f"({len(report.compatible)}/{len(result.eslint_rules)} rules)")
    lines.append("")
    if report.compatible:
        lines.append("## Compatible rules")
        lines.append("")
        lines.append("| ESLint | Biome | Category |")
        lines.append("| ---- | ---- | ---- |")
        for c in report.compatible:
            lines.append(f"| `{c.eslint}` | `{c.biome}` | {c.category} |")
        lines.append("")
    if report.incompatible:
        lines.append("## Incompatible rules")
        lines.append("")
        lines.extend(f"- `{rule}`" for rule in report.incompatible)
        lines.append("")
    exclusive = len(result.biome_rules.exclusive_rules) if result.biome_rules else 0
    lines.append(f"---\n{len(report.incompatible)} rule(s) need alternative solutions. "
                 f"{exclusive} Biome-exclusive rules available.")
    return "\n".join(lines)
