"""CLI entry point — extract ESLint rules, compare to Biome, output clearly."""

import json
import logging
from pathlib import Path

import typer

from . import __version__
from .analyze import analyze_project
from .biome import fetch_biome_rules, find_mapping
from .config import SOURCE_KINDS, Settings, load_settings
from .errors import AnalyzeError, PathNotFoundError
from .format import format_human, format_markdown, format_rules, to_json_dict
from .log import setup_logging

log = logging.getLogger("arewebiomeyet.cli")

app = typer.Typer(help="Compare your ESLint config to Biome's rule catalog.", no_args_is_help=True)


def _err(msg: str) -> None:
    """Raise a styled usage error (red box)."""
    raise typer.BadParameter(msg)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"are-we-biome-yet {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Report how much of a project's ESLint config Biome can take over."""


def _settings(project_dir: Path, config: Path | None, source: str | None) -> Settings:
    settings = load_settings(project_dir, config)
    if source:
        settings.source = source.lower()
    return settings


def _check_source(source: str | None) -> None:
    if source and source.lower() not in SOURCE_KINDS:
        _err(f"Unknown source: {source}\nAvailable: {', '.join(SOURCE_KINDS)}")


def _report_failure(e: Exception) -> None:
    """Log a handled or unknown failure once, then exit 1."""
    if isinstance(e, AnalyzeError):
        log.error("Failed to analyze project: %s", e)
    else:
        log.error("Something went wrong")
        log.error("An unknown error has occurred. Please open an issue on github with the below:")
        log.error("%r", e)
    raise typer.Exit(1)


@app.command("analyze")
def analyze_cmd(
    path: Path = typer.Argument(..., help="File or project root to analyze"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    markdown_out: bool = typer.Option(False, "--markdown", "-m", help="Output as Markdown"),
    file: Path | None = typer.Option(None, "--file", "-f", help="File used for config resolution (relative to PATH)"),
    source: str | None = typer.Option(None, "--source", "-s", help="Rule source: catalog or markdown"),
    rules_only: bool = typer.Option(False, "--rules-only", help="Only list enabled ESLint rules, skip Biome"),
    fail_under: float | None = typer.Option(None, "--fail-under", help="Exit 1 if compatibility rate is below this"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config YAML (default: .are-we-biome-yet.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and rule categories"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """Analyze ESLint rules in a project and check Biome compatibility."""
    _check_source(source)
    if rules_only and fail_under is not None:
        _err("--fail-under needs a compatibility report; drop --rules-only")
    if file is not None and path.is_file():
        _err("--file only applies when PATH is a directory")
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        resolved = path.resolve()
        if not resolved.exists():
            raise PathNotFoundError(resolved)
        project_dir = resolved if resolved.is_dir() else resolved.parent
        settings = _settings(project_dir, config, source)
        result = analyze_project(resolved, file=file, settings=settings, rules_only=rules_only)
    except Exception as e:
        _report_failure(e)

    if json_out:
        typer.echo(json.dumps(to_json_dict(result), indent=2))
    elif markdown_out:
        typer.echo(format_markdown(result))
    elif rules_only and not verbose:
        typer.echo(format_rules(result))
    else:
        typer.echo(format_human(result, verbose=verbose))

    if fail_under is not None and result.report.compatibility_rate < fail_under:
        log.error("Compatibility rate %.1f%% is below %.1f%%", result.report.compatibility_rate, fail_under)
        raise typer.Exit(1)


@app.command("lookup")
def lookup_cmd(
    rule_id: str = typer.Argument(..., help="ESLint rule id, e.g. no-var or @typescript-eslint/no-explicit-any"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    source: str | None = typer.Option(None, "--source", "-s", help="Rule source: catalog or markdown"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config YAML"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """Show the Biome equivalent of a single ESLint rule."""
    _check_source(source)
    setup_logging(quiet=quiet)
    try:
        settings = _settings(Path.cwd(), config, source)
        rules = fetch_biome_rules(settings)
    except Exception as e:
        _report_failure(e)

    mapping = find_mapping(rule_id, rules, settings.plugin_prefixes)
    if json_out:
        typer.echo(json.dumps({
            "eslint": rule_id,
            "biome": mapping.biome_rule if mapping else None,
            "category": mapping.category if mapping else None,
        }, indent=2))
    elif mapping:
        typer.echo(f"{rule_id} → {mapping.biome_rule} ({mapping.category})")
    else:
        typer.echo(f"{rule_id} (no Biome equivalent)")
    if mapping is None:
        raise typer.Exit(1)


def _main() -> None:
    app()


if __name__ == "__main__":
    _main()
