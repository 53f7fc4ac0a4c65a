"""Pipeline — resolve target file, extract ESLint rules, match against Biome."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .biome import analyze_compatibility, fetch_biome_rules
from .config import Settings
from .errors import PathNotFoundError
from .eslint import CONFIG_FILENAMES, extract_enabled_rules, get_eslint_config
from .models import AnalysisResult

log = logging.getLogger(__name__)

LINTABLE_SUFFIXES = {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"}
SKIP_PARTS = {"node_modules", ".git", "dist", "build", "coverage"}
PREFERRED_DIRS = ("src", "lib", "app")
FALLBACK_FILENAME = "index.js"  # --print-config accepts a path that does not exist


def _is_source_file(name: str) -> bool:
    """Lintable source, not a dotfile or tooling config (vite.config.ts, .prettierrc.cjs)."""
    if Path(name).suffix not in LINTABLE_SUFFIXES or name.startswith("."):
        return False
    return name not in CONFIG_FILENAMES and ".config." not in name


def _dir_order(p: Path) -> tuple[int, str]:
    return (PREFERRED_DIRS.index(p.name) if p.name in PREFERRED_DIRS else len(PREFERRED_DIRS), p.name)


def _find_lintable_file(root: Path) -> Path | None:
    """Shallowest source file under root, one directory level at a time; src/ before others."""
    level = [root]
    while level:
        subdirs: list[Path] = []
        for directory in level:
            try:
                entries = sorted(directory.iterdir(), key=lambda p: p.name)
            except OSError:
                continue
            for p in entries:
                if p.is_file() and _is_source_file(p.name):
                    return p
            subdirs.extend(
                sorted(
                    (p for p in entries
                     if p.is_dir() and not p.is_symlink() and not p.name.startswith(".") and p.name not in SKIP_PARTS),
                    key=_dir_order,
                )
            )
        level = subdirs
    return None


def resolve_target(path: str | Path, file: str | Path | None = None) -> Path:
    """File whose effective ESLint config represents the project at path."""
    path = Path(path).resolve()
    if not path.exists():
        raise PathNotFoundError(path)
    if path.is_file():
        if file is not None:
            log.warning("Ignoring --file %s: %s is already a file", file, path)
        return path
    if file is not None:
        target = (path / file).resolve()
        if not target.is_file():
            raise PathNotFoundError(target)
        return target
    found = _find_lintable_file(path)
    if found is not None:
        log.debug("Using %s for config resolution", found)
        return found
    return path / FALLBACK_FILENAME


def analyze_project(
    path: str | Path,
    file: str | Path | None = None,
    settings: Settings | None = None,
    rules_only: bool = False,
    client: httpx.Client | None = None,
) -> AnalysisResult:
    """Run the full analysis. Nothing is spawned or fetched if the path is missing."""
    settings = settings or Settings()
    target = resolve_target(path, file)
    log.info("Analyzing ESLint rules for: %s", target)

    config = get_eslint_config(target, settings.eslint_command, settings.eslint_timeout)
    eslint_rules = extract_enabled_rules(config)
    log.info("Found %d enabled ESLint rules", len(eslint_rules))
    if rules_only:
        return AnalysisResult(target=target, eslint_rules=eslint_rules)

    log.info("Fetching Biome rule mappings...")
    biome_rules = fetch_biome_rules(settings, client)
    report = analyze_compatibility(eslint_rules, biome_rules, settings.plugin_prefixes)
    return AnalysisResult(target=target, eslint_rules=eslint_rules, biome_rules=biome_rules, report=report)
