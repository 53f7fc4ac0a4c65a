"""ESLint config extraction — run `eslint --print-config`, keep the enabled rules."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any

from .errors import ConfigExtractionError, NoConfigurationError, PathNotFoundError
from .models import Severity

log = logging.getLogger(__name__)

# Flat config (ESLint v9+) before legacy .eslintrc*
FLAT_CONFIG_FILENAMES = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    "eslint.config.ts",
    "eslint.config.mts",
    "eslint.config.cts",
)
LEGACY_CONFIG_FILENAMES = (
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    ".eslintrc",
)
CONFIG_FILENAMES = FLAT_CONFIG_FILENAMES + LEGACY_CONFIG_FILENAMES

DEFAULT_COMMAND = ("npx", "eslint")

NO_CONFIG_MESSAGE = (
    "No ESLint configuration found. Please ensure you have either:\n"
    "  • eslint.config.js (ESLint v9+ flat config)\n"
    "  • .eslintrc.json, .eslintrc.js, or .eslintrc.yml (legacy config)\n"
    f"Accepted filenames: {', '.join(CONFIG_FILENAMES)}\n"
    "\nYou can create a basic config with: npm init @eslint/config"
)


class _PrintConfigFailed(Exception):
    """One --print-config attempt failed; the next tier may still succeed."""


def _print_config(
    file_path: Path,
    cwd: Path,
    legacy: bool,
    command: list[str] | tuple[str, ...],
    timeout: float | None,
) -> dict[str, Any]:
    """Run `<command> --print-config <file>` and parse its JSON output."""
    env = dict(os.environ)
    if legacy:
        env["ESLINT_USE_FLAT_CONFIG"] = "false"
    try:
        result = subprocess.run(
            [*command, "--print-config", str(file_path)],
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
        raise _PrintConfigFailed(f"Command failed: {' '.join(e.cmd)}\n{detail}") from e
    except subprocess.TimeoutExpired as e:
        raise _PrintConfigFailed(f"Command timed out after {e.timeout}s: {' '.join(command)}") from e
    except OSError as e:
        raise _PrintConfigFailed(f"Could not run {command[0]}: {e}") from e
    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise _PrintConfigFailed(f"ESLint printed invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise _PrintConfigFailed("ESLint printed JSON that is not a config object")
    return data


def find_config_in_parents(start_dir: Path) -> tuple[Path, str] | None:
    """Walk from start_dir to the filesystem root. Returns (dir, config filename) or None."""
    current = start_dir.resolve()
    while True:
        for name in CONFIG_FILENAMES:
            if (current / name).is_file():
                return current, name
        if current.parent == current:
            return None
        current = current.parent


def get_eslint_config(
    file_path: Path,
    command: list[str] | tuple[str, ...] = DEFAULT_COMMAND,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Resolved ESLint config for file_path: flat config, then legacy, then ancestor search."""
    file_path = Path(file_path)
    target_dir = file_path.parent
    if not target_dir.is_dir():
        raise PathNotFoundError(target_dir)

    try:
        return _print_config(file_path, target_dir, False, command, timeout)
    except _PrintConfigFailed as e:
        log.debug("Flat config attempt: %s", e)
        log.info("Flat config failed, trying with legacy .eslintrc support...")

    try:
        return _print_config(file_path, target_dir, True, command, timeout)
    except _PrintConfigFailed as e:
        log.debug("Legacy config attempt: %s", e)
        log.info("Legacy config also failed, searching for ESLint config in parent directories...")

    found = find_config_in_parents(target_dir)
    if found is None:
        raise NoConfigurationError(NO_CONFIG_MESSAGE)
    config_dir, config_name = found
    legacy = config_name in LEGACY_CONFIG_FILENAMES
    log.info("Found %s in %s", config_name, config_dir)
    try:
        return _print_config(file_path, config_dir, legacy, command, timeout)
    except _PrintConfigFailed as e:
        raise ConfigExtractionError(f"Failed to get ESLint config: {e}") from e


def parse_rule_severities(config: dict[str, Any]) -> dict[str, Severity]:
    """Map the config's `rules` object to {rule_id: Severity}."""
    rules = config.get("rules")
    if not isinstance(rules, dict):
        return {}
    return {str(rule_id): Severity.parse(value) for rule_id, value in rules.items()}


def extract_enabled_rules(config: dict[str, Any]) -> list[str]:
    """Rule ids set to warn or error, sorted."""
    severities = parse_rule_severities(config)
    return sorted(rule_id for rule_id, sev in severities.items() if sev.enabled)
