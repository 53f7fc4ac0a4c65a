"""Tool settings — defaults, optionally overridden by a YAML file in the project."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigFileError

CATALOG_URLS = ["https://biomejs.dev/metadata/rules.json"]

MARKDOWN_URLS = [
    "https://raw.githubusercontent.com/biomejs/website/refs/heads/main/src/content/docs/linter/css/sources.mdx",
    "https://raw.githubusercontent.com/biomejs/website/refs/heads/main/src/content/docs/linter/javascript/sources.mdx",
    "https://raw.githubusercontent.com/biomejs/website/refs/heads/main/src/content/docs/linter/json/sources.mdx",
]

SOURCE_KINDS = ("catalog", "markdown")

CONFIG_FILENAMES = (".are-we-biome-yet.yaml", ".are-we-biome-yet.yml", "are-we-biome-yet.yaml")


@dataclass
class Settings:
    source: str = "catalog"
    catalog_urls: list[str] = field(default_factory=lambda: list(CATALOG_URLS))
    markdown_urls: list[str] = field(default_factory=lambda: list(MARKDOWN_URLS))
    plugin_prefixes: list[str] = field(default_factory=list)  # appended after the built-in ones
    eslint_command: list[str] = field(default_factory=lambda: ["npx", "eslint"])
    eslint_timeout: float | None = None
    http_timeout: float = 30.0

    @property
    def urls(self) -> list[str]:
        """URLs for the selected source kind."""
        return self.markdown_urls if self.source == "markdown" else self.catalog_urls


def _str_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigFileError(f"'{key}' must be a string or a list of strings")
    return list(value)


def find_config_file(project_dir: Path) -> Path | None:
    """First known config filename present in project_dir."""
    for name in CONFIG_FILENAMES:
        p = project_dir / name
        if p.is_file():
            return p
    return None


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build Settings from a parsed YAML mapping. Unknown keys are ignored."""
    settings = Settings()
    if "source" in data:
        source = str(data["source"]).lower()
        if source not in SOURCE_KINDS:
            raise ConfigFileError(f"'source' must be one of {', '.join(SOURCE_KINDS)}, got {data['source']!r}")
        settings.source = source
    if "catalog_urls" in data:
        settings.catalog_urls = _str_list(data["catalog_urls"], "catalog_urls")
    if "markdown_urls" in data:
        settings.markdown_urls = _str_list(data["markdown_urls"], "markdown_urls")
    if "plugin_prefixes" in data:
        settings.plugin_prefixes = _str_list(data["plugin_prefixes"], "plugin_prefixes")
    if "eslint_command" in data:
        cmd = data["eslint_command"]
        settings.eslint_command = shlex.split(cmd) if isinstance(cmd, str) else _str_list(cmd, "eslint_command")
        if not settings.eslint_command:
            raise ConfigFileError("'eslint_command' must not be empty")
    try:
        if data.get("eslint_timeout") is not None:
            settings.eslint_timeout = float(data["eslint_timeout"])
        if data.get("http_timeout") is not None:
            settings.http_timeout = float(data["http_timeout"])
    except (TypeError, ValueError) as e:
        raise ConfigFileError(f"Invalid timeout: {e}") from e
    return settings


def load_settings(project_dir: Path, config_path: Path | None = None) -> Settings:
    """Load settings from config_path, or from a config file found in project_dir."""
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigFileError(f"Config file not found: {config_path}")
        path = config_path
    else:
        path = find_config_file(project_dir)
        if path is None:
            return Settings()
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigFileError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigFileError(f"{path} must contain a mapping of settings")
    return settings_from_dict(data)
