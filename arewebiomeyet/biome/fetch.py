"""Fetch Biome rule sources and parse them into one mapping table."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import httpx

from ..config import Settings
from ..errors import RuleFetchError
from ..models import BiomeRules
from .catalog import parse_catalog
from .markdown import parse_markdown

log = logging.getLogger(__name__)

Parser = Callable[[str, str], BiomeRules]

# Settings.source -> parser; each returns the same BiomeRules table
PARSERS: dict[str, Parser] = {
    "catalog": parse_catalog,
    "markdown": parse_markdown,
}


def fetch_document(client: httpx.Client, url: str) -> str | None:
    """GET url. Non-success status or transport error -> warning and None."""
    log.info("Fetching Biome rules from: %s", url)
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        log.warning("Failed to fetch %s: %s", url, e)
        return None
    if not response.is_success:
        log.warning("Failed to fetch %s: %s %s", url, response.status_code, response.reason_phrase)
        return None
    return response.text


def load_rules_from(client: httpx.Client, urls: Iterable[str], parser: Parser) -> BiomeRules:
    """Fetch each url in turn and merge what parses. Raises RuleFetchError if nothing did."""
    urls = list(urls)
    merged = BiomeRules()
    loaded = 0
    for url in urls:
        content = fetch_document(client, url)
        if content is None:
            continue
        try:
            merged.extend(parser(content, url))
        except ValueError as e:
            log.warning("Could not parse %s: %s", url, e)
            continue
        loaded += 1
    if loaded == 0:
        if not urls:
            raise RuleFetchError("No Biome rule sources configured")
        raise RuleFetchError(f"Failed to fetch Biome rules: none of {len(urls)} source(s) could be loaded")
    log.info("Found %d ESLint → Biome rule mappings", len(merged.mappings))
    return merged


def fetch_biome_rules(settings: Settings, client: httpx.Client | None = None) -> BiomeRules:
    """Load the rule table for settings.source. A client may be passed in (tests, reuse)."""
    parser = PARSERS[settings.source]
    if client is not None:
        return load_rules_from(client, settings.urls, parser)
    with httpx.Client(timeout=settings.http_timeout, follow_redirects=True) as own_client:
        return load_rules_from(own_client, settings.urls, parser)
