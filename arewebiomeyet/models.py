"""Structured values passed between the extractor, mapper and formatters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class Severity(str, Enum):
    OFF = "off"
    WARN = "warn"
    ERROR = "error"

    @property
    def enabled(self) -> bool:
        return self is not Severity.OFF

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Parse an ESLint severity: 0/1/2, "off"/"warn"/"error", or [severity, ...options]."""
        if isinstance(value, (list, tuple)):
            if not value:
                return cls.OFF
            value = value[0]
        if isinstance(value, (int, float)):
            if value <= 0:
                return cls.OFF
            return cls.WARN if value == 1 else cls.ERROR
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("off", "0"):
                return cls.OFF
            if s in ("warn", "1"):
                return cls.WARN
            return cls.ERROR
        return cls.OFF


@dataclass(frozen=True)
class RuleMapping:
    """One documented ESLint -> Biome equivalence."""

    eslint_rule: str
    biome_rule: str
    category: str  # "javascript/style" (catalog) or the markdown section heading


@dataclass
class BiomeRules:
    """Normalized mapping table, independent of which parser built it."""

    mappings: list[RuleMapping] = field(default_factory=list)
    exclusive_rules: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)

    def extend(self, other: "BiomeRules") -> None:
        self.mappings.extend(other.mappings)
        self.exclusive_rules.extend(other.exclusive_rules)
        self.sources.extend(other.sources)


@dataclass(frozen=True)
class CompatibleRule:
    eslint: str
    biome: str
    category: str

    def to_dict(self) -> dict:
        return {"eslint": self.eslint, "biome": self.biome, "category": self.category}


@dataclass
class CompatibilityReport:
    compatible: list[CompatibleRule] = field(default_factory=list)
    incompatible: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.compatible) + len(self.incompatible)

    @property
    def compatibility_rate(self) -> float:
        if self.total == 0:
            return 0
        return len(self.compatible) / self.total * 100

    def to_dict(self) -> dict:
        return {
            "compatible": [c.to_dict() for c in self.compatible],
            "incompatible": list(self.incompatible),
            "compatibilityRate": self.compatibility_rate,
        }


@dataclass
class AnalysisResult:
    """Everything one run produced. Biome fields are None in rules-only mode."""

    target: Path
    eslint_rules: list[str]
    biome_rules: Optional[BiomeRules] = None
    report: Optional[CompatibilityReport] = None
