"""Errors raised while analyzing a project. The CLI maps each to exit code 1."""


class AnalyzeError(Exception):
    """Base for every handled failure."""


class PathNotFoundError(AnalyzeError, FileNotFoundError):
    """The path to analyze does not exist on disk."""

    def __init__(self, path):
        super().__init__(f"File does not exist: {path}")
        self.path = path


class ConfigExtractionError(AnalyzeError):
    """ESLint could not be run, or its output could not be parsed."""


class NoConfigurationError(ConfigExtractionError):
    """No ESLint configuration anywhere in the target's ancestry."""


class RuleFetchError(AnalyzeError):
    """None of the configured Biome rule sources could be loaded."""


class ConfigFileError(AnalyzeError):
    """The tool's own YAML config file is invalid."""
