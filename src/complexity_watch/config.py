"""Configuration for complexity-watch."""

import os
from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["text", "json"]

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _split_patterns(value: str | None) -> list[str]:
    if not value:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


@dataclass
class AnalysisConfig:
    """Configuration for what is analyzed and what is reported."""

    threshold: int = 0
    language: str | None = None
    ignore_patterns: list[str] = field(default_factory=list)
    recursive: bool = False
    include_boolean_operators: bool = True

    def __post_init__(self):
        """Validate and normalize settings."""
        self.threshold = self.validate_threshold(self.threshold)
        if self.language is not None:
            self.language = self.language.strip().lower() or None

    @staticmethod
    def validate_threshold(threshold: int) -> int:
        """
        Validate the minimum complexity a function needs to be reported.

        Args:
            threshold: Threshold to validate

        Returns:
            The threshold as an int

        Raises:
            ValueError: If the threshold is negative or not an integer
        """
        try:
            value = int(threshold)
        except (TypeError, ValueError):
            raise ValueError(f"Complexity threshold must be an integer, got {threshold!r}")

        if value < 0:
            raise ValueError("Complexity threshold cannot be negative")

        return value

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Create configuration from environment variables."""
        return cls(
            threshold=os.getenv("COMPLEXITY_THRESHOLD", "0"),
            language=os.getenv("COMPLEXITY_LANGUAGE"),
            ignore_patterns=_split_patterns(os.getenv("COMPLEXITY_IGNORE")),
            recursive=_env_flag("COMPLEXITY_RECURSIVE", False),
            include_boolean_operators=_env_flag("COMPLEXITY_BOOLEAN_OPERATORS", True),
        )


@dataclass
class OutputConfig:
    """Configuration for report rendering."""

    format: OutputFormat = "text"
    verbose: bool = False

    def __post_init__(self):
        """Validate output format."""
        self.format = self.format.strip().lower()
        if self.format not in ("text", "json"):
            raise ValueError(f"Unsupported output format: {self.format} (expected text or json)")

    @classmethod
    def from_env(cls) -> "OutputConfig":
        """Create configuration from environment variables."""
        return cls(
            format=os.getenv("COMPLEXITY_FORMAT", "text"),
            verbose=_env_flag("COMPLEXITY_VERBOSE", False),
        )


@dataclass
class ComplexityWatchConfig:
    """Main configuration for complexity-watch."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_env(cls) -> "ComplexityWatchConfig":
        """Create configuration from environment variables."""
        return cls(
            analysis=AnalysisConfig.from_env(),
            output=OutputConfig.from_env(),
        )
