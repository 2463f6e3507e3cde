"""Data models for cognitive complexity analysis results.

Provides consistent data structures for function units, complexity factors
and per-function results across the supported languages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class IncrementKind(Enum):
    """Categories of cognitive complexity increments."""

    STRUCTURAL = "structural"  # +1 for a control-flow construct
    NESTING = "nesting"  # +depth for a nesting construct inside another
    HYBRID = "hybrid"  # +1 for an else-if / elif continuation
    FUNDAMENTAL = "fundamental"  # +1 per sequence of like boolean operators


@dataclass(frozen=True)
class FunctionUnit:
    """A single function or method definition discovered in a file."""

    name: str  # Dot-joined ancestor chain for nested functions
    start_line: int
    end_line: int
    body: str = ""
    parameters: Tuple[str, ...] = ()
    start_byte: int = 0  # Offset of the definition, unique within a file
    node: Any = field(default=None, compare=False, repr=False)  # Body node

    @property
    def lines_of_code(self) -> int:
        """Calculate lines of code for this function."""
        return self.end_line - self.start_line + 1

    @property
    def short_name(self) -> str:
        """Name without the enclosing function chain."""
        return self.name.rsplit(".", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "parameters": list(self.parameters),
            "lines_of_code": self.lines_of_code,
        }


@dataclass(frozen=True)
class ComplexityFactor:
    """One increment contributing to a function's cognitive complexity."""

    description: str
    increment: int
    line_number: int
    kind: IncrementKind = IncrementKind.STRUCTURAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "description": self.description,
            "increment": self.increment,
            "line_number": self.line_number,
            "category": self.kind.value,
        }


@dataclass
class ComplexityResult:
    """Cognitive complexity of one function body (or a batch of them).

    ``nesting_level`` is only meaningful while a calculation is running; it
    starts and ends at zero. Factors must be added through ``add_factor`` so
    that ``total_complexity`` always equals the sum of their increments.
    """

    total_complexity: int = 0
    nesting_level: int = 0
    factors: List[ComplexityFactor] = field(default_factory=list)
    function_complexities: Dict[str, int] = field(default_factory=dict)

    def add_factor(self, factor: ComplexityFactor) -> None:
        """Append a factor and account for its increment."""
        if factor.increment < 0:
            raise ValueError(f"Complexity increment cannot be negative: {factor.increment}")
        self.factors.append(factor)
        self.total_complexity += factor.increment

    def merge(self, name: str, other: "ComplexityResult") -> None:
        """Fold a single-function result into this batch result."""
        for factor in other.factors:
            self.add_factor(factor)
        self.function_complexities[name] = other.total_complexity

    def increments_by_kind(self) -> Dict[IncrementKind, int]:
        """Sum the increments per category."""
        totals = {kind: 0 for kind in IncrementKind}
        for factor in self.factors:
            totals[factor.kind] += factor.increment
        return totals

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "total_complexity": self.total_complexity,
            "factors": [f.to_dict() for f in self.factors],
        }
        if self.function_complexities:
            result["function_complexities"] = dict(self.function_complexities)
        return result


@dataclass(frozen=True)
class AnalysisResult:
    """Complexity of one function in one file, as reported to the user."""

    file_path: str
    language: str
    function_name: str
    start_line: int
    end_line: int
    complexity: int
    factors: Tuple[ComplexityFactor, ...] = ()
    parameters: Tuple[str, ...] = ()

    @property
    def lines_of_code(self) -> int:
        """Calculate lines of code for this function."""
        return self.end_line - self.start_line + 1

    @classmethod
    def from_unit(
        cls,
        unit: FunctionUnit,
        complexity: ComplexityResult,
        file_path: str,
        language: str,
    ) -> "AnalysisResult":
        """Build a result from an extracted unit and its score."""
        return cls(
            file_path=file_path,
            language=language,
            function_name=unit.name,
            start_line=unit.start_line,
            end_line=unit.end_line,
            complexity=complexity.total_complexity,
            factors=tuple(complexity.factors),
            parameters=unit.parameters,
        )

    def to_dict(self, include_factors: bool = True) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "file": self.file_path,
            "function": self.function_name,
            "complexity": self.complexity,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "language": self.language,
        }
        if include_factors and self.factors:
            result["factors"] = [f.to_dict() for f in self.factors]
        return result


def total_complexity(results: List[AnalysisResult], language: Optional[str] = None) -> int:
    """Sum the complexity of a list of results, optionally for one language."""
    return sum(
        r.complexity for r in results if language is None or r.language == language
    )
