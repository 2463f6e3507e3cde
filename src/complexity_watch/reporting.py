"""Text and JSON rendering of analysis results."""

import json
from typing import List

from .complexity_analysis.models import AnalysisResult, total_complexity


def format_text(results: List[AnalysisResult], verbose: bool = False) -> str:
    """Render results as a human-readable report.

    Each function gets a block of ``Key: value`` lines separated by a blank
    line; the report ends with the total complexity.

    Args:
        results: Results to render
        verbose: Include the complexity factors of each function
    """
    lines = []
    for result in results:
        lines.append(f"File: {result.file_path}")
        lines.append(f"Function: {result.function_name}")
        lines.append(f"Language: {result.language}")
        lines.append(f"Lines: {result.start_line}-{result.end_line}")
        lines.append(f"Complexity: {result.complexity}")

        if verbose and result.factors:
            lines.append("Complexity Factors:")
            for factor in result.factors:
                lines.append(
                    f"  - {factor.description} "
                    f"(line {factor.line_number}, +{factor.increment})"
                )
        lines.append("")

    lines.append(f"Total complexity: {total_complexity(results)}")
    return "\n".join(lines) + "\n"


def format_json(results: List[AnalysisResult], indent: int = 2) -> str:
    """Render results as a JSON document.

    The document holds ``total_complexity`` and a ``results`` list; factors
    are included for every function that has any.
    """
    report = {
        "total_complexity": total_complexity(results),
        "results": [r.to_dict() for r in results],
    }
    return json.dumps(report, indent=indent) + "\n"


def format_results(results: List[AnalysisResult], output_format: str = "text", verbose: bool = False) -> str:
    """Render results in the requested format.

    Raises:
        ValueError: If the format is not ``text`` or ``json``
    """
    match output_format:
        case "text":
            return format_text(results, verbose=verbose)
        case "json":
            return format_json(results)
        case _:
            raise ValueError(f"Unsupported output format: {output_format}")
