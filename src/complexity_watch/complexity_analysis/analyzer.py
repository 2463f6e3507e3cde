"""Analysis orchestrator.

Ties the extractor registry and the cognitive complexity calculator together
and fans the analysis out over files, directories and git repositories.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..config import AnalysisConfig
from ..utils.files import (
    IgnoreMatcher,
    is_git_repository,
    list_files,
    list_git_files,
    read_source,
)
from .base_extractor import ExtractorRegistry
from .cognitive import CognitiveComplexityCalculator
from .models import AnalysisResult

logger = logging.getLogger(__name__)


class ComplexityAnalyzer:
    """Computes per-function cognitive complexity for source files.

    Every file is handled with a fresh extractor from the registry, so one
    analyzer never shares a parser between files.
    """

    def __init__(self, registry: ExtractorRegistry, config: Optional[AnalysisConfig] = None):
        """Initialize the analyzer.

        Args:
            registry: Populated extractor registry
            config: Analysis settings (defaults to ``AnalysisConfig()``)
        """
        self.registry = registry
        self.config = config or AnalysisConfig()
        self._ignore = IgnoreMatcher(self.config.ignore_patterns)

    @property
    def threshold(self) -> int:
        return self.config.threshold

    def analyze_file(self, file_path) -> List[AnalysisResult]:
        """Analyze a single source file.

        Args:
            file_path: Path of the file to analyze

        Returns:
            Results for every function at or above the threshold; empty if
            the file cannot be read or its language is unsupported
        """
        path = Path(file_path)
        logger.info(f"Analyzing file: {path}")

        try:
            content = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read file {path}: {e}")
            return []

        return self.analyze_content(content, str(path))

    def analyze_content(
        self, content: str, file_path: str = "", language: Optional[str] = None
    ) -> List[AnalysisResult]:
        """Analyze source text.

        Args:
            content: Source code
            file_path: Path reported in the results and used to infer the
                language
            language: Language identifier overriding configuration and
                extension inference

        Returns:
            Results in document order, outer functions before nested ones
        """
        language = language or self.config.language or self.registry.language_for_path(file_path)
        extractor = self.registry.create_for_language(language)
        if extractor is None:
            logger.warning(f"Unsupported language for {file_path or '<string>'}: {language}")
            return []

        if not content:
            logger.warning(f"Empty file content: {file_path or '<string>'}")
            return []

        tree = extractor.parse(content)
        if tree is None:
            logger.error(f"Failed to parse file: {file_path or '<string>'}")
            return []

        source = content.encode("utf-8")
        units = extractor.functions_in_tree(tree, content)
        # Names can repeat (overloads, same-named methods); offsets cannot
        definitions: Dict[int, object] = {
            definition.start_byte: definition
            for definition, _ in extractor.iter_definitions(tree.root_node, source)
        }

        calculator = CognitiveComplexityCalculator(
            extractor.grammar, self.config.include_boolean_operators
        )

        results = []
        for unit in units:
            definition = definitions.get(unit.start_byte)
            if definition is None:
                logger.warning(
                    f"Could not locate {unit.name} at line {unit.start_line} in {file_path}"
                )
                continue

            complexity = calculator.calculate(definition, content)
            logger.debug(f"{unit.name}: complexity {complexity.total_complexity}")
            if complexity.total_complexity >= self.threshold:
                results.append(
                    AnalysisResult.from_unit(unit, complexity, file_path, extractor.language)
                )

        logger.info(
            f"Analyzed {len(units)} functions in {file_path or '<string>'}, "
            f"{len(results)} at or above threshold {self.threshold}"
        )
        return results

    def should_analyze_file(self, file_path) -> bool:
        """Check whether a file is supported and not ignored."""
        return self._should_analyze(Path(file_path), self._ignore)

    def analyze_directory(self, directory, recursive: Optional[bool] = None) -> List[AnalysisResult]:
        """Analyze every supported file in a directory.

        Args:
            directory: Directory to scan
            recursive: Descend into subdirectories (defaults to the configured
                value)
        """
        directory = Path(directory)
        if recursive is None:
            recursive = self.config.recursive

        logger.info(f"Analyzing directory: {directory} (recursive: {recursive})")
        return self._analyze_files(list_files(directory, recursive), directory)

    def analyze_git_repository(self, repository) -> List[AnalysisResult]:
        """Analyze every supported file tracked by git.

        Returns:
            Results for all tracked files; empty if the path is not a git
            repository or git fails
        """
        repository = Path(repository)
        logger.info(f"Analyzing git repository: {repository}")

        if not is_git_repository(repository):
            logger.error(f"Not a git repository: {repository}")
            return []

        return self._analyze_files(list_git_files(repository), repository)

    def analyze_path(self, path, recursive: Optional[bool] = None) -> List[AnalysisResult]:
        """Analyze a file, a git repository or a plain directory.

        Raises:
            FileNotFoundError: If the path does not exist
        """
        path = Path(path)
        if path.is_file():
            return self.analyze_file(path)
        if path.is_dir():
            if is_git_repository(path):
                return self.analyze_git_repository(path)
            return self.analyze_directory(path, recursive)
        raise FileNotFoundError(f"Invalid input path: {path}")

    def _analyze_files(self, files: Iterable[Path], root: Path) -> List[AnalysisResult]:
        matcher = self._ignore.with_root(root)
        results = []
        analyzed = 0
        for file_path in files:
            if not self._should_analyze(file_path, matcher):
                continue
            results.extend(self.analyze_file(file_path))
            analyzed += 1

        logger.info(f"Analyzed {analyzed} files under {root}: {len(results)} results")
        return results

    def _should_analyze(self, file_path: Path, matcher: IgnoreMatcher) -> bool:
        if matcher.matches(file_path):
            logger.debug(f"Ignoring {file_path}")
            return False
        language = self.registry.language_for_path(file_path)
        if self.config.language:
            # A forced language restricts the fan-out to that language's files
            return language == self.config.language
        return language is not None
