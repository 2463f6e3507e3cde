"""File system and git helpers for the analysis fan-out."""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

# Directories never worth descending into
SKIP_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "__pycache__",
        "node_modules",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    }
)


class IgnoreMatcher:
    """Matches paths against gitignore-style patterns.

    Patterns are evaluated against paths relative to ``root``; paths outside
    the root are matched as given.
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None, root: Optional[Path] = None):
        self.patterns = [p for p in (patterns or []) if p and p.strip()]
        self.root = Path(root) if root is not None else None
        self._spec = (
            PathSpec.from_lines(GitWildMatchPattern, self.patterns) if self.patterns else None
        )

    def with_root(self, root: Path) -> "IgnoreMatcher":
        """Create a matcher with the same patterns anchored at another root."""
        return IgnoreMatcher(self.patterns, root)

    def matches(self, path) -> bool:
        """Check whether a path is excluded by any pattern."""
        if self._spec is None:
            return False

        relative_path = Path(path)
        if self.root is not None:
            try:
                relative_path = relative_path.relative_to(self.root)
            except ValueError:
                pass
        return self._spec.match_file(relative_path.as_posix())


def read_source(path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    return Path(path).read_text(encoding="utf-8")


def list_files(directory: Path, recursive: bool = False) -> List[Path]:
    """List regular files in a directory.

    Args:
        directory: Directory to list
        recursive: Descend into subdirectories (VCS and cache directories
            are always skipped)

    Returns:
        Sorted list of file paths
    """
    files = []
    dirs_to_scan = [Path(directory)]

    while dirs_to_scan:
        current_dir = dirs_to_scan.pop()
        try:
            for item in current_dir.iterdir():
                if item.is_dir():
                    if recursive and item.name not in SKIP_DIRS:
                        dirs_to_scan.append(item)
                elif item.is_file():
                    files.append(item)
        except PermissionError as e:
            logger.debug(f"Permission denied accessing {current_dir}: {e}")
            continue

    files.sort()
    logger.debug(f"Listed {len(files)} files under {directory} (recursive={recursive})")
    return files


def is_git_repository(path: Path) -> bool:
    """Check whether a directory is the top level of a git working tree."""
    return (Path(path) / ".git").is_dir()


def list_git_files(repository: Path) -> List[Path]:
    """List files tracked by git in a repository.

    Returns:
        Absolute paths of tracked files, or an empty list if git fails
    """
    repository = Path(repository)
    if not is_git_repository(repository):
        logger.warning(f"Not a git repository: {repository}")
        return []

    try:
        result = subprocess.run(
            ["git", "ls-files"],
            cwd=repository,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.error(f"Failed to list git files in {repository}: {e}")
        return []

    return [repository / line for line in result.stdout.splitlines() if line.strip()]
