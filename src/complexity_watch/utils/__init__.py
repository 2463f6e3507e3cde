"""Utility helpers for complexity-watch."""

from .files import (
    IgnoreMatcher,
    is_git_repository,
    list_files,
    list_git_files,
    read_source,
)

__all__ = [
    "IgnoreMatcher",
    "is_git_repository",
    "list_files",
    "list_git_files",
    "read_source",
]
