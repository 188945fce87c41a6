"""Executable location and built-in script search directories."""

from .executable import locate_executable, select_resolvers
from .search_dirs import add_default_dirs, build_default_search_dirs


__all__ = [
    "add_default_dirs",
    "build_default_search_dirs",
    "locate_executable",
    "select_resolvers",
]
