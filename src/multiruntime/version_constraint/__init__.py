"""
Version constraint sourcing.

Derives an optional version range for a runtime from local project metadata:
the closest package.json ``engines`` entry, then a version dotfile.
"""

from .source import VersionConstraintSource, find_closest

__all__ = ["VersionConstraintSource", "find_closest"]
