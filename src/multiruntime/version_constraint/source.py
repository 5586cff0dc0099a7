"""
Reads version requirements from project metadata.
"""

import json
import logging
import pathlib
import re
from typing import Optional, Union

from multiruntime.multiruntime_exceptions import InvalidVersionConstraint
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models import VersionConstraint

# a leading non-numeric marker, e.g. the "v" in "v18.2.0"
_MARKER = re.compile(r"^[^0-9<>=^~*xX|\s]+(?=\d)")


def find_closest(start: pathlib.Path, file_name: str) -> Optional[pathlib.Path]:
    """
    Find {file_name} in {start} or the closest of its parent directories.

    Args:
        start: Directory to start the search from
        file_name: File to look for

    Returns:
        Path to the file, or None if no directory up to the root has it
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / file_name
        if candidate.is_file():
            return candidate
    return None


class VersionConstraintSource:
    """
    Resolves the version constraint of a runtime for a project.

    Sources are tried in order and the first one that yields a parsable range
    wins; they are never merged:

    1. ``engines.<engine>`` of the closest ``package.json``
    2. the version dotfile (``.nvmrc``) in the project root
    """

    def __init__(
        self,
        project_root: Union[str, pathlib.Path],
        logger: MultiruntimeLogger,
        engine: str = "node",
        manifest_name: str = "package.json",
        dotfile_name: str = ".nvmrc",
    ):
        self.project_root = pathlib.Path(project_root)
        self.logger = logger
        self.engine = engine
        self.manifest_name = manifest_name
        self.dotfile_name = dotfile_name

    def resolve(self) -> Optional[VersionConstraint]:
        """
        Returns the version constraint of the project, or None when there is none.

        Unparsable metadata never raises: it is logged and treated as absent.
        """
        constraint = self.from_manifest()
        if constraint is not None:
            return constraint
        return self.from_dotfile()

    def from_manifest(self) -> Optional[VersionConstraint]:
        manifest = find_closest(self.project_root, self.manifest_name)
        if manifest is None:
            return None

        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.log(f"Ignoring unreadable {manifest}: {e}", logging.DEBUG)
            return None

        engines = data.get("engines") if isinstance(data, dict) else None
        if not isinstance(engines, dict) or not isinstance(engines.get(self.engine), str):
            return None

        try:
            constraint = VersionConstraint.parse(engines[self.engine], origin=str(manifest))
        except InvalidVersionConstraint as e:
            self.logger.log(f"Ignoring engines.{self.engine} in {manifest}: {e}", logging.DEBUG)
            return None

        self.logger.log(f"Got version {constraint} from {manifest}", logging.INFO)
        return constraint

    def from_dotfile(self) -> Optional[VersionConstraint]:
        dotfile = self.project_root / self.dotfile_name
        if not dotfile.is_file():
            return None

        try:
            token = dotfile.read_text(encoding="utf-8").strip()
        except OSError as e:
            self.logger.log(f"Ignoring unreadable {dotfile}: {e}", logging.DEBUG)
            return None
        token = _MARKER.sub("", token)

        try:
            constraint = VersionConstraint.parse(token, origin=str(dotfile))
        except InvalidVersionConstraint as e:
            self.logger.log(f"Ignoring {dotfile}: {e}", logging.DEBUG)
            return None

        self.logger.log(f"Got version {constraint} from {dotfile}", logging.INFO)
        return constraint
