"""
Pydantic data models for normalized catalog entries.

Every provider-specific catalog is turned into a list of Artifact objects so
the selectors never see the upstream shapes.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from semantic_version import NpmSpec, Version

from multiruntime.multiruntime_exceptions import InvalidVersionConstraint
from multiruntime.runtime_models.target import Arch, Os

# npm tolerates ">= 16" and ">=v16"; NpmSpec does not
_OPERATOR_GAP = re.compile(r"(<=|>=|<|>|=|\^|~)\s+")
_VERSION_PREFIX = re.compile(r"(^|[\s<>=^~|])[vV](?=\d)")


def parse_version(label: str) -> Version:
    """
    Parse a version label as published upstream.

    Accepts a leading ``v`` (Node.js style) and coerces JDK-style labels such
    as ``21`` or ``11.0.21.1`` into semantic versions.

    Raises:
        ValueError: If the label is not a version at all
    """
    text = label.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    return Version.coerce(text)


class Provider(str, Enum):
    """Upstream catalog sources."""

    AZUL = "azul"
    NODE_OFFICIAL = "node-official"
    NODE_UNOFFICIAL = "node-unofficial"


class Artifact(BaseModel):
    """
    One downloadable build of a runtime for a specific version and platform.

    Produced fresh by a normalizer, never mutated or persisted.
    """

    version: str = Field(..., description="Version label as published upstream")
    url: str = Field(..., description="Absolute URL of the archive")
    os: Os
    arch: Arch
    musl: bool = Field(False, description="Built against musl libc")
    tags: Tuple[str, ...] = Field((), description="Classification tags: lts, latest, security")
    extension: Optional[str] = Field(None, description="Archive extension, e.g. zip or tar.gz")
    bitness: Optional[str] = None
    features: Tuple[str, ...] = ()
    suffix: Optional[str] = Field(None, description="Platform part of the upstream file name")
    provider: Provider

    class Config:
        frozen = True

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"not an absolute URL: {value!r}")
        return value

    @field_validator("version")
    @classmethod
    def _parseable_version(cls, value: str) -> str:
        parse_version(value)
        return value

    @property
    def semver(self) -> Version:
        return parse_version(self.version)

    @property
    def is_lts(self) -> bool:
        return "lts" in self.tags


class Download(BaseModel):
    """A (url, version) pair handed to the downloader."""

    url: str
    version: str

    class Config:
        frozen = True

    @classmethod
    def from_artifact(cls, artifact: Artifact) -> "Download":
        return cls(url=artifact.url, version=artifact.version)


Catalog = List[Artifact]


@dataclass(frozen=True)
class VersionConstraint:
    """
    An npm-style semantic version range, e.g. ``^18``, ``>=16 <20`` or ``18.2.0``.

    Attributes:
        expression: The range as parsed, with operator spacing and "v" prefixes removed
        origin: Where the range was read from (file path), if anywhere
    """

    expression: str
    origin: Optional[str] = None

    @classmethod
    def parse(cls, expression: str, origin: Optional[str] = None) -> "VersionConstraint":
        """
        Parse a range expression.

        Raises:
            InvalidVersionConstraint: If the expression is empty or not a valid range
        """
        expression = _VERSION_PREFIX.sub(r"\1", _OPERATOR_GAP.sub(r"\1", expression.strip()))
        if not expression:
            raise InvalidVersionConstraint(expression, "empty range")
        try:
            NpmSpec(expression)
        except ValueError as e:
            raise InvalidVersionConstraint(expression, str(e)) from e
        return cls(expression=expression, origin=origin)

    @cached_property
    def spec(self) -> NpmSpec:
        return NpmSpec(self.expression)

    def allows(self, version: str) -> bool:
        """Check whether a version label satisfies this range."""
        try:
            return self.spec.match(parse_version(version))
        except ValueError:
            return False

    def __str__(self) -> str:
        return self.expression
