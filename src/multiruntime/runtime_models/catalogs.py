"""
Pydantic data models for the raw records served by upstream catalogs.

The Azul bundle endpoint serves snake_case keys while its documented schema
uses camelCase; both spellings are accepted.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class AzulBundle(BaseModel):
    """One record of the Azul Zulu community bundle listing."""

    abi: Optional[str] = None
    arch: str
    bundle_type: Optional[str] = Field(None, alias="bundleType")
    cpu_gen: List[str] = Field(default_factory=list, alias="cpuGen")
    ext: str
    features: List[str] = Field(default_factory=list)
    hw_bitness: str = Field(..., alias="hwBitness")
    id: Optional[int] = None
    java_version: List[int] = Field(..., alias="javaVersion", min_length=1)
    javafx: bool = False
    jdk_version: List[int] = Field(default_factory=list, alias="jdkVersion")
    latest: bool = False
    name: Optional[str] = None
    openjdk_build_number: Optional[int] = Field(None, alias="openjdkBuildNumber")
    os: str
    release_status: Optional[str] = Field(None, alias="releaseStatus")
    support_term: Optional[str] = Field(None, alias="supportTerm")
    url: str

    class Config:
        extra = "allow"
        populate_by_name = True

    @field_validator("hw_bitness", mode="before")
    @classmethod
    def _bitness_as_text(cls, value: Any) -> Any:
        # the endpoint has served both "64" and 64
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def version_label(self) -> str:
        return ".".join(str(part) for part in self.java_version)


class LtsName(BaseModel):
    """Release line codename of an LTS release, e.g. "Iron"."""

    name: str

    class Config:
        frozen = True

    @property
    def is_lts(self) -> bool:
        return True


class LtsFlag(BaseModel):
    """Plain boolean LTS marker."""

    flag: bool

    class Config:
        frozen = True

    @property
    def is_lts(self) -> bool:
        return self.flag


Lts = Union[LtsName, LtsFlag]


class NodeRelease(BaseModel):
    """One record of a Node.js ``index.json`` release index."""

    version: str
    date: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    npm: Optional[str] = None
    v8: Optional[str] = None
    uv: Optional[str] = None
    zlib: Optional[str] = None
    openssl: Optional[str] = None
    modules: Optional[str] = None
    lts: Lts = LtsFlag(flag=False)
    security: bool = False

    class Config:
        extra = "allow"

    @field_validator("lts", mode="before")
    @classmethod
    def _tag_lts(cls, value: Any) -> Any:
        """The index publishes ``false`` or the release line name."""
        if isinstance(value, bool):
            return LtsFlag(flag=value)
        if isinstance(value, str):
            return LtsName(name=value)
        return value
