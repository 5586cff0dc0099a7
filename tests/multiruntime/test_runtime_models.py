"""
Tests for the runtime models.
"""

import itertools

import pytest
from pydantic import ValidationError

from multiruntime.multiruntime_exceptions import InvalidVersionConstraint, UnsupportedTarget
from multiruntime.runtime_models import (
    Arch,
    Artifact,
    AzulBundle,
    Download,
    LtsFlag,
    LtsName,
    NodeRelease,
    Os,
    Provider,
    TargetDescriptor,
    Variant,
    VersionConstraint,
    parse_version,
)


class TestTargetDescriptor:
    """Tests for TargetDescriptor parsing and identifiers."""

    @pytest.mark.parametrize(
        "platform_id,os_name,arch,variant",
        [
            ("linux-x64", Os.LINUX, Arch.X86_64, None),
            ("win-arm64", Os.WINDOWS, Arch.ARM64, None),
            ("darwin-arm64", Os.MAC, Arch.ARM64, None),
            ("linux-armv7l", Os.LINUX, Arch.ARMV7, None),
            ("linux-arm64-musl", Os.LINUX, Arch.ARM64, Variant.MUSL),
            ("macos-aarch64", Os.MAC, Arch.ARM64, None),
            ("Windows-AMD64", Os.WINDOWS, Arch.X86_64, None),
        ],
    )
    def test_from_platform_id(self, platform_id, os_name, arch, variant):
        target = TargetDescriptor.from_platform_id(platform_id)
        assert target == TargetDescriptor(os=os_name, arch=arch, variant=variant)

    @pytest.mark.parametrize(
        "platform_id",
        ["linux-x64", "win-arm64", "darwin-x64", "darwin-arm64", "linux-armv7l", "linux-x64-musl"],
    )
    def test_platform_id_is_canonical(self, platform_id):
        target = TargetDescriptor.from_platform_id(platform_id)
        assert target.platform_id == platform_id
        assert str(target) == platform_id

    @pytest.mark.parametrize(
        "platform_id",
        ["linux", "solaris-x64", "linux-sparc", "linux-x64-uclibc", "linux-x64-musl-static"],
    )
    def test_rejects_unknown_tokens(self, platform_id):
        with pytest.raises(UnsupportedTarget):
            TargetDescriptor.from_platform_id(platform_id)

    def test_is_musl(self):
        assert TargetDescriptor.from_platform_id("linux-x64-musl").is_musl
        assert not TargetDescriptor.from_platform_id("linux-x64").is_musl

    def test_immutable_and_hashable(self):
        target = TargetDescriptor(os=Os.LINUX, arch=Arch.X86_64)
        with pytest.raises(ValidationError):
            target.os = Os.MAC

        every_target = [
            TargetDescriptor(os=os_name, arch=arch, variant=variant)
            for os_name, arch, variant in itertools.product(Os, Arch, (None, Variant.MUSL))
        ]
        assert len(set(every_target)) == len(Os) * len(Arch) * 2


class TestArtifact:
    """Tests for the normalized Artifact model."""

    def make(self, **overrides):
        fields = dict(
            version="v20.1.0",
            url="https://nodejs.org/download/release/v20.1.0/node-v20.1.0-linux-x64.tar.gz",
            os=Os.LINUX,
            arch=Arch.X86_64,
            provider=Provider.NODE_OFFICIAL,
        )
        fields.update(overrides)
        return Artifact(**fields)

    def test_valid_artifact(self):
        artifact = self.make(tags=("lts",))
        assert artifact.semver == parse_version("20.1.0")
        assert artifact.is_lts
        assert not artifact.musl

    @pytest.mark.parametrize("url", ["node-v20.1.0-linux-x64.tar.gz", "/download/node.tar.gz", "ftp://example.com/a.zip"])
    def test_rejects_non_absolute_url(self, url):
        with pytest.raises(ValidationError):
            self.make(url=url)

    def test_rejects_unparsable_version(self):
        with pytest.raises(ValidationError):
            self.make(version="latest")

    def test_download_from_artifact(self):
        artifact = self.make()
        assert Download.from_artifact(artifact) == Download(url=artifact.url, version="v20.1.0")


class TestParseVersion:
    @pytest.mark.parametrize(
        "label,expected",
        [("v18.2.0", "18.2.0"), ("18.2.0", "18.2.0"), ("21", "21.0.0"), ("17.0", "17.0.0")],
    )
    def test_parse_version(self, label, expected):
        assert str(parse_version(label)) == expected


class TestVersionConstraint:
    """Tests for npm-style version ranges."""

    def test_caret_range(self):
        constraint = VersionConstraint.parse("^18")
        assert constraint.allows("v18.5.0")
        assert constraint.allows("18.16.0")
        assert not constraint.allows("v20.0.0")
        assert not constraint.allows("v16.20.0")

    def test_exact_version(self):
        constraint = VersionConstraint.parse("18.2.0")
        assert constraint.allows("v18.2.0")
        assert not constraint.allows("v18.2.1")

    def test_compound_range(self):
        constraint = VersionConstraint.parse(">=16 <20", origin="/project/package.json")
        assert constraint.origin == "/project/package.json"
        assert constraint.allows("v19.9.0")
        assert not constraint.allows("v20.0.0")

    @pytest.mark.parametrize(
        "expression,normalized,allowed,rejected",
        [
            (">= 16", ">=16", "v16.20.0", "v15.14.0"),
            ("<= 18", "<=18", "v18.16.0", "v20.0.0"),
            (">=v16", ">=16", "v20.1.0", "v14.21.3"),
            ("^ 18", "^18", "v18.5.0", "v19.0.0"),
            ("v18.2.0", "18.2.0", "v18.2.0", "v18.2.1"),
            (">= 16 < 20", ">=16 <20", "v19.9.0", "v20.0.0"),
        ],
    )
    def test_operator_spacing_and_prefix(self, expression, normalized, allowed, rejected):
        constraint = VersionConstraint.parse(expression)
        assert constraint.expression == normalized
        assert constraint.allows(allowed)
        assert not constraint.allows(rejected)

    def test_unparsable_version_is_not_allowed(self):
        assert not VersionConstraint.parse("^18").allows("not-a-version")

    @pytest.mark.parametrize("expression", ["", "   ", "lts/hydrogen", "banana"])
    def test_rejects_invalid_expression(self, expression):
        with pytest.raises(InvalidVersionConstraint):
            VersionConstraint.parse(expression)


class TestUpstreamRecords:
    """Tests for the raw catalog record models."""

    def test_azul_bundle_accepts_both_spellings(self):
        snake = AzulBundle.model_validate(
            {"arch": "arm", "ext": "tar.gz", "hw_bitness": "64", "java_version": [21, 0, 1],
             "os": "linux", "url": "https://cdn.azul.com/zulu/bin/a.tar.gz"}
        )
        camel = AzulBundle.model_validate(
            {"arch": "arm", "ext": "tar.gz", "hwBitness": 64, "javaVersion": [21, 0, 1],
             "os": "linux", "url": "https://cdn.azul.com/zulu/bin/a.tar.gz", "supportTerm": "lts"}
        )
        assert snake.hw_bitness == camel.hw_bitness == "64"
        assert snake.version_label == camel.version_label == "21.0.1"
        assert camel.support_term == "lts"

    def test_azul_bundle_requires_a_version(self):
        with pytest.raises(ValidationError):
            AzulBundle.model_validate(
                {"arch": "x86", "ext": "zip", "hw_bitness": "64", "java_version": [],
                 "os": "windows", "url": "https://cdn.azul.com/zulu/bin/a.zip"}
            )

    def test_lts_codename(self):
        release = NodeRelease.model_validate({"version": "v18.16.0", "lts": "Hydrogen"})
        assert release.lts == LtsName(name="Hydrogen")
        assert release.lts.is_lts

    def test_lts_flag(self):
        release = NodeRelease.model_validate({"version": "v20.1.0", "lts": False})
        assert release.lts == LtsFlag(flag=False)
        assert not release.lts.is_lts

    def test_lts_defaults_to_not_lts(self):
        release = NodeRelease.model_validate({"version": "v20.1.0", "files": ["linux-x64-musl"]})
        assert not release.lts.is_lts
        assert not release.security
