"""
Tests for download plans, the dependency downloader and archive extraction.
"""

import io
import pathlib
import tarfile

import pytest

from multiruntime.multiruntime_exceptions import MultiruntimeException, NetworkError
from multiruntime.multiruntime_utils import FileUtils
from multiruntime.runtime_dependency_downloader import (
    DependencyDownloader,
    DownloadPlan,
    DownloadStatus,
)
from multiruntime.runtime_models import Arch, Artifact, Os, Provider


@pytest.fixture
def linux_artifact():
    return Artifact(
        version="v20.1.0",
        url="https://unofficial-builds.nodejs.org/download/release/v20.1.0/node-v20.1.0-linux-x64-musl.tar.gz",
        os=Os.LINUX,
        arch=Arch.X86_64,
        musl=True,
        extension="tar.gz",
        suffix="linux-x64-musl",
        provider=Provider.NODE_UNOFFICIAL,
    )


@pytest.fixture
def plan(tmp_path, linux_artifact):
    return DownloadPlan.for_artifact("node", "linux-x64-musl", linux_artifact, tmp_path / "runtimes")


class TestDownloadPlan:
    """Tests for DownloadPlan."""

    def test_for_artifact(self, tmp_path, plan, linux_artifact):
        assert plan.dependency_key == "node.20.1.0.linux-x64-musl"
        assert plan.destination_path == tmp_path / "runtimes" / "node" / "20.1.0-linux-x64-musl"
        assert plan.url == linux_artifact.url
        assert plan.archive_type == "tar.gz"
        assert plan.status == DownloadStatus.PENDING

    def test_runtimes_get_disjoint_directories(self, tmp_path, linux_artifact):
        node = DownloadPlan.for_artifact("node", "linux-x64", linux_artifact, tmp_path)
        java = DownloadPlan.for_artifact("java", "linux-x64", linux_artifact, tmp_path)
        assert node.destination_path.parent != java.destination_path.parent

    def test_is_satisfied(self, plan):
        assert not plan.is_satisfied()
        plan.destination_path.mkdir(parents=True)
        assert not plan.is_satisfied()
        (plan.destination_path / "README.md").write_text("node")
        assert plan.is_satisfied()


class TestDependencyDownloader:
    """Tests for DependencyDownloader."""

    def test_download(self, logger, plan, fake_fetch_archive):
        downloader = DependencyDownloader(logger, fetch_archive=fake_fetch_archive)

        state = downloader.download_dependency(plan)

        assert state.is_downloaded()
        assert state.downloaded_path == plan.destination_path
        assert (plan.destination_path / "bin" / "node").is_file()
        assert fake_fetch_archive.calls == [(plan.url, str(plan.destination_path), "tar.gz")]
        assert downloader.get_download_summary() == {"completed": 1, "failed": 0, "total": 1}

    def test_existing_directory_is_reused(self, logger, plan, fake_fetch_archive):
        (plan.destination_path / "bin").mkdir(parents=True)
        (plan.destination_path / "bin" / "node").write_text("")
        downloader = DependencyDownloader(logger, fetch_archive=fake_fetch_archive)

        state = downloader.download_dependency(plan)

        assert state.is_downloaded()
        assert fake_fetch_archive.calls == []

    def test_network_failure_is_reraised(self, logger, plan):
        def fetch_archive(logger, url, target_path, archive_type):
            raise NetworkError(url, "HTTP 404 Not Found")

        downloader = DependencyDownloader(logger, fetch_archive=fetch_archive)

        with pytest.raises(NetworkError):
            downloader.download_dependency(plan)

        assert plan.status == DownloadStatus.FAILED
        assert downloader.dependency_states[plan.dependency_key].error_message == plan.error_message
        assert downloader.get_download_summary() == {"completed": 0, "failed": 1, "total": 1}

    def test_other_failures_are_wrapped(self, logger, plan):
        def fetch_archive(logger, url, target_path, archive_type):
            raise OSError("No space left on device")

        downloader = DependencyDownloader(logger, fetch_archive=fetch_archive)

        with pytest.raises(MultiruntimeException, match="No space left on device") as excinfo:
            downloader.download_dependency(plan)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_empty_extraction_fails_verification(self, logger, plan):
        def fetch_archive(logger, url, target_path, archive_type):
            pathlib.Path(target_path).mkdir(parents=True)

        downloader = DependencyDownloader(logger, fetch_archive=fetch_archive)

        with pytest.raises(MultiruntimeException, match="verification failed"):
            downloader.download_dependency(plan)
        assert plan.status == DownloadStatus.FAILED


class TestFileUtils:
    """Tests for archive extraction."""

    @pytest.fixture
    def node_tarball(self, tmp_path):
        archive = tmp_path / "node-v20.1.0-linux-x64.tar.gz"
        with tarfile.open(archive, "w:gz") as tar:
            for name, content in [
                ("node-v20.1.0-linux-x64/bin/node", b"#!/bin/sh\n"),
                ("node-v20.1.0-linux-x64/LICENSE", b"MIT"),
            ]:
                info = tarfile.TarInfo(name)
                info.size = len(content)
                tar.addfile(info, io.BytesIO(content))
        return archive

    def test_extracts_and_flattens(self, logger, tmp_path, monkeypatch, node_tarball):
        def download_file(logger, url, target_path, timeout=300):
            pathlib.Path(target_path).write_bytes(node_tarball.read_bytes())

        monkeypatch.setattr(FileUtils, "download_file", staticmethod(download_file))
        target = tmp_path / "runtimes" / "node-20.1.0"
        target.parent.mkdir()

        FileUtils.download_and_extract_archive(logger, "https://example.com/node.tar.gz", str(target), "tar.gz")

        assert (target / "bin" / "node").read_bytes() == b"#!/bin/sh\n"
        assert (target / "LICENSE").is_file()
        assert sorted(p.name for p in target.parent.iterdir()) == ["node-20.1.0"]

    def test_unsupported_archive_type(self, logger, tmp_path):
        with pytest.raises(MultiruntimeException, match="msi"):
            FileUtils.download_and_extract_archive(logger, "https://example.com/jdk.msi", str(tmp_path / "jdk"), "msi")
