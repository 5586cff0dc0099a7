"""
Shared fixtures for the multiruntime tests.

Catalogs are served from the recorded snapshots in resources/, no test talks
to the network.
"""

import pathlib
from typing import Callable, Dict, List

import pytest

from multiruntime.catalog_fetcher import CATALOG_ENDPOINTS, CatalogFetcher
from multiruntime.executors import CatalogCache
from multiruntime.multiruntime_exceptions import NetworkError
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models import Provider

RESOURCES = pathlib.Path(__file__).parent / "resources"

RESOURCE_FILES = {
    Provider.AZUL: "azul_bundles.json",
    Provider.NODE_OFFICIAL: "node_releases.html",
    Provider.NODE_UNOFFICIAL: "node_unofficial_index.json",
}


class RecordedCatalogFetcher(CatalogFetcher):
    """Serves catalogs from memory and remembers every URL asked for."""

    def __init__(self, logger: MultiruntimeLogger, catalogs: Dict[Provider, str]):
        super().__init__(logger)
        self.pages = {CATALOG_ENDPOINTS[provider]: text for provider, text in catalogs.items()}
        self.requests: List[str] = []

    async def fetch(self, url: str) -> str:
        self.requests.append(url)
        if url not in self.pages:
            raise NetworkError(url, "HTTP 404 Not Found")
        return self.pages[url]


@pytest.fixture
def logger():
    return MultiruntimeLogger()


@pytest.fixture
def read_resource() -> Callable[[str], str]:
    def read(name: str) -> str:
        return (RESOURCES / name).read_text(encoding="utf-8")

    return read


@pytest.fixture
def azul_catalog(read_resource):
    return read_resource(RESOURCE_FILES[Provider.AZUL])


@pytest.fixture
def node_releases_html(read_resource):
    return read_resource(RESOURCE_FILES[Provider.NODE_OFFICIAL])


@pytest.fixture
def node_unofficial_index(read_resource):
    return read_resource(RESOURCE_FILES[Provider.NODE_UNOFFICIAL])


@pytest.fixture
def make_fetcher(logger, read_resource):
    """
    Build a RecordedCatalogFetcher. Without arguments it serves every recorded
    catalog; pass a dict to serve only some providers or custom text.
    """

    def make(catalogs=None) -> RecordedCatalogFetcher:
        if catalogs is None:
            catalogs = {provider: read_resource(name) for provider, name in RESOURCE_FILES.items()}
        return RecordedCatalogFetcher(logger, catalogs)

    return make


@pytest.fixture
def recorded_fetcher(make_fetcher):
    return make_fetcher()


@pytest.fixture
def catalog_cache():
    return CatalogCache()


@pytest.fixture
def fake_fetch_archive():
    """
    Stand-in for FileUtils.download_and_extract_archive that lays out a runtime
    directory with java, node, npm and npx executables and records its calls.
    """
    calls = []

    def fetch_archive(logger, url, target_path, archive_type):
        calls.append((url, target_path, archive_type))
        bin_dir = pathlib.Path(target_path) / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        for name in ("java", "node", "npm", "npx"):
            (bin_dir / name).write_text("#!/bin/sh\n")

    fetch_archive.calls = calls
    return fetch_archive
