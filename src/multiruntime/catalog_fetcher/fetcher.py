"""
Fetches raw provider catalogs over HTTP.
"""

import asyncio
import logging
from typing import Dict, Optional

import requests

from multiruntime.multiruntime_exceptions import NetworkError
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models import Provider

CATALOG_ENDPOINTS: Dict[Provider, str] = {
    Provider.AZUL: (
        "https://www.azul.com/wp-admin/admin-ajax.php?action=bundles&endpoint=community&use_stage=false"
        "&include_fields=java_version,release_status,abi,arch,bundle_type,cpu_gen,ext,features,"
        "hw_bitness,javafx,latest,os,support_term"
    ),
    Provider.NODE_OFFICIAL: "https://nodejs.org/en/download/releases/",
    Provider.NODE_UNOFFICIAL: "https://unofficial-builds.nodejs.org/download/release/index.json",
}


class CatalogFetcher:
    """
    Retrieves the raw catalog of a provider.

    Each call performs exactly one GET request. There is no retry: any transport
    failure or non-success status is raised as NetworkError and ends the
    resolution that asked for it.
    """

    def __init__(
        self,
        logger: MultiruntimeLogger,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            logger: Logger for request messages
            timeout: Transport timeout in seconds handed to requests
            session: Session to issue requests with; a new one is created if omitted
        """
        self.logger = logger
        self.timeout = timeout
        self.session = session or requests.Session()

    async def fetch_catalog(self, provider: Provider) -> str:
        """Fetch the catalog of {provider} from its fixed endpoint."""
        return await self.fetch(CATALOG_ENDPOINTS[provider])

    async def fetch(self, url: str) -> str:
        """
        Fetch {url} without blocking the event loop.

        Raises:
            NetworkError: On transport failure or a non-2xx response
        """
        self.logger.log(f"Fetching catalog {url}", logging.INFO)
        return await asyncio.to_thread(self._get, url)

    def _get(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise NetworkError(url, f"HTTP {response.status_code} {response.reason}")
        return response.text
