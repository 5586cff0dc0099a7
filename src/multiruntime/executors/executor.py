"""
This file contains the main interface, RuntimeExecutor, and the cache that
guarantees a single catalog fetch per (runtime, target).
"""

import asyncio
import logging
import pathlib
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Sequence, Tuple

from multiruntime.multiruntime_config import MultiruntimeConfig, RuntimeName
from multiruntime.multiruntime_exceptions import MultiruntimeException
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.multiruntime_settings import MultiruntimeSettings
from multiruntime.artifact_selector import ProviderRoute, route
from multiruntime.catalog_fetcher import CatalogFetcher
from multiruntime.runtime_dependency_downloader import DependencyDownloader, DownloadPlan
from multiruntime.runtime_models import Artifact, Catalog, Download, TargetDescriptor, VersionConstraint


class CatalogCache:
    """
    Normalized catalogs keyed by (runtime, target).

    Shared by every command alias of a runtime so that asking for ``npm`` after
    ``node`` does not fetch the catalog again.
    """

    def __init__(self) -> None:
        self._catalogs: Dict[Tuple[RuntimeName, TargetDescriptor], Catalog] = {}

    def get(self, runtime: RuntimeName, target: TargetDescriptor) -> Optional[Catalog]:
        return self._catalogs.get((runtime, target))

    def put(self, runtime: RuntimeName, target: TargetDescriptor, catalog: Catalog) -> None:
        self._catalogs[(runtime, target)] = catalog

    def clear(self) -> None:
        self._catalogs.clear()


# one cache per process
default_catalog_cache = CatalogCache()


class RuntimeExecutor(ABC):
    """
    The RuntimeExecutor class provides the per-runtime facade over the
    resolution pipeline: fetch, normalize, select, retrieve and unpack.
    """

    name: RuntimeName
    commands: Sequence[str]

    @classmethod
    def create(
        cls,
        config: MultiruntimeConfig,
        logger: MultiruntimeLogger,
        fetcher: Optional[CatalogFetcher] = None,
        downloader: Optional[DependencyDownloader] = None,
        catalog_cache: Optional[CatalogCache] = None,
    ) -> "RuntimeExecutor":
        """
        Creates an executor for the runtime named in the config.

        Args:
            config: Runtime, command alias and paths to use
            logger: Logger shared by every component
            fetcher: Catalog fetcher; one honoring config.request_timeout is created if omitted
            downloader: Downloader for the chosen archive
            catalog_cache: Cache of normalized catalogs; the process-wide cache if omitted

        Returns:
            RuntimeExecutor: An executor for config.runtime
        """
        if config.runtime == RuntimeName.JAVA:
            from multiruntime.executors.java import Java

            return Java(config, logger, fetcher, downloader, catalog_cache)
        elif config.runtime == RuntimeName.NODE:
            from multiruntime.executors.node import Node

            return Node(config, logger, fetcher, downloader, catalog_cache)
        else:
            raise MultiruntimeException(f"Runtime {config.runtime} is not supported")

    def __init__(
        self,
        config: MultiruntimeConfig,
        logger: MultiruntimeLogger,
        fetcher: Optional[CatalogFetcher] = None,
        downloader: Optional[DependencyDownloader] = None,
        catalog_cache: Optional[CatalogCache] = None,
    ):
        if config.command not in self.commands:
            raise MultiruntimeException(
                f"Unknown {self.name.value} command '{config.command}'. "
                f"Available: {', '.join(self.commands)}"
            )
        self.config = config
        self.command = config.command
        self.logger = logger
        self.fetcher = fetcher or CatalogFetcher(logger, timeout=config.request_timeout)
        self.downloader = downloader or DependencyDownloader(logger)
        self.catalog_cache = catalog_cache if catalog_cache is not None else default_catalog_cache

    @abstractmethod
    def binary_relative_path(self, target: TargetDescriptor) -> PurePosixPath:
        """
        Path of the executable for this command inside the unpacked runtime.
        """

    def version_constraint(self) -> Optional[VersionConstraint]:
        """
        The version range requested by the project, if any.
        """
        return None

    async def before_exec(self, target: TargetDescriptor, args: List[str]) -> Optional[str]:
        """
        Hook run right before the command is executed. May return a message for the user.
        """
        return None

    def route(self, target: TargetDescriptor) -> ProviderRoute:
        return route(self.name, target)

    async def catalog(self, target: TargetDescriptor) -> Catalog:
        """
        The normalized catalog of the provider serving {target}, fetched at most once.

        Raises:
            UnsupportedTarget: If the provider publishes nothing for {target}
            NetworkError: If the catalog could not be fetched
            MalformedCatalog: If the catalog could not be parsed
        """
        cached = self.catalog_cache.get(self.name, target)
        if cached is not None:
            return cached

        provider_route = self.route(target)
        provider_route.selector.check_target(target)
        raw = await self.fetcher.fetch_catalog(provider_route.provider)
        catalog = provider_route.normalizer(self.logger).normalize(raw)
        self.logger.log(
            f"{provider_route.provider.value} catalog has {len(catalog)} artifacts for {self.name.value}",
            logging.INFO,
        )
        self.catalog_cache.put(self.name, target, catalog)
        return catalog

    async def download_candidates(self, target: TargetDescriptor) -> List[Download]:
        """
        Every artifact usable for {target}, best first.
        """
        catalog = await self.catalog(target)
        selector = self.route(target).selector
        return [
            Download.from_artifact(artifact)
            for artifact in selector.candidates(catalog, target, self.version_constraint())
        ]

    async def resolve(self, target: TargetDescriptor) -> Artifact:
        """
        The single artifact to provision for {target}.

        Raises:
            UnsupportedTarget: If no artifact matches {target} and the version constraint
        """
        catalog = await self.catalog(target)
        artifact = self.route(target).selector.select(catalog, target, self.version_constraint())
        self.logger.log(f"{self.name.value} download url: {artifact.url}", logging.INFO)
        return artifact

    async def prepare(self, target: TargetDescriptor) -> pathlib.Path:
        """
        Resolve, download and unpack the runtime for {target}.

        Returns:
            The directory the runtime was unpacked into
        """
        artifact = await self.resolve(target)
        base_path = pathlib.Path(self.config.cache_directory or MultiruntimeSettings.get_runtime_directory())
        plan = DownloadPlan.for_artifact(self.name.value, target.platform_id, artifact, base_path)
        await asyncio.to_thread(self.downloader.download_dependency, plan)
        return plan.destination_path

    async def executable_path(self, target: TargetDescriptor) -> pathlib.Path:
        """
        Prepare the runtime and return the absolute path of this command's executable.
        """
        root = await self.prepare(target)
        return root.joinpath(*self.binary_relative_path(target).parts)
