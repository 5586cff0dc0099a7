"""
MCP (Model Context Protocol) runner for multiruntime.

This module exposes runtime resolution and provisioning as MCP tools using the
fastmcp framework. An optional ``multiruntime.toml`` in the workspace root
overrides the target platform, the cache directory and the request timeout.

Every tool returns a JSON document with ``status`` set to ``success`` or
``error``. Errors carry ``error_type`` so that "no build for this platform"
(UnsupportedTarget) can be told apart from network and catalog failures.
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from fastmcp import FastMCP

from multiruntime.executors import CatalogCache, RuntimeExecutor
from multiruntime.multiruntime_config import MultiruntimeConfig, RuntimeName
from multiruntime.multiruntime_exceptions import MultiruntimeException
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.multiruntime_utils import PlatformUtils
from multiruntime.catalog_fetcher import CatalogFetcher
from multiruntime.runtime_dependency_downloader import DependencyDownloader


RUNTIMES_TOML_SCHEMA = """
# Runtime configuration for multiruntime MCP

[runtimes]
# Platform to provision for (optional, defaults to the host),
# e.g. "linux-x64", "linux-arm64-musl", "win-arm64", "darwin-arm64"
# target = "linux-x64"

# Where runtimes are unpacked (optional, defaults to ~/.multiruntime/runtimes)
# cache_directory = "/path/to/cache"

# Transport timeout in seconds for catalog requests (optional, defaults to 60)
# request_timeout = 60
"""


@dataclass
class RuntimesConfig:
    """Configuration loaded from multiruntime.toml."""

    target: Optional[str] = None
    cache_directory: Optional[str] = None
    request_timeout: float = 60.0

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "RuntimesConfig":
        """
        Create a RuntimesConfig from a dictionary (loaded from TOML).

        Raises:
            MultiruntimeException: If configuration is invalid
        """
        section = config_dict.get("runtimes", {})
        if not isinstance(section, dict):
            raise MultiruntimeException("[runtimes] must be a table")

        timeout = section.get("request_timeout", 60.0)
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise MultiruntimeException("'request_timeout' must be a positive number")

        return cls(
            target=section.get("target"),
            cache_directory=section.get("cache_directory"),
            request_timeout=float(timeout),
        )


class MCPRunner:
    """
    MCP runner that exposes runtime resolution as MCP tools using fastmcp.

    Executors share one catalog cache, so each (runtime, target) catalog is
    fetched once for the lifetime of the runner.

    Example usage:
    ```python
    runner = MCPRunner("/path/to/workspace")
    server = runner.create_mcp_server()
    server.run()
    ```
    """

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        fetcher: Optional[CatalogFetcher] = None,
        downloader: Optional[DependencyDownloader] = None,
    ):
        """
        Args:
            workspace_root: Root directory of the workspace. If None, uses current directory.
            fetcher: Catalog fetcher shared by all executors
            downloader: Downloader shared by all executors
        """
        self.workspace_root = workspace_root or os.getcwd()
        self.logger = MultiruntimeLogger()
        self.config = RuntimesConfig()
        self.config_error: Optional[str] = None
        self._load_config()
        self.fetcher = fetcher or CatalogFetcher(self.logger, timeout=self.config.request_timeout)
        self.downloader = downloader or DependencyDownloader(self.logger)
        self.catalog_cache = CatalogCache()

    def _load_config(self) -> None:
        """
        Load multiruntime.toml if present. A broken file keeps the defaults and
        is reported by every tool until it is fixed.
        """
        toml_path = os.path.join(self.workspace_root, "multiruntime.toml")
        if not os.path.exists(toml_path):
            return

        try:
            with open(toml_path, "rb") as f:
                toml_dict = tomllib.load(f)
            self.config = RuntimesConfig.from_dict(toml_dict)
            self.logger.log(f"Loaded runtime configuration {asdict(self.config)}", logging.INFO)
        except (OSError, tomllib.TOMLDecodeError, MultiruntimeException) as e:
            self.config_error = f"Failed to load multiruntime.toml from {toml_path}: {str(e)}"
            self.logger.log(self.config_error, logging.ERROR)

    def get_configuration_error_message(self) -> str:
        """
        Get an informative error message for a rejected multiruntime.toml.

        Returns:
            Formatted error message with schema instructions.
        """
        return (
            f"{self.config_error}\n\n"
            "Please fix 'multiruntime.toml' in your workspace root to follow this schema:\n\n"
            f"{RUNTIMES_TOML_SCHEMA}"
        )

    def get_executor(self, runtime: str, command: Optional[str] = None) -> RuntimeExecutor:
        try:
            runtime_name = RuntimeName(runtime.lower())
        except ValueError:
            raise MultiruntimeException(
                f"Invalid runtime: {runtime}. Available: {', '.join(r.value for r in RuntimeName)}"
            )

        config = MultiruntimeConfig(
            runtime=runtime_name,
            command=command,
            project_root=self.workspace_root,
            cache_directory=self.config.cache_directory,
            request_timeout=self.config.request_timeout,
        )
        return RuntimeExecutor.create(config, self.logger, self.fetcher, self.downloader, self.catalog_cache)

    async def _run_tool(self, tool: Callable[[], Any]) -> str:
        if self.config_error is not None:
            return json.dumps(
                {
                    "status": "error",
                    "error_type": "ConfigurationError",
                    "message": self.get_configuration_error_message(),
                }
            )

        try:
            result = await tool()
        except MultiruntimeException as e:
            self.logger.log(f"Tool failed: {e}", logging.ERROR)
            return json.dumps({"status": "error", "error_type": type(e).__name__, "message": str(e)})
        return json.dumps({"status": "success", **result})

    async def resolve_runtime(self, runtime: str, target: Optional[str] = None) -> str:
        async def tool():
            executor = self.get_executor(runtime)
            target_descriptor = PlatformUtils.get_target(target or self.config.target)
            artifact = await executor.resolve(target_descriptor)
            return {
                "runtime": executor.name.value,
                "target": target_descriptor.platform_id,
                "provider": executor.route(target_descriptor).provider.value,
                "version": artifact.version,
                "url": artifact.url,
                "tags": list(artifact.tags),
            }

        return await self._run_tool(tool)

    async def list_download_candidates(self, runtime: str, target: Optional[str] = None) -> str:
        async def tool():
            executor = self.get_executor(runtime)
            target_descriptor = PlatformUtils.get_target(target or self.config.target)
            candidates = await executor.download_candidates(target_descriptor)
            return {"candidates": [candidate.model_dump() for candidate in candidates]}

        return await self._run_tool(tool)

    async def get_version_constraint(self, runtime: str) -> str:
        async def tool():
            constraint = self.get_executor(runtime).version_constraint()
            if constraint is None:
                return {"constraint": None, "origin": None}
            return {"constraint": constraint.expression, "origin": constraint.origin}

        return await self._run_tool(tool)

    async def prepare_runtime(self, runtime: str, command: Optional[str] = None, target: Optional[str] = None) -> str:
        async def tool():
            executor = self.get_executor(runtime, command)
            target_descriptor = PlatformUtils.get_target(target or self.config.target)
            executable = await executor.executable_path(target_descriptor)
            self.logger.log(f"Download summary: {self.downloader.get_download_summary()}", logging.INFO)
            return {"command": executor.command, "executable": str(executable)}

        return await self._run_tool(tool)

    def create_mcp_server(self) -> FastMCP:
        """
        Create and configure a fastmcp server instance with the runtime tools.
        """
        server = FastMCP("multiruntime-mcp")
        self._register_tools(server)
        return server

    def _register_tools(self, server: FastMCP) -> None:
        @server.tool()
        async def runtime_resolve(runtime: str, target: Optional[str] = None) -> str:
            """Resolve the download URL of a runtime for a platform.

            Args:
                runtime: Runtime name ('java' or 'node')
                target: Optional platform such as 'linux-x64' or 'linux-arm64-musl'; defaults to the host
            """
            return await self.resolve_runtime(runtime, target)

        @server.tool()
        async def runtime_download_candidates(runtime: str, target: Optional[str] = None) -> str:
            """List every downloadable build of a runtime usable on a platform, best first.

            Args:
                runtime: Runtime name ('java' or 'node')
                target: Optional platform; defaults to the host
            """
            return await self.list_download_candidates(runtime, target)

        @server.tool()
        async def runtime_version_constraint(runtime: str) -> str:
            """Show the version range the workspace requests for a runtime.

            Args:
                runtime: Runtime name ('java' or 'node')
            """
            return await self.get_version_constraint(runtime)

        @server.tool()
        async def runtime_prepare(runtime: str, command: Optional[str] = None, target: Optional[str] = None) -> str:
            """Download and unpack a runtime and return the path of one of its executables.

            Args:
                runtime: Runtime name ('java' or 'node')
                command: Executable to return, e.g. 'node', 'npm' or 'npx'; defaults to the runtime name
                target: Optional platform; defaults to the host
            """
            return await self.prepare_runtime(runtime, command, target)


def main() -> None:
    """Run the multiruntime MCP server over stdio in the current directory."""
    logging.basicConfig(level=logging.INFO)
    MCPRunner().create_mcp_server().run()


if __name__ == "__main__":
    main()
