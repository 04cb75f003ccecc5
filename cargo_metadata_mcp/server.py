"""
Cargo Metadata MCP Server

Exposes `cargo metadata` for a Cargo project over the Model Context
Protocol: package info, dependencies, build targets, workspace members
and features, without the client running cargo itself.

Tools:
- get_metadata: full cargo metadata document
- get_package_info: root package summary with resolved dependency versions
- get_dependencies: root package dependency summaries
- get_targets: root package build targets
- get_workspace_info: workspace member packages
- get_features: root package feature map
"""

import asyncio
import logging
import sys
from typing import Callable, Optional

from mcp.server import FastMCP
from mcp.types import INTERNAL_ERROR, CallToolResult, TextContent

from .config import Settings, get_settings
from .errors import QueryResult
from .metadata_cache import MetadataCache
from .queries import MetadataQueries
from .resolver import CargoMetadataResolver, MetadataResolver

logger = logging.getLogger(__name__)

PROMPT_TEXT = (
    "Welcome to the Cargo Metadata server! Use it to retrieve metadata for a "
    "Cargo project: package information, dependencies, build targets, "
    "workspace members and features. Every tool takes manifest_path, the "
    "absolute path to the project's Cargo.toml."
)


class CargoMetadataMCPServer:
    """MCP server answering cargo metadata queries from a shared cache."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        resolver: Optional[MetadataResolver] = None,
    ):
        self.settings = settings or get_settings()
        self.mcp = FastMCP(self.settings.server_name)
        self.resolver = resolver or CargoMetadataResolver.from_settings(self.settings)
        self.cache = MetadataCache(
            self.resolver, per_manifest=self.settings.cache_per_manifest
        )
        self.queries = MetadataQueries(self.cache)

        logger.info("Cargo metadata server ready (cache mode: %s)", self.cache.mode)

        # Register MCP handlers
        self._register_tools()
        self._register_prompts()

    async def _call(
        self, query: Callable[[str], QueryResult], manifest_path: str
    ) -> CallToolResult:
        """
        Run a query off the event loop and build the tool result.

        Failures come back as an error result whose structured content
        carries the JSON-RPC code and the error kind.
        """
        result = await asyncio.to_thread(query, manifest_path)
        if not result.success:
            logger.warning("%s failed: %s", query.__name__, result.message)
            return CallToolResult(
                content=[TextContent(type="text", text=result.message)],
                structuredContent={
                    "code": INTERNAL_ERROR,
                    "kind": result.error_kind.value,
                    "message": result.message,
                },
                isError=True,
            )
        return CallToolResult(content=[TextContent(type="text", text=result.payload)])

    def _register_tools(self):
        """Register MCP tools."""

        @self.mcp.tool()
        async def get_metadata(manifest_path: str) -> CallToolResult:
            """
            Get the metadata of a Cargo project.

            Returns the full `cargo metadata` output for the project.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_metadata, manifest_path)

        @self.mcp.tool()
        async def get_package_info(manifest_path: str) -> CallToolResult:
            """
            Get the package information of a Cargo project.

            Returns name, version, authors, description, repository, license
            and dependencies of the root package.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_package_info, manifest_path)

        @self.mcp.tool()
        async def get_dependencies(manifest_path: str) -> CallToolResult:
            """
            Get the dependency list of a Cargo project.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_dependencies, manifest_path)

        @self.mcp.tool()
        async def get_targets(manifest_path: str) -> CallToolResult:
            """
            Get the build targets of a Cargo project.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_targets, manifest_path)

        @self.mcp.tool()
        async def get_workspace_info(manifest_path: str) -> CallToolResult:
            """
            Get the workspace information of a Cargo project.

            Returns the workspace member packages.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_workspace_info, manifest_path)

        @self.mcp.tool()
        async def get_features(manifest_path: str) -> CallToolResult:
            """
            Get the features of a Cargo project.

            Args:
                manifest_path: Absolute path to the project's Cargo.toml
            """
            return await self._call(self.queries.get_features, manifest_path)

    def _register_prompts(self):
        """Register MCP prompts."""

        @self.mcp.prompt()
        def cargo_metadata_prompt() -> str:
            """Cargo Metadata MCP Server: retrieve metadata for Cargo projects."""
            return PROMPT_TEXT


def main():
    """Main entry point for the Cargo Metadata MCP Server"""
    settings = get_settings()

    # stdout carries the MCP stream
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Cargo Metadata MCP Server (%s transport)", settings.transport)

    server = CargoMetadataMCPServer(settings)

    # Run MCP server (this starts its own event loop)
    server.mcp.run(transport=settings.transport)


if __name__ == "__main__":
    main()
