"""builder_get MCP tool — full builder retrieval by wallet or passport ID."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.context import Context
from pydantic import Field

from findabuilder.models.passport import NormalizedBuilder
from findabuilder.search.pipeline import BuilderNotFoundError, BuilderSearch


async def run_builder_get(search: BuilderSearch, builder_id: str) -> NormalizedBuilder:
    """Fetch one builder, turning lookup failures into a tool error."""
    try:
        return await search.get_builder(builder_id)
    except BuilderNotFoundError as e:
        raise ToolError(str(e)) from e


def register_builder_get(mcp: FastMCP) -> None:
    """Register the builder_get tool with the MCP server."""

    @mcp.tool()
    async def builder_get(
        builder_id: Annotated[
            str, Field(description="Wallet address (0x...) or numeric passport ID")
        ],
        ctx: Context | None = None,
    ) -> NormalizedBuilder:
        """Retrieve the full profile of one builder.

        Use after builder_search to open a single result, including socials,
        verified wallets and credentials.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        search: BuilderSearch = ctx.lifespan_context["search"]
        return await run_builder_get(search, builder_id)
