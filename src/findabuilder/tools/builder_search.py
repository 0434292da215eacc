"""builder_search MCP tool — natural-language builder search."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.context import Context
from pydantic import Field

from findabuilder.models.search import SearchResponse
from findabuilder.search.pipeline import BuilderSearch, SearchError

_MAX_LIMIT = 100


async def run_builder_search(search: BuilderSearch, query: str, limit: int = 10) -> SearchResponse:
    """Run a search, turning pipeline failures into a generic tool error."""
    try:
        return await search.search(query, limit=limit)
    except SearchError as e:
        raise ToolError(str(e)) from e


def register_builder_search(mcp: FastMCP) -> None:
    """Register the builder_search tool with the MCP server."""

    @mcp.tool()
    async def builder_search(
        query: Annotated[
            str,
            Field(description="Natural-language query, e.g. 'find the best builders with score > 50'"),
        ],
        limit: Annotated[
            int, Field(description=f"Maximum builders to return (1-{_MAX_LIMIT})", ge=1, le=_MAX_LIMIT)
        ] = 10,
        ctx: Context | None = None,
    ) -> SearchResponse:
        """Find web3 builders by name, wallet address, passport ID or minimum score.

        The query is interpreted by an LLM into a structured filter. Wallet
        addresses (0x...) and passport IDs return a single builder; anything else
        pages through the passport listing and returns builders sorted by
        passport score, highest first. If the query cannot be interpreted, an
        unfiltered listing is returned instead.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        search: BuilderSearch = ctx.lifespan_context["search"]
        return await run_builder_search(search, query, limit)
