"""builder_explore MCP tool — location/skills/score search with credentials."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.context import Context
from pydantic import Field

from findabuilder.models.search import ExploreFilter, SearchResponse
from findabuilder.search.pipeline import BuilderSearch, SearchError


async def run_builder_explore(
    search: BuilderSearch,
    explore_filter: ExploreFilter,
    limit: int | None = None,
) -> SearchResponse:
    """Run an exploratory search, turning pipeline failures into a generic tool error."""
    try:
        return await search.explore(explore_filter, limit=limit)
    except SearchError as e:
        raise ToolError(str(e)) from e


def register_builder_explore(mcp: FastMCP) -> None:
    """Register the builder_explore tool with the MCP server."""

    @mcp.tool()
    async def builder_explore(
        location: Annotated[
            str | None, Field(description="Location substring, e.g. 'Lisbon' or 'Remote'")
        ] = None,
        skills: Annotated[
            list[str] | None, Field(description="Profile tags to match (any)")
        ] = None,
        min_score: Annotated[
            float | None, Field(description="Minimum passport score (inclusive)", ge=0)
        ] = None,
        limit: Annotated[
            int | None, Field(description="Maximum builders to return (capped server-side)", ge=1)
        ] = None,
        ctx: Context | None = None,
    ) -> SearchResponse:
        """Explore builders by location, skills and score.

        Returns only the few highest-scoring matches, each with its full list of
        credentials. For name, wallet or free-text queries use builder_search.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        search: BuilderSearch = ctx.lifespan_context["search"]
        explore_filter = ExploreFilter(location=location, skills=skills or [], min_score=min_score)
        return await run_builder_explore(search, explore_filter, limit)
