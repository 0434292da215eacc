"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastmcp import FastMCP

from findabuilder.config import SearchConfig, get_log_level
from findabuilder.llm.provider import create_llm
from findabuilder.passports.client import PassportClient
from findabuilder.search.pipeline import BuilderSearch
from findabuilder.tools.builder_explore import register_builder_explore
from findabuilder.tools.builder_get import register_builder_get
from findabuilder.tools.builder_search import register_builder_search


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage the HTTP clients shared by every request."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    config = SearchConfig.from_env()
    for name in config.missing_settings():
        logger.warning("%s is not set — requests depending on it will fail", name)

    passports = PassportClient(config, httpx.AsyncClient())
    llm = create_llm(config)
    if llm is not None:
        logger.info("Query LLM: %s", config.llm_provider)

    search = BuilderSearch(config, passports, llm)
    logger.info("Identity source: %s (page size %d)", config.identity_base_url, config.page_size)

    try:
        yield {
            "config": config,
            "passports": passports,
            "llm": llm,
            "search": search,
        }
    finally:
        if llm is not None:
            await llm.close()
        await passports.close()
        logger.info("HTTP clients closed")


_INSTRUCTIONS = """\
Find web3 builders (Talent Protocol passports) from natural-language questions.

QUERYING — pick the right tool:
- builder_search: Free-text questions. Examples: "find thescoho", \
"who is sailesh", "show wallet 0x09928c...", "find the best builders with \
score > 50", "show me all builders". Returns a summary line plus builders \
sorted by passport score.
- builder_get: Full profile of one builder by wallet address or passport ID.
- builder_explore: Structured search by location, skills (profile tags) and \
minimum score. Returns the top few matches with their credentials.

Scores: passport score is an aggregate 0-100 reputation score; activity, \
identity and skills sub-scores are returned alongside it.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "findabuilder",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_builder_search(mcp)
    register_builder_get(mcp)
    register_builder_explore(mcp)

    return mcp
