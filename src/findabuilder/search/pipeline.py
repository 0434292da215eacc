"""Builder search pipeline: interpret -> select -> fetch -> rank -> normalize -> assemble."""

import asyncio
import logging

import httpx

from findabuilder.config import SearchConfig
from findabuilder.llm.provider import LLMProvider
from findabuilder.models.passport import NormalizedBuilder, Passport
from findabuilder.models.search import ExploreFilter, SearchFilter, SearchResponse
from findabuilder.passports.client import PassportClient, PassportLookupError
from findabuilder.search.assemble import assemble
from findabuilder.search.interpreter import QueryInterpreter
from findabuilder.search.normalize import DEFAULT_LOCATION, normalize
from findabuilder.search.pagination import fetch_passports
from findabuilder.search.ranking import rank, top_n
from findabuilder.search.strategy import DirectLookup, ListingLookup, select_strategy

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """A search could not be completed. The message is safe to show callers."""


class BuilderNotFoundError(Exception):
    """A builder could not be fetched by identifier."""


class BuilderSearch:
    """Runs builder searches against the identity source under one deadline per request."""

    def __init__(
        self,
        config: SearchConfig,
        passports: PassportClient,
        llm: LLMProvider | None = None,
    ) -> None:
        """Initialize with injected config, passport client and optional LLM."""
        self._config = config
        self._passports = passports
        self._interpreter = QueryInterpreter(llm)

    async def search(self, query: str, limit: int = 10) -> SearchResponse:
        """Answer a natural-language query. Raises SearchError on any unrecovered failure."""
        logger.info("Received query: %r (limit=%d)", query, limit)
        try:
            async with asyncio.timeout(self._config.request_timeout):
                return await self._search(query, limit)
        except TimeoutError as e:
            logger.error("Search timed out after %.1fs", self._config.request_timeout)
            raise SearchError("Failed to process search") from e
        except Exception as e:
            logger.exception("Search failed")
            raise SearchError("Failed to process search") from e

    async def get_builder(self, identifier: str) -> NormalizedBuilder:
        """Fetch one builder by wallet address or passport id."""
        if not identifier.strip():
            raise BuilderNotFoundError("Builder ID is required")
        try:
            async with asyncio.timeout(self._config.request_timeout):
                passport = await self._passports.get_passport(identifier)
        except (PassportLookupError, TimeoutError) as e:
            logger.error("Builder fetch failed for %s: %s", identifier, e)
            raise BuilderNotFoundError("Failed to fetch builder details") from e
        return normalize(passport)

    async def explore(self, explore_filter: ExploreFilter, limit: int | None = None) -> SearchResponse:
        """Multi-field search: filter by location and skills, keep the top N, add credentials."""
        top = min(limit, self._config.explore_top_n) if limit else self._config.explore_top_n
        try:
            async with asyncio.timeout(self._config.request_timeout):
                return await self._explore(explore_filter, top)
        except TimeoutError as e:
            logger.error("Explore timed out after %.1fs", self._config.request_timeout)
            raise SearchError("Failed to process search") from e
        except Exception as e:
            logger.exception("Explore failed")
            raise SearchError("Failed to process search") from e

    async def _search(self, query: str, limit: int) -> SearchResponse:
        interpretation = await self._interpreter.interpret(query)
        search_filter = interpretation.filter
        plan = select_strategy(search_filter)

        if isinstance(plan, DirectLookup):
            logger.info("Searching by %s: %s", plan.kind, plan.identifier)
            passport = await self._passports.get_passport(plan.identifier)
            return assemble([normalize(passport)], search_filter, direct=True)

        if plan.keyword:
            logger.info("Searching by name: %s", plan.keyword)
        passports = await self._fetch_listing(plan, limit)
        ranked = rank(passports, plan.min_score)
        builders = [normalize(p) for p in ranked]
        logger.info("Final builders count: %d", len(builders))
        return assemble(builders, search_filter)

    async def _explore(self, explore_filter: ExploreFilter, top: int) -> SearchResponse:
        passports = await self._fetch_listing(ListingLookup(), self._config.explore_pool_size)
        matching = [p for p in passports if _matches(p, explore_filter)]
        ranked = top_n(rank(matching, explore_filter.min_score), top)
        enriched = await asyncio.gather(*(self._with_credentials(p) for p in ranked))
        builders = [normalize(p) for p in enriched]
        return assemble(builders, SearchFilter(min_score=explore_filter.min_score))

    async def _fetch_listing(self, plan: ListingLookup, limit: int) -> list[Passport]:
        page_size = self._config.page_size
        return await fetch_passports(self._passports, plan.query_params(page_size), limit, page_size)

    async def _with_credentials(self, passport: Passport) -> Passport:
        try:
            credentials = await self._passports.list_credentials(passport.lookup_id)
        except (httpx.HTTPError, ValueError):
            logger.warning("Failed to fetch credentials for %s", passport.lookup_id, exc_info=True)
            return passport
        return passport.model_copy(update={"credentials": credentials})


def _matches(passport: Passport, explore_filter: ExploreFilter) -> bool:
    profile = passport.passport_profile
    if explore_filter.location:
        location = (profile.location or DEFAULT_LOCATION).lower()
        if explore_filter.location.strip().lower() not in location:
            return False
    if explore_filter.skills:
        tags = {t.lower() for t in profile.tags}
        wanted = {s.strip().lower() for s in explore_filter.skills if s.strip()}
        if wanted and not tags & wanted:
            return False
    return True
