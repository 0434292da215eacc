"""Sequential, lazily pulled pagination over the passport listing."""

import logging
import math
from collections.abc import AsyncIterator

import httpx

from findabuilder.models.passport import Passport, PassportPage
from findabuilder.passports.client import PassportClient

logger = logging.getLogger(__name__)


def pages_needed(limit: int, page_size: int) -> int:
    """Number of pages required to cover ``limit`` records."""
    if limit <= 0:
        return 0
    return math.ceil(limit / page_size)


async def iter_pages(
    client: PassportClient,
    params: dict[str, str],
    page_size: int,
    max_pages: int,
) -> AsyncIterator[PassportPage]:
    """Yield listing pages one at a time, starting at page 1.

    Stops after ``max_pages``, on the first failed fetch, on a short page, or
    when the pagination metadata marks the last page. A failed fetch ends the
    sequence quietly so callers keep what they already pulled.
    """
    page_number = 1
    while page_number <= max_pages:
        try:
            page = await client.list_passports(params, page=page_number)
        except (httpx.HTTPError, ValueError):
            logger.warning("Failed to fetch page %d, stopping pagination", page_number, exc_info=True)
            return

        yield page

        if page.received_count < page_size or page.is_last:
            return
        page_number += 1


async def fetch_passports(
    client: PassportClient,
    params: dict[str, str],
    limit: int,
    page_size: int,
) -> list[Passport]:
    """Collect up to ``limit`` passports in fetch order."""
    collected: list[Passport] = []
    async for page in iter_pages(client, params, page_size, pages_needed(limit, page_size)):
        collected.extend(page.passports)
        logger.debug(
            "Pagination: page=%s total=%s this_page=%d collected=%d",
            page.pagination.current_page,
            page.pagination.total,
            len(page.passports),
            len(collected),
        )
    return collected[:limit]
