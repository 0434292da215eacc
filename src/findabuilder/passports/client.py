"""Async client for the Talent Protocol passport API."""

import logging

import httpx

from findabuilder.config import SearchConfig
from findabuilder.models.passport import Passport, PassportCredential, PassportPage

logger = logging.getLogger(__name__)


class PassportLookupError(Exception):
    """A single passport could not be retrieved."""

    def __init__(self, identifier: str, status_code: int | None = None) -> None:
        self.identifier = identifier
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Could not retrieve passport {identifier!r}{detail}")


class PassportClient:
    """Reads passports, passport listings and credentials, authenticated with X-API-KEY."""

    def __init__(self, config: SearchConfig, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize with config and an optional HTTP client."""
        self._config = config
        self._http = http_client

    @property
    def page_size(self) -> int:
        return self._config.page_size

    async def get_passport(self, identifier: str) -> Passport:
        """Fetch one passport by wallet address or numeric passport id.

        The identifier is passed through verbatim. Raises PassportLookupError on
        a non-success status, a transport error, an identifier that cannot form a
        URL, or an unreadable body.
        """
        try:
            resp = await self._get(f"/passports/{identifier}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PassportLookupError(identifier) from e
        if not resp.is_success:
            logger.error(
                "Failed to fetch passport %s: %s %s",
                identifier,
                resp.status_code,
                resp.reason_phrase,
            )
            raise PassportLookupError(identifier, resp.status_code)
        try:
            data = resp.json()
            return Passport.model_validate(data["passport"])
        except (ValueError, KeyError, TypeError) as e:
            raise PassportLookupError(identifier, resp.status_code) from e

    async def list_passports(self, params: dict[str, str], page: int) -> PassportPage:
        """Fetch one listing page. Raises httpx.HTTPError or ValueError on failure."""
        resp = await self._get("/passports", params={**params, "page": str(page)})
        resp.raise_for_status()
        return PassportPage.model_validate(resp.json())

    async def list_credentials(self, passport_id: str) -> list[PassportCredential]:
        """Fetch the credentials earned by one passport."""
        resp = await self._get("/passport_credentials", params={"passport_id": passport_id})
        resp.raise_for_status()
        data = resp.json()
        return [
            PassportCredential.model_validate(item)
            for item in data.get("passport_credentials") or []
        ]

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        client = self._get_client()
        return await client.get(
            f"{self._config.identity_base_url}{path}",
            params=params,
            headers={
                "X-API-KEY": self._config.identity_api_key,
                "Content-Type": "application/json",
            },
            timeout=self._config.request_timeout,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if open."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
