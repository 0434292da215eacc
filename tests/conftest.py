"""Shared test fixtures."""

import math
from typing import Any

import httpx
import pytest
import pytest_asyncio

from findabuilder.config import SearchConfig
from findabuilder.passports.client import PassportClient

TALENT_URL = "https://talent.test/api/v2"
LLM_URL = "https://llm.test/v1"


def make_passport(
    wallet: str = "0x0000000000000000000000000000000000000001",
    name: str = "builder",
    score: float = 50.0,
    passport_id: int | None = None,
    location: str | None = None,
    tags: list[str] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Raw passport JSON as the identity source returns it."""
    data: dict[str, Any] = {
        "passport_id": passport_id,
        "main_wallet": wallet,
        "score": score,
        "activity_score": 10.0,
        "identity_score": 20.0,
        "skills_score": 30.0,
        "human_checkmark": True,
        "verified": False,
        "verified_wallets": [wallet],
        "passport_profile": {
            "display_name": name,
            "name": name,
            "bio": f"{name} builds things",
            "image_url": f"https://img.test/{name}.png",
            "location": location,
            "tags": tags if tags is not None else ["solidity"],
        },
        "passport_socials": [
            {"profile_name": name, "source": "farcaster", "profile_url": f"https://warpcast.com/{name}"}
        ],
    }
    data.update(overrides)
    return data


def make_passports(count: int, start_score: float = 90.0) -> list[dict[str, Any]]:
    """``count`` distinct passports with descending scores."""
    return [
        make_passport(
            wallet=f"0x{i:040x}",
            name=f"builder{i}",
            score=start_score - i * 0.5,
            passport_id=1000 + i,
        )
        for i in range(count)
    ]


class FakeTalentAPI:
    """In-memory stand-in for the passport API, served through httpx.MockTransport."""

    def __init__(
        self,
        passports: list[dict[str, Any]] | None = None,
        include_pagination: bool = True,
    ) -> None:
        self.passports = passports or []
        self.include_pagination = include_pagination
        self.failing_pages: set[int] = set()
        self.credentials: dict[str, list[dict[str, Any]]] = {}
        self.failing_credentials: set[str] = set()
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("X-API-KEY") != "test-key":
            return httpx.Response(401, json={"error": "unauthorized"})
        path = request.url.path
        params = request.url.params
        if path.endswith("/passport_credentials"):
            passport_id = params.get("passport_id", "")
            if passport_id in self.failing_credentials:
                return httpx.Response(502)
            return httpx.Response(
                200, json={"passport_credentials": self.credentials.get(passport_id, [])}
            )
        if path.endswith("/passports"):
            return self._listing(params)
        if "/passports/" in path:
            identifier = path.rsplit("/", 1)[1]
            for p in self.passports:
                if identifier.lower() == str(p["main_wallet"]).lower() or identifier == str(
                    p.get("passport_id")
                ):
                    return httpx.Response(200, json={"passport": p})
            return httpx.Response(404, json={"error": "Resource not found"})
        return httpx.Response(404)

    def _listing(self, params: httpx.QueryParams) -> httpx.Response:
        page = int(params.get("page", "1"))
        if page in self.failing_pages:
            return httpx.Response(500, json={"error": "boom"})
        per_page = int(params.get("per_page", "25"))
        keyword = params.get("keyword")
        matching = self.passports
        if keyword:
            matching = [
                p
                for p in self.passports
                if keyword.lower() in (p["passport_profile"]["display_name"] or "").lower()
            ]
        chunk = matching[(page - 1) * per_page : page * per_page]
        body: dict[str, Any] = {"passports": chunk}
        if self.include_pagination:
            body["pagination"] = {
                "current_page": page,
                "last_page": max(1, math.ceil(len(matching) / per_page)),
                "total": len(matching),
            }
        return httpx.Response(200, json=body)

    @property
    def listing_pages(self) -> list[int]:
        """Page numbers requested from the listing endpoint, in order."""
        return [
            int(r.url.params["page"]) for r in self.requests if r.url.path.endswith("/passports")
        ]

    @property
    def credential_requests(self) -> list[str]:
        return [
            r.url.params["passport_id"]
            for r in self.requests
            if r.url.path.endswith("/passport_credentials")
        ]

    def client(self, config: SearchConfig) -> PassportClient:
        transport = httpx.MockTransport(self.handler)
        return PassportClient(config, httpx.AsyncClient(transport=transport))


class FakeLLM:
    """Controllable fake LLM for testing."""

    def __init__(
        self,
        response: str | None = "{}",
        available: bool = True,
        error: Exception | None = None,
    ):
        self.response = response
        self._available = available
        self.error = error
        self.last_prompt: str | None = None
        self.last_system: str | None = None
        self.generate_count = 0

    async def is_available(self) -> bool:
        return self._available

    async def generate(self, prompt: str, *, system: str | None = None) -> str | None:
        self.last_prompt = prompt
        self.last_system = system
        self.generate_count += 1
        if self.error is not None:
            raise self.error
        if not self._available:
            return None
        return self.response

    async def close(self) -> None:
        pass


@pytest.fixture
def config() -> SearchConfig:
    """Config pointing at the fake services with a short deadline."""
    return SearchConfig(
        identity_base_url=TALENT_URL,
        identity_api_key="test-key",
        llm_endpoint=LLM_URL,
        llm_api_key="llm-key",
        llm_model="test-model",
        page_size=25,
        request_timeout=5.0,
        explore_top_n=3,
        explore_pool_size=40,
    )


@pytest.fixture
def talent_api() -> FakeTalentAPI:
    """Empty fake passport API; tests fill ``passports`` as needed."""
    return FakeTalentAPI()


@pytest_asyncio.fixture
async def passport_client(config, talent_api):
    """PassportClient wired to the fake API."""
    client = talent_api.client(config)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def fake_llm():
    """Controllable fake LLM client."""
    return FakeLLM()
