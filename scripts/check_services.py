"""Quick check that the Talent Protocol API and the query LLM are reachable."""

import sys

import httpx

from findabuilder.config import SearchConfig


def check_talent(config: SearchConfig) -> bool:
    """Fetch one listing page from the passport API."""
    url = f"{config.identity_base_url}/passports"
    print(f"Checking Talent Protocol at {url}...")
    if not config.identity_api_key:
        print("  TALENT_API_KEY is not set")
        return False
    try:
        resp = httpx.get(
            url,
            params={"per_page": "1", "page": "1"},
            headers={"X-API-KEY": config.identity_api_key},
            timeout=10.0,
        )
        resp.raise_for_status()
        total = resp.json().get("pagination", {}).get("total")
        print(f"  OK — {total if total is not None else '?'} passports listed")
        return True
    except httpx.HTTPStatusError as e:
        print(f"  HTTP {e.response.status_code}: {e.response.text[:200]}")
    except httpx.ConnectError:
        print("  Could not connect")
    return False


def check_llm(config: SearchConfig) -> bool:
    """List models on the OpenAI-compatible endpoint."""
    if config.llm_provider != "openai":
        print(f"Skipping LLM check for provider {config.llm_provider!r}")
        return True
    url = f"{config.llm_endpoint}/models"
    print(f"Checking LLM at {url} for model {config.llm_model}...")
    if not config.llm_api_key:
        print("  FAB_LLM_API_KEY is not set — queries will fall back to unfiltered listings")
        return False
    try:
        resp = httpx.get(
            url, headers={"Authorization": f"Bearer {config.llm_api_key}"}, timeout=10.0
        )
        resp.raise_for_status()
        models = [m.get("id", "?") for m in resp.json().get("data", [])]
        if config.llm_model in models:
            print(f"  {config.llm_model} is available")
        else:
            print(f"  {config.llm_model} not listed (available: {', '.join(models) or 'none'})")
        return True
    except httpx.HTTPStatusError as e:
        print(f"  HTTP {e.response.status_code}: {e.response.text[:200]}")
    except httpx.ConnectError:
        print("  Could not connect")
    return False


def main() -> None:
    """Check both external services and exit non-zero if either fails."""
    config = SearchConfig.from_env()
    talent_ok = check_talent(config)
    llm_ok = check_llm(config)
    if not (talent_ok and llm_ok):
        sys.exit(1)


if __name__ == "__main__":
    main()
