"""Environment-variable-based configuration."""

import os
from dataclasses import dataclass


def get_talent_api_url() -> str:
    """Return the Talent Protocol API base URL from TALENT_API_URL."""
    return os.environ.get("TALENT_API_URL", "https://api.talentprotocol.com/api/v2").rstrip("/")


def get_talent_api_key() -> str:
    """Return the Talent Protocol API key from TALENT_API_KEY."""
    return os.environ.get("TALENT_API_KEY", "").strip()


def get_llm_provider() -> str:
    """Return the query interpretation provider from FAB_LLM_PROVIDER."""
    return os.environ.get("FAB_LLM_PROVIDER", "openai").lower()


def get_llm_url() -> str:
    """Return the OpenAI-compatible API base URL from FAB_LLM_URL."""
    return os.environ.get("FAB_LLM_URL", "https://api.galadriel.com/v1").rstrip("/")


def get_llm_api_key() -> str:
    """Return the bearer token for the chat-completions API from FAB_LLM_API_KEY."""
    return os.environ.get("FAB_LLM_API_KEY", "").strip()


def get_llm_model() -> str:
    """Return the chat-completions model name from FAB_LLM_MODEL."""
    return os.environ.get("FAB_LLM_MODEL", "llama3.1:70b")


def get_anthropic_model() -> str:
    """Return the Anthropic model name from FAB_ANTHROPIC_MODEL."""
    return os.environ.get("FAB_ANTHROPIC_MODEL", "claude-3-5-haiku-latest")


def get_page_size() -> int:
    """Return the listing page size from FAB_PAGE_SIZE."""
    return int(os.environ.get("FAB_PAGE_SIZE", "25"))


def get_request_timeout() -> float:
    """Return the whole-request deadline in seconds from FAB_REQUEST_TIMEOUT."""
    return float(os.environ.get("FAB_REQUEST_TIMEOUT", "60.0"))


def get_explore_top_n() -> int:
    """Return how many explore results get credential enrichment from FAB_EXPLORE_TOP_N."""
    return int(os.environ.get("FAB_EXPLORE_TOP_N", "3"))


def get_explore_pool_size() -> int:
    """Return how many passports explore fetches before filtering from FAB_EXPLORE_POOL."""
    return int(os.environ.get("FAB_EXPLORE_POOL", "40"))


def get_log_level() -> str:
    """Return the logging level from FAB_LOG_LEVEL."""
    return os.environ.get("FAB_LOG_LEVEL", "WARNING").upper()


def get_transport() -> str:
    """Return the MCP transport from FAB_TRANSPORT ("stdio" or "http")."""
    return os.environ.get("FAB_TRANSPORT", "stdio").lower()


def get_http_host() -> str:
    """Return the HTTP bind address from FAB_HOST."""
    return os.environ.get("FAB_HOST", "127.0.0.1")


def get_http_port() -> int:
    """Return the HTTP port from FAB_PORT."""
    return int(os.environ.get("FAB_PORT", "8000"))


@dataclass(frozen=True)
class SearchConfig:
    """Settings injected into the API clients and the search pipeline."""

    identity_base_url: str = "https://api.talentprotocol.com/api/v2"
    identity_api_key: str = ""
    llm_provider: str = "openai"
    llm_endpoint: str = "https://api.galadriel.com/v1"
    llm_api_key: str = ""
    llm_model: str = "llama3.1:70b"
    anthropic_model: str = "claude-3-5-haiku-latest"
    page_size: int = 25
    request_timeout: float = 60.0
    explore_top_n: int = 3
    explore_pool_size: int = 40

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive (got {self.page_size})")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive (got {self.request_timeout})")
        if self.explore_top_n < 1:
            raise ValueError(f"explore_top_n must be positive (got {self.explore_top_n})")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Build a config from the FAB_* and TALENT_* environment variables."""
        return cls(
            identity_base_url=get_talent_api_url(),
            identity_api_key=get_talent_api_key(),
            llm_provider=get_llm_provider(),
            llm_endpoint=get_llm_url(),
            llm_api_key=get_llm_api_key(),
            llm_model=get_llm_model(),
            anthropic_model=get_anthropic_model(),
            page_size=get_page_size(),
            request_timeout=get_request_timeout(),
            explore_top_n=get_explore_top_n(),
            explore_pool_size=get_explore_pool_size(),
        )

    def missing_settings(self) -> list[str]:
        """Names of required settings that are unset."""
        missing: list[str] = []
        if not self.identity_api_key:
            missing.append("TALENT_API_KEY")
        if self.llm_provider == "openai" and not self.llm_api_key:
            missing.append("FAB_LLM_API_KEY")
        if self.llm_provider == "anthropic" and not os.environ.get("ANTHROPIC_API_KEY"):
            missing.append("ANTHROPIC_API_KEY")
        return missing
