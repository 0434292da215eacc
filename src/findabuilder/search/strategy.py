"""Lookup strategy selection: direct passport fetch or paginated listing."""

import re
from dataclasses import dataclass

from findabuilder.models.search import SearchFilter

_ENS_SUFFIX_RE = re.compile(r"\.eth$", re.IGNORECASE)


def clean_keyword(name: str) -> str:
    """Strip a trailing ".eth" and a leading "@" from a name before keyword search."""
    keyword = _ENS_SUFFIX_RE.sub("", name.strip())
    if keyword.startswith("@"):
        keyword = keyword[1:]
    return keyword.strip()


@dataclass(frozen=True)
class DirectLookup:
    """Fetch exactly one passport by wallet address or passport id."""

    identifier: str

    @property
    def is_wallet(self) -> bool:
        return self.identifier.lower().startswith("0x")

    @property
    def kind(self) -> str:
        return "wallet address" if self.is_wallet else "passport ID"


@dataclass(frozen=True)
class ListingLookup:
    """Page through the passport listing, optionally by keyword, then rank."""

    keyword: str | None = None
    min_score: float | None = None

    def query_params(self, page_size: int) -> dict[str, str]:
        params = {"per_page": str(page_size)}
        if self.keyword:
            params["keyword"] = self.keyword
        return params


LookupPlan = DirectLookup | ListingLookup


def select_strategy(search_filter: SearchFilter) -> LookupPlan:
    """Pick the lookup path for a filter; id search wins over name and score."""
    if search_filter.is_id_lookup:
        return DirectLookup(identifier=search_filter.id)

    keyword = None
    if search_filter.search_by_name and search_filter.name:
        keyword = clean_keyword(search_filter.name) or None
    return ListingLookup(keyword=keyword, min_score=search_filter.min_score)
