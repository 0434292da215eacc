"""Builds the summary line and payload returned to callers."""

from findabuilder.models.passport import NormalizedBuilder
from findabuilder.models.search import SearchFilter, SearchResponse

NO_MATCH_MESSAGE = "No builders found matching your criteria. Try broadening your search."


def summarize(builders: list[NormalizedBuilder], min_score: float | None) -> str:
    """Count line with the optional score threshold."""
    noun = "builder" if len(builders) == 1 else "builders"
    threshold = f" with score >= {min_score:g}" if min_score is not None else ""
    return f"Found {len(builders)} {noun}{threshold}, sorted by highest score"


def assemble(
    builders: list[NormalizedBuilder],
    search_filter: SearchFilter,
    *,
    direct: bool = False,
) -> SearchResponse:
    """Wrap builders with a human-readable summary line."""
    if direct and len(builders) == 1:
        content = f"Found builder {builders[0].name}"
    elif builders:
        content = summarize(builders, search_filter.min_score)
    else:
        content = NO_MATCH_MESSAGE
    return SearchResponse(content=content, builders=builders)
