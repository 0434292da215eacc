"""Builder search pipeline module."""

from findabuilder.search.pipeline import BuilderNotFoundError, BuilderSearch, SearchError

__all__ = ["BuilderNotFoundError", "BuilderSearch", "SearchError"]
