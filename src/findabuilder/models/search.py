"""Search-related models."""

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from findabuilder.models.passport import NormalizedBuilder


class SearchFilter(BaseModel):
    """Structured filter extracted from a natural-language query."""

    model_config = ConfigDict(frozen=True)

    search_by_name: bool = False
    name: str = ""
    min_score: float | None = None
    search_by_id: bool = False
    id: str = ""

    @property
    def is_id_lookup(self) -> bool:
        """Id search takes precedence over every other filter."""
        return self.search_by_id and bool(self.id)


class InterpretationStatus(StrEnum):
    """Outcome of query interpretation."""

    OK = "ok"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class Interpretation:
    """Tagged interpretation result: the parsed filter, or the empty one with a reason."""

    filter: SearchFilter = field(default_factory=SearchFilter)
    status: InterpretationStatus = InterpretationStatus.OK
    reason: str | None = None

    @classmethod
    def ok(cls, search_filter: SearchFilter) -> "Interpretation":
        return cls(filter=search_filter, status=InterpretationStatus.OK)

    @classmethod
    def degraded(cls, reason: str) -> "Interpretation":
        return cls(filter=SearchFilter(), status=InterpretationStatus.DEGRADED, reason=reason)

    @property
    def is_degraded(self) -> bool:
        return self.status is InterpretationStatus.DEGRADED


class ExploreFilter(BaseModel):
    """Multi-field filter for exploratory search."""

    model_config = ConfigDict(frozen=True)

    location: str | None = None
    skills: list[str] = Field(default_factory=list)
    min_score: float | None = None


class SearchResponse(BaseModel):
    """Summary line plus the builders to display."""

    content: str
    builders: list[NormalizedBuilder] = Field(default_factory=list)
