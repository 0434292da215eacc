"""LLM-based query interpreter — translates natural language to a SearchFilter."""

import json
import logging
import math
import re
from typing import Any

from findabuilder.llm.provider import LLMProvider
from findabuilder.models.search import Interpretation, SearchFilter

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

_TRUE_STRINGS = {"true", "yes", "1"}
_FALSE_STRINGS = {"false", "no", "0", "", "null", "none"}

_SYSTEM_PROMPT = """\
You are a JSON parser that extracts search parameters for a directory of web3 builders.
ONLY return a JSON object, no explanations.
NEVER include any text before or after the JSON.

Rules for parsing:
1. searchByName is true ONLY when searching for a specific person's name/username
2. General queries about "builders" should NOT be treated as name searches
3. If the query contains score criteria, extract the number after ">" or "greater than"
4. If the query contains a wallet (0x...) or passport ID, set searchById to true

The JSON must have these exact fields:
- searchByName (boolean)
- name (string)
- minScore (number | null)
- searchById (boolean)
- id (string)\
"""

_EXAMPLES = """\
Parse this query into JSON. Examples:
"find thescoho" -> {"searchByName":true,"name":"thescoho","minScore":null,"searchById":false,"id":""}
"who is sailesh" -> {"searchByName":true,"name":"sailesh","minScore":null,"searchById":false,"id":""}
"find the best builders with score > 50" -> {"searchByName":false,"name":"","minScore":50,"searchById":false,"id":""}
"show me all builders" -> {"searchByName":false,"name":"","minScore":null,"searchById":false,"id":""}
"show wallet 0x09928cebb4c977c5e5db237a2a2ce5cd10497cb8" -> {"searchByName":false,"name":"","minScore":null,"searchById":true,"id":"0x09928cebb4c977c5e5db237a2a2ce5cd10497cb8"}
"passport 1234" -> {"searchByName":false,"name":"","minScore":null,"searchById":true,"id":"1234"}\
"""


class MalformedFieldError(ValueError):
    """A field in the LLM reply cannot be coerced to its declared type."""


def build_prompt(query: str) -> str:
    """User message: worked examples followed by the raw query."""
    return f'{_EXAMPLES}\nQuery: "{query}"'


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise MalformedFieldError(f"not a boolean: {value!r}")
    return bool(value)


def _coerce_score(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedFieldError(f"not a number: {value!r}")
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value.strip())
        except ValueError as e:
            raise MalformedFieldError(f"not a number: {value!r}") from e
    if not isinstance(value, int | float):
        raise MalformedFieldError(f"not a number: {value!r}")
    score = float(value)
    if not math.isfinite(score):
        raise MalformedFieldError(f"not a finite number: {value!r}")
    return score


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower() if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str | int | float):
        return str(value).strip()
    raise MalformedFieldError(f"not a string: {value!r}")


def parse_filter(raw: str) -> SearchFilter:
    """Parse an LLM reply into a SearchFilter. Raises ValueError when unusable."""
    fence_match = _FENCE_RE.search(raw)
    if fence_match:
        raw = fence_match.group(1)

    obj_match = _JSON_OBJECT_RE.search(raw)
    if not obj_match:
        raise ValueError("no JSON object in reply")

    data = json.loads(obj_match.group(0))
    if not isinstance(data, dict):
        raise ValueError("reply is not a JSON object")

    return SearchFilter(
        search_by_name=_coerce_bool(data.get("searchByName", False)),
        name=_coerce_str(data.get("name")),
        min_score=_coerce_score(data.get("minScore")),
        search_by_id=_coerce_bool(data.get("searchById", False)),
        id=_coerce_str(data.get("id")),
    )


class QueryInterpreter:
    """Turns free text into a SearchFilter; degrades to the empty filter on any failure."""

    def __init__(self, llm: LLMProvider | None) -> None:
        """Initialize with an LLM provider, or None to always degrade."""
        self._llm = llm

    async def interpret(self, query: str) -> Interpretation:
        """Interpret a query. Never raises."""
        if self._llm is None:
            return self._degrade("no language model configured")

        try:
            raw = await self._llm.generate(build_prompt(query), system=_SYSTEM_PROMPT)
        except Exception:
            logger.warning("Language model call failed", exc_info=True)
            return self._degrade("language model call failed")
        if raw is None:
            return self._degrade("language model unavailable")

        try:
            search_filter = parse_filter(raw)
        except ValueError as e:
            logger.debug("Unusable interpreter reply: %r", raw)
            return self._degrade(f"unusable reply: {e}")

        logger.info("Interpreted %r as %s", query, search_filter.model_dump())
        return Interpretation.ok(search_filter)

    @staticmethod
    def _degrade(reason: str) -> Interpretation:
        logger.warning("Query interpretation degraded to unfiltered listing: %s", reason)
        return Interpretation.degraded(reason)
