"""Score filtering and ranking of passports."""

import logging

from findabuilder.models.passport import Passport

logger = logging.getLogger(__name__)


def rank(passports: list[Passport], min_score: float | None = None) -> list[Passport]:
    """Keep passports scoring at least ``min_score`` and sort by score, highest first.

    The sort is stable, so equal scores keep their fetch order.
    """
    kept = [p for p in passports if min_score is None or p.score >= min_score]
    ranked = sorted(kept, key=lambda p: p.score, reverse=True)
    logger.info(
        "Ranking: %d input -> %d kept | min_score=%s",
        len(passports),
        len(ranked),
        min_score,
    )
    return ranked


def top_n(passports: list[Passport], n: int) -> list[Passport]:
    """First ``n`` passports of an already ranked list."""
    return passports[: max(n, 0)]
