from collections.abc import Mapping, Sequence
from types import MappingProxyType

from redliner.schemas.clause import ClauseType, MatchedPair

DEFAULT_LIMIT = 5

# Lower value = higher legal risk = analysed first.
CLAUSE_PRIORITY: Mapping[ClauseType, int] = MappingProxyType({
    ClauseType.LIMITATION_OF_LIABILITY: 1,
    ClauseType.INDEMNIFICATION: 2,
    ClauseType.INTELLECTUAL_PROPERTY: 3,
    ClauseType.TERMINATION: 4,
    ClauseType.PAYMENT_TERMS: 5,
    ClauseType.CONFIDENTIALITY: 6,
    ClauseType.WARRANTY: 7,
    ClauseType.GOVERNING_LAW: 8,
    ClauseType.ASSIGNMENT: 9,
    ClauseType.OTHER: 10,
})

# Rank used for a type that a substituted priority table leaves out.
LOWEST_PRIORITY = 10


def rank(
    pairs: Sequence[MatchedPair],
    limit: int = DEFAULT_LIMIT,
    priority: Mapping[ClauseType, int] = CLAUSE_PRIORITY,
) -> list[MatchedPair]:
    """Order pairs by clause-type priority and keep the first `limit`.

    The sort is stable: pairs of the same type keep their input order.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    ordered = sorted(pairs, key=lambda pair: priority.get(pair.clause_type, LOWEST_PRIORITY))
    return ordered[:limit]
