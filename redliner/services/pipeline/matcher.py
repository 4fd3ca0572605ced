import logging
from collections.abc import Sequence

from redliner.schemas.clause import Clause, ClauseType, MatchedPair, ReferenceClause

logger = logging.getLogger(__name__)

EXACT_MATCH_CONFIDENCE = 0.8
FALLBACK_MATCH_CONFIDENCE = 0.5


def select_reference(
    clause_type: ClauseType, references: Sequence[ReferenceClause]
) -> tuple[ReferenceClause | None, float]:
    """Pick the reference clause for one clause type.

    Exact type matches win (first in insertion order). Otherwise the first
    reference of type `other` is used, and failing that the first reference of
    the whole set. Returns (None, 0.0) only when `references` is empty.
    """
    exact = [ref for ref in references if ref.type == clause_type]
    if exact:
        return exact[0], EXACT_MATCH_CONFIDENCE

    fallback = [ref for ref in references if ref.type == ClauseType.OTHER] or list(references[:1])
    if fallback:
        return fallback[0], FALLBACK_MATCH_CONFIDENCE

    return None, 0.0


def match(
    clauses: Sequence[Clause], references: Sequence[ReferenceClause]
) -> list[MatchedPair]:
    """Pair every typed clause with a reference clause, keeping input order.

    Clauses for which no reference exists are dropped; callers can compare
    the output length against the input to see how many.
    """
    pairs: list[MatchedPair] = []
    for clause in clauses:
        clause_type = clause.type or ClauseType.OTHER
        reference, confidence = select_reference(clause_type, references)
        if reference is None:
            logger.debug(f"No reference available for clause at position {clause.position}, dropping it")
            continue
        pairs.append(MatchedPair(clause=clause, reference=reference, confidence=confidence))
    return pairs
