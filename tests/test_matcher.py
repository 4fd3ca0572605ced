from conftest import make_clause
from redliner.schemas.clause import ClauseType, ReferenceClause
from redliner.services.pipeline.matcher import (
    EXACT_MATCH_CONFIDENCE,
    FALLBACK_MATCH_CONFIDENCE,
    match,
    select_reference,
)


def _ref(clause_type: ClauseType, content: str | None = None) -> ReferenceClause:
    return ReferenceClause(type=clause_type, content=content or f"Reference {clause_type.value}")


def test_exact_type_match_uses_first_reference_of_that_type():
    first = _ref(ClauseType.TERMINATION, "first")
    second = _ref(ClauseType.TERMINATION, "second")
    references = [_ref(ClauseType.WARRANTY), first, second]

    pairs = match([make_clause(ClauseType.TERMINATION)], references)

    assert len(pairs) == 1
    assert pairs[0].reference is first
    assert pairs[0].confidence == EXACT_MATCH_CONFIDENCE


def test_missing_type_falls_back_to_other_reference():
    other = _ref(ClauseType.OTHER)
    references = [_ref(ClauseType.WARRANTY), other]

    reference, confidence = select_reference(ClauseType.ASSIGNMENT, references)

    assert reference is other
    assert confidence == FALLBACK_MATCH_CONFIDENCE


def test_missing_type_without_other_uses_first_reference():
    first = _ref(ClauseType.WARRANTY)
    references = [first, _ref(ClauseType.PAYMENT_TERMS)]

    reference, confidence = select_reference(ClauseType.ASSIGNMENT, references)

    assert reference is first
    assert confidence == FALLBACK_MATCH_CONFIDENCE


def test_empty_reference_set_drops_every_clause():
    clauses = [make_clause(ClauseType.TERMINATION), make_clause(ClauseType.OTHER)]

    assert match(clauses, []) == []
    assert select_reference(ClauseType.TERMINATION, []) == (None, 0.0)


def test_untyped_clause_is_matched_as_other():
    other = _ref(ClauseType.OTHER)

    pairs = match([make_clause(None)], [_ref(ClauseType.WARRANTY), other])

    assert pairs[0].reference is other
    assert pairs[0].clause_type == ClauseType.OTHER


def test_pairs_keep_input_order_and_inputs_are_untouched(references):
    clauses = [
        make_clause(ClauseType.PAYMENT_TERMS, position=0),
        make_clause(ClauseType.LIMITATION_OF_LIABILITY, position=1),
        make_clause(ClauseType.OTHER, position=2),
    ]
    snapshot = list(clauses)

    pairs = match(clauses, references)

    assert [pair.clause for pair in pairs] == clauses
    assert clauses == snapshot
    assert len(references) == 9
