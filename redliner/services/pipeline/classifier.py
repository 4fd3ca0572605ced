from redliner.schemas.clause import Clause, ClauseType

# Checked top to bottom; the first rule with a matching keyword wins.
# Keywords are lowercase substrings, so "terminat" covers terminate/termination.
CLASSIFICATION_RULES: tuple[tuple[ClauseType, tuple[str, ...]], ...] = (
    (ClauseType.LIMITATION_OF_LIABILITY, ("liability", "damages", "limit")),
    (ClauseType.TERMINATION, ("terminat",)),
    (ClauseType.INTELLECTUAL_PROPERTY, ("intellectual property", "copyright", "patent", "trademark")),
    (ClauseType.INDEMNIFICATION, ("indemnif",)),
    (ClauseType.PAYMENT_TERMS, ("payment", "invoice", "fee")),
    (ClauseType.CONFIDENTIALITY, ("confidential",)),
    (ClauseType.GOVERNING_LAW, ("governing law", "jurisdiction")),
    (ClauseType.WARRANTY, ("warrant",)),
    (ClauseType.ASSIGNMENT, ("assign",)),
)


def classify(text: str) -> ClauseType:
    """Return the clause type for a span of contract text. Never fails."""
    lowered = text.lower()
    for clause_type, keywords in CLASSIFICATION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return clause_type
    return ClauseType.OTHER


def classify_clause(clause: Clause) -> Clause:
    """Fill in the type of an untyped clause. Pre-typed clauses come back unchanged."""
    if clause.type is not None:
        return clause
    return clause.model_copy(update={"type": classify(clause.content)})
