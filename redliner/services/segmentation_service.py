import logging
import re

from redliner.schemas.clause import Clause

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
MIN_CLAUSE_CHARS = 50


def split_into_clauses(text: str, min_chars: int = MIN_CLAUSE_CHARS) -> list[Clause]:
    """Split contract text into untyped clauses on blank lines.

    Paragraphs shorter than `min_chars` (usually headings like "5. PAYMENT")
    are held back and joined to the paragraphs that follow until a full-length
    paragraph closes the clause. Short text left over at the end becomes a
    clause of its own.
    """
    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]

    spans: list[str] = []
    pending: list[str] = []
    for paragraph in paragraphs:
        pending.append(paragraph)
        if len(paragraph) >= min_chars:
            spans.append("\n\n".join(pending))
            pending = []
    if pending:
        spans.append("\n\n".join(pending))

    logger.info(f"Split {len(paragraphs)} paragraphs into {len(spans)} clauses")
    return [Clause(content=span, position=index) for index, span in enumerate(spans)]
