import logging
import re
from collections.abc import Callable, Sequence
from datetime import datetime

from redliner.schemas.clause import Recommendation

logger = logging.getLogger(__name__)

# Only the highest-priority changes are applied to the document
MAX_REVISIONS = 5

REVISED_HEADER = """\
===== REVISED CONTRACT WITH RECOMMENDED IMPROVEMENTS =====
Generated on: {generated_at}

DISCLAIMER: This is an AI-generated document meant for review purposes only.
Please consult with legal counsel before finalizing any contract.
The revisions below implement the suggestions provided in your contract analysis.

===================================================

"""

TRACKED_HEADER = """\
===== REVISED CONTRACT WITH TRACKED CHANGES =====
Generated on: {generated_at}

DISCLAIMER: This is an AI-generated document meant for review purposes only.
Please consult with legal counsel before finalizing any contract.
The revisions below implement the suggestions provided in your contract analysis.

===================================================

"""


def render_revised_contract(
    text: str, recommendations: Sequence[Recommendation], generated_at: datetime
) -> str:
    """Document text with each analysed clause replaced by its suggested rewrite."""
    body = _apply_revisions(text, recommendations, lambda rec: rec.suggestion)
    return REVISED_HEADER.format(generated_at=_timestamp(generated_at)) + body


def render_tracked_changes(
    text: str, recommendations: Sequence[Recommendation], generated_at: datetime
) -> str:
    """Document text with each analysed clause shown as a removal, an addition and the reason."""
    body = _apply_revisions(text, recommendations, _tracked_block)
    return TRACKED_HEADER.format(generated_at=_timestamp(generated_at)) + body


def _tracked_block(rec: Recommendation) -> str:
    return (
        f"[ORIGINAL (REMOVED): {rec.original_clause}]\n\n"
        f"[SUGGESTED (ADDED): {rec.suggestion}]\n\n"
        f"[WHY THIS MATTERS: {rec.explanation}]\n"
        f"[RISK LEVEL: {rec.risk_level.value.upper()}]"
    )


def _apply_revisions(
    text: str,
    recommendations: Sequence[Recommendation],
    replacement: Callable[[Recommendation], str],
) -> str:
    """Replace the first occurrence of each original clause in `text`.

    Matching ignores differences in whitespace, since extraction may have
    re-joined paragraphs. Positions are located in the unmodified text so a
    rewrite can never be matched by a later recommendation. A clause that
    cannot be found, or that overlaps one already placed, is skipped.
    """
    spans: list[tuple[int, int, Recommendation]] = []
    for rec in recommendations[:MAX_REVISIONS]:
        found = _locate(text, rec.original_clause)
        if found is None:
            logger.info(f"Clause for {rec.title!r} not found verbatim in document text, skipping")
            continue
        start, end = found
        if any(start < other_end and other_start < end for other_start, other_end, _ in spans):
            continue
        spans.append((start, end, rec))

    parts: list[str] = []
    cursor = 0
    for start, end, rec in sorted(spans, key=lambda span: span[0]):
        parts.append(text[cursor:start])
        parts.append(replacement(rec))
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def _locate(text: str, clause: str) -> tuple[int, int] | None:
    words = clause.split()
    if not words:
        return None
    match = re.search(r"\s+".join(re.escape(word) for word in words), text)
    return match.span() if match else None


def _timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
