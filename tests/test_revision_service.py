from datetime import datetime, timezone

from redliner.schemas.clause import Recommendation, RiskLevel
from redliner.services.revision_service import (
    MAX_REVISIONS,
    render_revised_contract,
    render_tracked_changes,
)

GENERATED_AT = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)

CONTRACT = (
    "1. TERM\n\nThis Agreement runs for five years.\n\n"
    "2. LIABILITY\n\nSupplier has no liability\nwhatsoever.\n\n"
    "3. NOTICES\n\nNotices go by post."
)


def _rec(original: str, suggestion: str, risk: RiskLevel = RiskLevel.MEDIUM) -> Recommendation:
    return Recommendation(
        title="Clause",
        original_clause=original,
        explanation=f"Why: {suggestion}",
        suggestion=suggestion,
        risk_level=risk,
    )


def test_clauses_are_replaced_in_place():
    recs = [_rec("This Agreement runs for five years.", "This Agreement runs for one year.")]

    revised = render_revised_contract(CONTRACT, recs, GENERATED_AT)

    assert "Generated on: 2024-05-01 12:30:00 UTC" in revised
    assert "This Agreement runs for one year." in revised
    assert "five years" not in revised
    assert "3. NOTICES\n\nNotices go by post." in revised


def test_matching_ignores_whitespace_differences():
    recs = [_rec("Supplier has no liability whatsoever.", "Liability is capped at fees paid.")]

    revised = render_revised_contract(CONTRACT, recs, GENERATED_AT)

    assert "Liability is capped at fees paid." in revised
    assert "whatsoever" not in revised


def test_unmatched_clauses_leave_text_untouched():
    recs = [_rec("A clause the document does not contain.", "Replacement.")]

    revised = render_revised_contract(CONTRACT, recs, GENERATED_AT)

    assert revised.endswith(CONTRACT)
    assert "Replacement." not in revised


def test_rewrite_is_not_rematched_by_later_recommendation():
    recs = [
        _rec("Notices go by post.", "Notices go by email."),
        _rec("Notices go by email.", "Should never appear."),
    ]

    revised = render_revised_contract(CONTRACT, recs, GENERATED_AT)

    assert "Notices go by email." in revised
    assert "Should never appear." not in revised


def test_only_top_recommendations_are_applied():
    paragraphs = [f"Paragraph number {i} of the agreement." for i in range(MAX_REVISIONS + 2)]
    text = "\n\n".join(paragraphs)
    recs = [_rec(paragraph, f"Rewritten {i}.") for i, paragraph in enumerate(paragraphs)]

    revised = render_revised_contract(text, recs, GENERATED_AT)

    assert revised.count("Rewritten") == MAX_REVISIONS
    assert paragraphs[-1] in revised


def test_tracked_changes_show_removal_addition_and_reason():
    recs = [_rec("Notices go by post.", "Notices go by email.", RiskLevel.HIGH)]

    tracked = render_tracked_changes(CONTRACT, recs, GENERATED_AT)

    assert tracked.startswith("===== REVISED CONTRACT WITH TRACKED CHANGES =====")
    assert "[ORIGINAL (REMOVED): Notices go by post.]" in tracked
    assert "[SUGGESTED (ADDED): Notices go by email.]" in tracked
    assert "[WHY THIS MATTERS: Why: Notices go by email.]" in tracked
    assert "[RISK LEVEL: HIGH]" in tracked
    assert "1. TERM" in tracked


def test_no_recommendations_returns_original_text_with_header():
    revised = render_revised_contract(CONTRACT, [], GENERATED_AT)

    assert revised.startswith("===== REVISED CONTRACT WITH RECOMMENDED IMPROVEMENTS =====")
    assert revised.endswith(CONTRACT)
