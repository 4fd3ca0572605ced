import json

from conftest import FakeLLM
from redliner.exceptions import LLMProviderError
from redliner.schemas.clause import ClauseType
from redliner.services.clause_service import ClauseService

CONTRACT = (
    "1. TERM\n\nThis Agreement starts on the Effective Date and continues for two years.\n\n"
    "2. FEES\n\nCustomer shall pay the fees set out in the Order Form within thirty days."
)


def _extraction(*clauses) -> str:
    return json.dumps({"clauses": [{"clause_type": t, "content": c} for t, c in clauses]})


async def test_without_llm_uses_paragraph_split():
    clauses = await ClauseService().extract_clauses(CONTRACT)

    assert len(clauses) == 2
    assert clauses[0].content.startswith("1. TERM")
    assert all(clause.type is None for clause in clauses)


async def test_llm_clauses_are_typed_and_positioned():
    llm = FakeLLM(_extraction(
        ("termination", "Either party may end this Agreement."),
        ("payment_terms", "Customer shall pay within thirty days."),
    ))

    clauses = await ClauseService(llm).extract_clauses(CONTRACT)

    assert [clause.type for clause in clauses] == [ClauseType.TERMINATION, ClauseType.PAYMENT_TERMS]
    assert [clause.position for clause in clauses] == [0, 1]
    assert llm.calls[0]["response_format"] == {"type": "json_object"}


async def test_unknown_labels_are_left_for_classifier():
    llm = FakeLLM(_extraction(("liability", "Liability is capped."), (None, "Notices go by post.")))

    clauses = await ClauseService(llm).extract_clauses(CONTRACT)

    assert [clause.type for clause in clauses] == [None, None]


async def test_blank_extracted_clauses_are_skipped_without_gaps():
    llm = FakeLLM(_extraction(
        ("termination", "First."),
        ("other", "   "),
        ("warranty", "Second."),
    ))

    clauses = await ClauseService(llm).extract_clauses(CONTRACT)

    assert [clause.content for clause in clauses] == ["First.", "Second."]
    assert [clause.position for clause in clauses] == [0, 1]


async def test_provider_failure_falls_back_to_split():
    clauses = await ClauseService(FakeLLM(LLMProviderError("down"))).extract_clauses(CONTRACT)

    assert len(clauses) == 2
    assert all(clause.type is None for clause in clauses)


async def test_invalid_json_falls_back_to_split():
    clauses = await ClauseService(FakeLLM("{not json")).extract_clauses(CONTRACT)

    assert len(clauses) == 2


async def test_wrong_shape_falls_back_to_split():
    clauses = await ClauseService(FakeLLM(json.dumps({"items": []}))).extract_clauses(CONTRACT)

    assert len(clauses) == 2


async def test_empty_extraction_falls_back_to_split():
    clauses = await ClauseService(FakeLLM(_extraction())).extract_clauses(CONTRACT)

    assert len(clauses) == 2


async def test_long_text_is_truncated_before_llm_call():
    llm = FakeLLM(_extraction(("other", "Whatever.")))

    await ClauseService(llm, max_chars=20).extract_clauses(CONTRACT)

    user_message = llm.calls[0]["messages"][1]["content"]
    assert CONTRACT[:20] in user_message
    assert CONTRACT[:21] not in user_message
