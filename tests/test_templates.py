import pytest

from conftest import make_clause
from redliner.schemas.clause import ClauseType, RiskLevel
from redliner.services.pipeline.templates import (
    CLAUSE_TEMPLATES,
    ClauseTemplate,
    StaticTemplateProvider,
    template_for,
    title_for,
)


@pytest.mark.parametrize("clause_type", list(ClauseType))
def test_every_type_renders_complete_recommendation(clause_type):
    clause = make_clause(clause_type)

    recommendation = StaticTemplateProvider().render(clause)

    assert recommendation.title.strip()
    assert recommendation.explanation.strip()
    assert recommendation.suggestion.strip()
    assert recommendation.original_clause == clause.content
    assert isinstance(recommendation.risk_level, RiskLevel)


def test_every_named_type_except_other_has_dedicated_template():
    assert set(CLAUSE_TEMPLATES) == set(ClauseType) - {ClauseType.OTHER}


def test_other_uses_generic_template():
    template = template_for(ClauseType.OTHER)

    assert template.title == "Other"
    assert template.suggestion.startswith("REVISED OTHER:")
    assert template.risk_level == RiskLevel.MEDIUM


def test_titles():
    assert title_for(ClauseType.LIMITATION_OF_LIABILITY) == "Limitation of Liability"
    assert title_for(ClauseType.GOVERNING_LAW) == "Governing Law and Jurisdiction"
    assert title_for(ClauseType.OTHER) == "Other"


def test_untyped_clause_renders_as_other():
    recommendation = StaticTemplateProvider().render(make_clause(None))

    assert recommendation.title == "Other"


def test_custom_template_table_falls_back_to_generic():
    custom = {
        ClauseType.WARRANTY: ClauseTemplate(
            title="Custom Warranty",
            explanation="Custom explanation.",
            suggestion="Custom suggestion.",
            risk_level=RiskLevel.LOW,
        )
    }
    provider = StaticTemplateProvider(custom)

    assert provider.render(make_clause(ClauseType.WARRANTY)).title == "Custom Warranty"
    assert provider.render(make_clause(ClauseType.TERMINATION)).title == "Termination"


def test_high_risk_templates():
    assert CLAUSE_TEMPLATES[ClauseType.LIMITATION_OF_LIABILITY].risk_level == RiskLevel.HIGH
    assert CLAUSE_TEMPLATES[ClauseType.INTELLECTUAL_PROPERTY].risk_level == RiskLevel.HIGH
    assert CLAUSE_TEMPLATES[ClauseType.PAYMENT_TERMS].risk_level == RiskLevel.LOW
