"""Deterministic recommendation templates.

Used whenever the external generator is unavailable, fails, times out or
returns malformed data. Every suggestion is written as a complete clause that
can be pasted into a contract as-is.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from redliner.schemas.clause import Clause, ClauseType, Recommendation, RiskLevel


@dataclass(frozen=True)
class ClauseTemplate:
    title: str
    explanation: str
    suggestion: str
    risk_level: RiskLevel

    def render(self, clause: Clause) -> Recommendation:
        return Recommendation(
            title=self.title,
            original_clause=clause.content,
            explanation=self.explanation,
            suggestion=self.suggestion,
            risk_level=self.risk_level,
        )


CLAUSE_TEMPLATES: dict[ClauseType, ClauseTemplate] = {
    ClauseType.LIMITATION_OF_LIABILITY: ClauseTemplate(
        title="Limitation of Liability",
        explanation=(
            "This clause restricts how much the supplier must pay if something goes wrong. "
            "The current version may cap liability too low to adequately protect you in case "
            "of major issues, and may not exclude gross negligence or data breaches."
        ),
        suggestion=(
            "LIMITATION OF LIABILITY: Notwithstanding anything to the contrary, neither party's "
            "aggregate liability arising out of or related to this Agreement shall exceed the "
            "greater of: (i) two times the total fees paid or payable under this Agreement in the "
            "twelve (12) months preceding the claim, or (ii) $500,000. The foregoing limitations "
            "shall not apply to: (a) either party's gross negligence or willful misconduct; "
            "(b) breach of confidentiality obligations; (c) infringement of the other party's "
            "intellectual property rights; (d) data breaches or unauthorized access to personal "
            "information; or (e) either party's indemnification obligations under this Agreement."
        ),
        risk_level=RiskLevel.HIGH,
    ),
    ClauseType.TERMINATION: ClauseTemplate(
        title="Termination Clause",
        explanation=(
            "This clause controls how and when either party can end the agreement. Unbalanced "
            "termination rights can leave you vulnerable to sudden service disruption or "
            "unfavorable long-term commitments."
        ),
        suggestion=(
            "TERMINATION: Either party may terminate this Agreement: (a) for convenience by "
            "providing ninety (90) days prior written notice to the other party; (b) immediately "
            "upon written notice if the other party materially breaches this Agreement and fails "
            "to cure such breach within thirty (30) days of receiving written notice; or "
            "(c) immediately if the other party becomes insolvent, files for bankruptcy, or ceases "
            "business operations. Upon termination, Supplier shall provide reasonable transition "
            "assistance for up to sixty (60) days to facilitate migration to an alternative "
            "provider. Customer shall pay only for services rendered through the effective "
            "termination date."
        ),
        risk_level=RiskLevel.MEDIUM,
    ),
    ClauseType.INTELLECTUAL_PROPERTY: ClauseTemplate(
        title="Intellectual Property Rights",
        explanation=(
            "This clause determines who owns the work created under this agreement. If not "
            "properly negotiated, you could pay for custom work but not actually own it, limiting "
            "your ability to use, modify, or transfer it freely."
        ),
        suggestion=(
            "INTELLECTUAL PROPERTY: Customer shall own all right, title, and interest in and to "
            "all custom work product, deliverables, and materials created specifically for "
            "Customer under this Agreement (\"Custom IP\"). Supplier hereby assigns to Customer all "
            "Custom IP, and shall execute any documents reasonably necessary to perfect such "
            "assignment. Supplier retains ownership of its pre-existing intellectual property, "
            "tools, methodologies, and general know-how (\"Supplier IP\"). Supplier grants Customer "
            "a perpetual, irrevocable, worldwide, royalty-free license to use any Supplier IP "
            "incorporated into the Custom IP. Neither party shall use the other party's trademarks "
            "or brand without prior written consent."
        ),
        risk_level=RiskLevel.HIGH,
    ),
    ClauseType.INDEMNIFICATION: ClauseTemplate(
        title="Indemnification",
        explanation=(
            "This clause determines who pays legal costs and damages if someone sues over the "
            "work performed. One-sided indemnification could leave you financially responsible "
            "for the supplier's mistakes or intellectual property violations."
        ),
        suggestion=(
            "INDEMNIFICATION: Supplier shall indemnify, defend, and hold harmless Customer from "
            "and against any and all claims, damages, losses, and expenses (including reasonable "
            "attorneys' fees) arising from: (a) any claim that the services or deliverables "
            "infringe or misappropriate any third party's intellectual property rights; "
            "(b) Supplier's breach of its obligations under this Agreement; or (c) Supplier's "
            "negligence or willful misconduct. Customer shall indemnify Supplier from claims "
            "arising solely from Customer's misuse of the deliverables in violation of this "
            "Agreement. The indemnified party shall promptly notify the indemnifying party of any "
            "claim and cooperate in the defense, and the indemnifying party shall have sole "
            "control of the defense and settlement."
        ),
        risk_level=RiskLevel.MEDIUM,
    ),
    ClauseType.PAYMENT_TERMS: ClauseTemplate(
        title="Payment Terms",
        explanation=(
            "This clause establishes when and how you must pay. Unfavorable payment terms could "
            "require upfront payment before delivery, impose excessive late fees, or prevent you "
            "from disputing incorrect charges."
        ),
        suggestion=(
            "PAYMENT TERMS: Customer shall pay invoiced amounts within thirty (30) days of invoice "
            "date via wire transfer or check. Supplier shall submit detailed invoices with "
            "supporting documentation for all fees. Customer may withhold payment and provide "
            "written notice if it disputes any charges in good faith; parties shall work together "
            "to resolve disputes within fifteen (15) days. Undisputed amounts remain due per the "
            "original schedule. Late payments shall accrue interest at the lesser of 1.5% per "
            "month or the maximum rate permitted by law. All fees are exclusive of applicable "
            "taxes, which Customer shall pay or provide valid exemption certificates."
        ),
        risk_level=RiskLevel.LOW,
    ),
    ClauseType.CONFIDENTIALITY: ClauseTemplate(
        title="Confidentiality",
        explanation=(
            "This clause protects sensitive information shared during the business relationship. "
            "One-sided or overly broad confidentiality obligations could restrict your ability to "
            "discuss your own business or use general knowledge gained during the relationship."
        ),
        suggestion=(
            "CONFIDENTIALITY: Each party agrees to maintain in confidence all Confidential "
            "Information disclosed by the other party and to use such information only for "
            "purposes of this Agreement. \"Confidential Information\" means non-public information "
            "marked as confidential or that reasonably should be considered confidential. "
            "Confidential Information excludes information that: (a) is or becomes publicly "
            "available through no breach of this Agreement; (b) was rightfully known prior to "
            "disclosure; (c) is independently developed without use of the other party's "
            "Confidential Information; or (d) is rightfully received from a third party without "
            "confidentiality obligations. These obligations survive for five (5) years after "
            "termination of this Agreement."
        ),
        risk_level=RiskLevel.MEDIUM,
    ),
    ClauseType.WARRANTY: ClauseTemplate(
        title="Warranty",
        explanation=(
            "This clause establishes what the supplier promises about their work quality and what "
            "remedies you have if the work is defective. Weak warranties or disclaimer clauses can "
            "leave you with no recourse if deliverables don't meet your needs."
        ),
        suggestion=(
            "WARRANTIES: Supplier warrants that: (a) the services shall be performed in a "
            "professional and workmanlike manner consistent with industry standards; (b) the "
            "deliverables shall materially conform to the specifications agreed in the Statement "
            "of Work; (c) the deliverables shall not infringe any third party's intellectual "
            "property rights; and (d) Supplier has the full right and authority to enter into this "
            "Agreement and grant the rights granted herein. If any deliverables do not conform to "
            "these warranties, Supplier shall re-perform the non-conforming services or replace "
            "the non-conforming deliverables at no additional charge within thirty (30) days of "
            "notice. If Supplier fails to cure the breach within such period, Customer may "
            "terminate the affected portion and receive a pro-rata refund."
        ),
        risk_level=RiskLevel.MEDIUM,
    ),
    ClauseType.GOVERNING_LAW: ClauseTemplate(
        title="Governing Law and Jurisdiction",
        explanation=(
            "This clause determines which state's laws apply and where lawsuits must be filed. "
            "Unfavorable jurisdiction could force you to litigate in a distant, expensive forum or "
            "under laws that don't protect your interests as well."
        ),
        suggestion=(
            "GOVERNING LAW AND JURISDICTION: This Agreement shall be governed by and construed in "
            "accordance with the laws of the State of [Your State], without regard to its conflict "
            "of laws principles. Each party irrevocably consents to the exclusive jurisdiction and "
            "venue of the state and federal courts located in [Your County, Your State] for any "
            "disputes arising out of or relating to this Agreement. Each party waives any "
            "objection to such jurisdiction or venue on the grounds of inconvenient forum or "
            "otherwise."
        ),
        risk_level=RiskLevel.LOW,
    ),
    ClauseType.ASSIGNMENT: ClauseTemplate(
        title="Assignment",
        explanation=(
            "This clause decides whether the agreement can be handed over to another company. "
            "If the supplier can assign freely, you may end up bound to a provider you never "
            "chose, while a strict ban on your side can block a merger or reorganization."
        ),
        suggestion=(
            "ASSIGNMENT: Neither party may assign or transfer this Agreement, in whole or in part, "
            "without the prior written consent of the other party, which shall not be "
            "unreasonably withheld, conditioned, or delayed. Notwithstanding the foregoing, "
            "Customer may assign this Agreement without consent to an affiliate or to a successor "
            "in connection with a merger, acquisition, or sale of all or substantially all of its "
            "assets, upon written notice to Supplier. Any assignment by Supplier to a competitor "
            "of Customer shall entitle Customer to terminate this Agreement without penalty upon "
            "thirty (30) days written notice. Any purported assignment in violation of this "
            "section shall be null and void."
        ),
        risk_level=RiskLevel.MEDIUM,
    ),
}

GENERIC_EXPLANATION = (
    "This provision should be carefully reviewed to ensure it adequately protects your "
    "interests and maintains fair balance between both parties. Consider whether the terms "
    "are reasonable, achievable, and aligned with your business objectives."
)

GENERIC_SUGGESTION = (
    "REVISED {heading}: This provision is amended so that: (a) both parties have balanced "
    "rights and obligations; (b) all commitments have clearly defined scope, duration, and "
    "termination conditions; (c) liability for breach is allocated based on control and "
    "fault; (d) Customer retains reasonable flexibility to address changing business needs; "
    "and (e) disputes are resolved through fair and efficient procedures. Each party shall "
    "meet clear performance standards, give reasonable notice before exercising any right "
    "under this provision, act in good faith, and be entitled to appropriate remedies for "
    "the other party's non-performance."
)

# Last resort when even template rendering does not produce usable text.
ABSOLUTE_FALLBACK = ClauseTemplate(
    title="Contract Provision",
    explanation=(
        "This provision should be reviewed by legal counsel to ensure it adequately protects "
        "your interests."
    ),
    suggestion=(
        "REVISED PROVISION: The parties shall perform their obligations under this provision in "
        "good faith, with balanced rights and obligations, clear performance standards, "
        "reasonable notice periods, and appropriate protections for both parties."
    ),
    risk_level=RiskLevel.MEDIUM,
)


def generic_template(clause_type: ClauseType) -> ClauseTemplate:
    """Template for a type that has no dedicated entry in CLAUSE_TEMPLATES."""
    title = clause_type.label
    return ClauseTemplate(
        title=title,
        explanation=GENERIC_EXPLANATION,
        suggestion=GENERIC_SUGGESTION.format(heading=title.upper()),
        risk_level=RiskLevel.MEDIUM,
    )


def template_for(clause_type: ClauseType) -> ClauseTemplate:
    return CLAUSE_TEMPLATES.get(clause_type) or generic_template(clause_type)


def title_for(clause_type: ClauseType) -> str:
    """Human-readable label shown as the recommendation title."""
    return template_for(clause_type).title


class TemplateProvider(ABC):
    @abstractmethod
    def render(self, clause: Clause) -> Recommendation:
        """Return the deterministic recommendation for one clause."""
        ...


class StaticTemplateProvider(TemplateProvider):
    def __init__(self, templates: dict[ClauseType, ClauseTemplate] | None = None):
        self.templates = CLAUSE_TEMPLATES if templates is None else templates

    def render(self, clause: Clause) -> Recommendation:
        clause_type = clause.type or ClauseType.OTHER
        template = self.templates.get(clause_type) or generic_template(clause_type)
        return template.render(clause)
