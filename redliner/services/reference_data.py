import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from redliner.exceptions import ReferenceSetError
from redliner.schemas.clause import ClauseType, ReferenceClause

logger = logging.getLogger(__name__)

GOLD_STANDARD_CLAUSES: tuple[ReferenceClause, ...] = (
    ReferenceClause(
        type=ClauseType.LIMITATION_OF_LIABILITY,
        content=(
            "Each party's total liability arising out of or related to this Agreement, whether in "
            "contract, tort or otherwise, shall not exceed three times the total amount paid by "
            "Customer under this Agreement, or $1,000,000, whichever is greater. This limitation "
            "shall not apply to either party's indemnification obligations, breaches of "
            "confidentiality, data breaches, or gross negligence."
        ),
        description="Fair mutual limitation protecting both parties",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This balanced clause provides a reasonable cap on liability while excluding "
                "certain serious breaches from the limitation."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.TERMINATION,
        content=(
            "Either party may terminate this Agreement for convenience upon sixty (60) days' "
            "written notice to the other party. In the event Supplier terminates for convenience, "
            "Supplier shall provide reasonable transition assistance to Customer at no additional "
            "cost for a period of up to 30 days following the termination date."
        ),
        description="Balanced termination rights with transition assistance",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This clause provides equal termination rights to both parties with reasonable "
                "notice periods and transition assistance provisions."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.INTELLECTUAL_PROPERTY,
        content=(
            "All intellectual property rights, including but not limited to patents, copyrights, "
            "trademarks and trade secrets, in any materials specifically created for Customer by "
            "Supplier under this Agreement shall be owned exclusively by Customer. Supplier shall "
            "retain ownership of its pre-existing intellectual property and general know-how. "
            "Supplier hereby grants Customer a perpetual, irrevocable, worldwide, royalty-free "
            "license to use, modify, and incorporate Supplier's pre-existing intellectual property "
            "as necessary to use the deliverables for any business purpose."
        ),
        description="Customer owns what it pays for",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This clause ensures that the customer owns the IP they pay for while protecting "
                "the supplier's existing IP with reasonable license terms."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.INDEMNIFICATION,
        content=(
            "Each party shall defend, indemnify and hold harmless the other party from and against "
            "all claims, damages, losses and expenses, including but not limited to attorneys' "
            "fees, arising out of or resulting from such party's breach of this Agreement, "
            "violation of applicable law, or negligent or willful acts or omissions. Supplier shall "
            "additionally indemnify Customer against any claims alleging that Customer's authorized "
            "use of the deliverables infringes any third party's intellectual property rights."
        ),
        description="Mutual indemnification with IP infringement cover",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This mutual indemnification clause fairly protects both parties with added IP "
                "infringement protection for the customer."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.PAYMENT_TERMS,
        content=(
            "Customer shall pay all undisputed invoices within thirty (30) days of receipt. "
            "Customer shall notify Supplier of any disputed invoice items within 10 days of "
            "receipt, and the parties shall work in good faith to resolve such disputes. Any "
            "undisputed amounts not paid when due will accrue interest at a rate of 1% per month "
            "or the maximum rate permitted by law, whichever is less."
        ),
        description="Net-30 with a dispute window",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This clause provides standard 30-day payment terms with reasonable dispute "
                "resolution procedures and interest rates."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.CONFIDENTIALITY,
        content=(
            "Each party shall maintain the confidentiality of the other party's Confidential "
            "Information for a period of five (5) years following the end of this Agreement, using "
            "at least the same degree of care as it uses to protect its own confidential "
            "information, but no less than reasonable care. Neither party shall use the other "
            "party's Confidential Information except as necessary to perform its obligations under "
            "this Agreement."
        ),
        description="Mutual five-year confidentiality",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This balanced confidentiality clause protects both parties with standard duration "
                "and reasonable protection requirements."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.GOVERNING_LAW,
        content=(
            "This Agreement shall be governed by and construed in accordance with the laws of the "
            "State where Customer's principal place of business is located, without giving effect "
            "to any conflict of laws principles. The parties agree to submit to the personal and "
            "exclusive jurisdiction of the courts located within such State."
        ),
        description="Customer's home jurisdiction",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This clause uses the customer's home jurisdiction, which is advantageous as it "
                "avoids the need to litigate in unfamiliar locations."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.WARRANTY,
        content=(
            "Supplier warrants that the services will be performed in a professional and "
            "workmanlike manner consistent with industry standards for a period of ninety (90) "
            "days from delivery. Supplier further warrants that any deliverables will substantially "
            "conform to their specifications for a period of ninety (90) days from delivery. "
            "Customer's exclusive remedy for breach of this warranty is for Supplier to re-perform "
            "the services or repair/replace the non-conforming deliverables."
        ),
        description="Ninety-day performance warranty",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This clause provides a standard 90-day warranty period with clear remedies for "
                "any issues that arise."
            ),
        },
    ),
    ReferenceClause(
        type=ClauseType.ASSIGNMENT,
        content=(
            "Neither party may assign this Agreement, in whole or in part, without the prior "
            "written consent of the other party, which shall not be unreasonably withheld or "
            "delayed. Notwithstanding the foregoing, either party may assign this Agreement to an "
            "affiliate or in connection with a merger, acquisition, or sale of all or substantially "
            "all of its assets upon written notice to the other party."
        ),
        description="Consent-based assignment with corporate carve-out",
        metadata={
            "riskLevel": "low",
            "explanation": (
                "This assignment clause requires consent for general assignments while permitting "
                "standard business flexibility for corporate reorganizations."
            ),
        },
    ),
)

_reference_list = TypeAdapter(list[ReferenceClause])


def load_reference_clauses(path: str | Path | None = None) -> tuple[ReferenceClause, ...]:
    """Return the gold-standard reference set.

    With no path the built-in set is returned. Otherwise the file must hold a
    non-empty JSON list of objects with `type`, `content` and optionally
    `description` and `metadata`. Any defect raises ReferenceSetError.
    """
    if path is None:
        return GOLD_STANDARD_CLAUSES

    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ReferenceSetError(f"Cannot read reference clauses from {path}: {exc}") from exc

    try:
        references = _reference_list.validate_python(raw)
    except ValidationError as exc:
        raise ReferenceSetError(f"Invalid reference clauses in {path}: {exc}") from exc

    if not references:
        raise ReferenceSetError(f"Reference clause file {path} is empty")

    logger.info(f"Loaded {len(references)} reference clauses from {path}")
    return tuple(references)


def references_from_rows(rows) -> tuple[ReferenceClause, ...]:
    """Convert stored gold-standard rows (in position order) into pipeline reference clauses."""
    try:
        return tuple(
            ReferenceClause(
                type=row.clause_type,
                content=row.content,
                description=row.description,
                metadata=row.metadata_ or {},
            )
            for row in rows
        )
    except ValidationError as exc:
        raise ReferenceSetError(f"Stored reference clauses are invalid: {exc}") from exc


async def seed_reference_clauses(repo, references: Sequence[ReferenceClause]) -> int:
    """Insert the reference set into an empty table. Returns the number of rows inserted."""
    existing = await repo.count()
    if existing:
        logger.info(f"Gold standard clauses already initialized ({existing} rows)")
        stored = references_from_rows(await repo.get_all())
        if _fingerprint(stored) != _fingerprint(references):
            logger.warning(
                f"Configured reference set ({len(references)} clauses) differs from the "
                f"{len(stored)} stored clauses; the stored set stays in use until the table is cleared"
            )
        return 0

    await repo.bulk_create([
        {
            "clause_type": reference.type.value,
            "content": reference.content,
            "description": reference.description,
            "metadata_": dict(reference.metadata),
            "position": position,
        }
        for position, reference in enumerate(references)
    ])
    logger.info(f"Seeded {len(references)} gold standard clauses")
    return len(references)


def _fingerprint(references: Sequence[ReferenceClause]) -> list[tuple[ClauseType, str]]:
    return [(reference.type, reference.content) for reference in references]
