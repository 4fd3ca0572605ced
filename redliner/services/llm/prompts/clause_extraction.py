CLAUSE_EXTRACTION_SYSTEM = """You are an expert at identifying and extracting contract clauses. \
Given the full text of a contract, split it into its individual clauses.

Rules:
- Copy each clause's text exactly as it appears in the document. Do not paraphrase.
- Keep the clauses in document order.
- Return valid JSON only. No explanation, no markdown, just JSON.
- For clause_type, choose the closest match from the allowed values."""

CLAUSE_EXTRACTION_USER = """\
Extract every clause from the contract text below.

For each clause, return:
- clause_type: one of: limitation_of_liability, termination, intellectual_property, \
indemnification, payment_terms, confidentiality, governing_law, warranty, assignment, other
- content: the exact text of the clause from the document

Return JSON in this exact format:
{{"clauses": [{{"clause_type": "...", "content": "..."}}]}}

Contract text:
{contract_text}"""
