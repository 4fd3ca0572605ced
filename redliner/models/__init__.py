from redliner.models.analysis_result import AnalysisResult
from redliner.models.base import Base
from redliner.models.clause import DocumentClause
from redliner.models.document import Document
from redliner.models.gold_standard_clause import GoldStandardClause

__all__ = ["Base", "Document", "DocumentClause", "GoldStandardClause", "AnalysisResult"]
