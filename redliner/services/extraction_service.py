import io
import logging
import zipfile
from dataclasses import dataclass

from redliner.exceptions import UnreadableDocumentError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_CONTENT_TYPE = "text/plain"

SUPPORTED_CONTENT_TYPES = (PDF_CONTENT_TYPE, DOCX_CONTENT_TYPE, TEXT_CONTENT_TYPE)


@dataclass
class ExtractionResult:
    raw_text: str
    page_count: int


class ExtractionService:
    def extract(self, data: bytes, content_type: str) -> ExtractionResult:
        """Extract raw text from an uploaded PDF, DOCX or plain-text file."""
        if content_type == PDF_CONTENT_TYPE:
            return self._extract_pdf(data)
        elif content_type == DOCX_CONTENT_TYPE:
            return self._extract_docx(data)
        elif content_type == TEXT_CONTENT_TYPE:
            return self._extract_text(data)
        else:
            raise UnsupportedFileTypeError(content_type)

    def _extract_pdf(self, data: bytes) -> ExtractionResult:
        import pymupdf

        # PyMuPDF raises its own (mupdf-generated) error classes for damaged input
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            logger.warning(f"Failed to parse PDF ({len(data)} bytes): {exc}")
            raise UnreadableDocumentError(PDF_CONTENT_TYPE, str(exc)) from exc
        logger.info(f"Extracted {len(pages)} pages from PDF ({len(data)} bytes)")
        return ExtractionResult(
            raw_text="\n\n".join(pages),
            page_count=len(pages),
        )

    def _extract_docx(self, data: bytes) -> ExtractionResult:
        from docx import Document
        from docx.opc.exceptions import PackageNotFoundError

        # Not a zip, or a zip without a Word document part
        try:
            doc = Document(io.BytesIO(data))
        except (zipfile.BadZipFile, PackageNotFoundError, KeyError, ValueError) as exc:
            logger.warning(f"Failed to parse DOCX ({len(data)} bytes): {exc}")
            raise UnreadableDocumentError(DOCX_CONTENT_TYPE, str(exc) or type(exc).__name__) from exc
        paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
        logger.info(f"Extracted {len(paragraphs)} paragraphs from DOCX ({len(data)} bytes)")
        return ExtractionResult(
            raw_text="\n\n".join(paragraphs),
            page_count=1,
        )

    def _extract_text(self, data: bytes) -> ExtractionResult:
        text = data.decode("utf-8", errors="replace")
        logger.info(f"Read {len(text)} characters of plain text")
        return ExtractionResult(raw_text=text, page_count=1)
