import logging
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import PlainTextResponse

from redliner.exceptions import (
    AnalysisNotFoundError,
    DocumentNotFoundError,
    DuplicateDocumentError,
    EmptyDocumentError,
    FileTooLargeError,
    UnreadableDocumentError,
    UnsupportedFileTypeError,
)
from redliner.schemas.document import AnalysisResponse, DocumentUploadResponse
from redliner.services.analysis_service import AnalysisService
from redliner.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Contract Analysis"])


def get_document_service() -> DocumentService:
    # Placeholder, overridden in main.py with real DB session injection
    raise NotImplementedError("Dependency override not configured")


def get_analysis_service() -> AnalysisService:
    # Placeholder, overridden in main.py with real DB session injection
    raise NotImplementedError("Dependency override not configured")


@router.post("", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    service: DocumentService = Depends(get_document_service),
):
    """Upload a PDF, DOCX or plain-text contract. Clauses are extracted immediately."""
    logger.info(f"Upload request received: filename={file.filename!r} content_type={file.content_type!r}")
    try:
        result = await service.upload_document(file)
        logger.info(f"Upload accepted: document_id={result.id} clauses={result.clause_count}")
        return result
    except UnsupportedFileTypeError as e:
        logger.warning(f"Upload rejected, unsupported file type: {file.content_type!r}")
        raise HTTPException(status_code=422, detail=str(e))
    except EmptyDocumentError as e:
        logger.warning(f"Upload rejected, no text: filename={file.filename!r}")
        raise HTTPException(status_code=422, detail=str(e))
    except UnreadableDocumentError as e:
        logger.warning(f"Upload rejected, unreadable file: filename={file.filename!r} content_type={e.content_type!r}")
        raise HTTPException(status_code=422, detail=str(e))
    except FileTooLargeError as e:
        logger.warning(f"Upload rejected, too large: filename={file.filename!r} size={e.size_bytes}")
        raise HTTPException(status_code=413, detail=str(e))
    except DuplicateDocumentError:
        logger.warning(f"Upload rejected, duplicate file: filename={file.filename!r}")
        raise HTTPException(status_code=409, detail="This document has already been uploaded.")


@router.post("/{document_id}/analysis", response_model=AnalysisResponse)
async def analyze_document(
    document_id: uuid.UUID,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Rank the document's clauses and generate rewrites for the highest-risk ones."""
    logger.info(f"Analyze document: document_id={document_id}")
    try:
        result = await service.analyze_document(document_id)
        logger.info(f"Analysis done: document_id={document_id} recommendations={len(result.recommendations)}")
        return result
    except DocumentNotFoundError:
        logger.warning(f"Analyze document not found: document_id={document_id}")
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found.")


@router.get("/{document_id}/analysis", response_model=AnalysisResponse)
async def get_analysis(
    document_id: uuid.UUID,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Get the stored analysis for a document."""
    logger.info(f"Get analysis: document_id={document_id}")
    try:
        return await service.get_analysis(document_id)
    except (DocumentNotFoundError, AnalysisNotFoundError) as e:
        logger.warning(f"Analysis not found: document_id={document_id}")
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{document_id}/revised", response_class=PlainTextResponse)
async def get_revised_contract(
    document_id: uuid.UUID,
    tracked: bool = Query(False, description="Show removed and added text side by side"),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Download the contract with the suggested rewrites applied."""
    logger.info(f"Revised contract: document_id={document_id} tracked={tracked}")
    try:
        text = await service.get_revised_contract(document_id, tracked=tracked)
    except (DocumentNotFoundError, AnalysisNotFoundError) as e:
        logger.warning(f"Revised contract not found: document_id={document_id}")
        raise HTTPException(status_code=404, detail=str(e))

    suffix = "_with_changes" if tracked else ""
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="revised_contract{suffix}_{document_id}.txt"'},
    )
