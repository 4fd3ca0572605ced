import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from redliner.config import Settings
from redliner.database import create_engine, create_session_factory, session_scope
from redliner.middleware import ContextLogFilter, RequestIDMiddleware

VERSION = "0.1.0"


def configure_logging(log_level: str) -> None:
    """Set up logging with request and document IDs injected into every log line."""
    log_filter = ContextLogFilter()
    formatter = logging.Formatter(
        "%(asctime)s [%(request_id)s] [doc=%(document_id)s] %(levelname)s %(name)s: %(message)s"
    )

    # Replace existing handlers on the root logger rather than using basicConfig
    # (basicConfig is a no-op if handlers are already set, which uvicorn does at startup)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(log_filter)
    root_logger.addHandler(handler)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator:
    """Set up DB, LLM client, reference set and pipeline on startup; release them on shutdown."""
    from redliner.repositories.reference_repo import ReferenceClauseRepository
    from redliner.services.llm.factory import create_llm_provider
    from redliner.services.pipeline.orchestrator import create_analysis_pipeline
    from redliner.services.reference_data import (
        load_reference_clauses,
        references_from_rows,
        seed_reference_clauses,
    )

    settings: Settings = application.state.settings
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    application.state.engine = engine
    application.state.session_factory = session_factory

    # A broken reference set is a configuration defect: fail startup loudly
    async with session_scope(session_factory) as session:
        repo = ReferenceClauseRepository(session)
        await seed_reference_clauses(repo, load_reference_clauses(settings.REFERENCE_CLAUSES_PATH))
        application.state.references = references_from_rows(await repo.get_all())

    llm = create_llm_provider(settings)
    application.state.llm = llm
    application.state.pipeline = create_analysis_pipeline(settings, llm)

    yield

    if llm is not None:
        await llm.aclose()
    await application.state.engine.dispose()


def create_app() -> FastAPI:
    """Application factory."""
    settings = Settings()

    application = FastAPI(
        title="Redliner",
        description="Contract clause risk ranking and rewrite recommendations",
        version=VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    application.state.settings = settings

    configure_logging(settings.LOG_LEVEL)
    application.add_middleware(RequestIDMiddleware)

    # Database session dependency, injected into every route that needs DB access
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_scope(application.state.session_factory) as session:
            yield session

    # Register routers
    from redliner.repositories.analysis_repo import AnalysisRepository
    from redliner.repositories.clause_repo import ClauseRepository
    from redliner.repositories.document_repo import DocumentRepository
    from redliner.routers.documents import (
        get_analysis_service,
        get_document_service,
        router as documents_router,
    )
    from redliner.services.analysis_service import AnalysisService
    from redliner.services.clause_service import ClauseService
    from redliner.services.document_service import DocumentService

    # Override the service dependencies so the router gets a real DB session
    async def get_document_service_with_session(
        session: AsyncSession = Depends(get_session),
    ) -> DocumentService:
        clause_service = ClauseService(
            application.state.llm,
            max_chars=settings.LLM_MAX_CHARS,
            max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
        )
        return DocumentService(
            DocumentRepository(session),
            ClauseRepository(session),
            clause_service,
            ttl_hours=settings.DOCUMENT_TTL_HOURS,
            max_upload_mb=settings.MAX_UPLOAD_SIZE_MB,
        )

    async def get_analysis_service_with_session(
        session: AsyncSession = Depends(get_session),
    ) -> AnalysisService:
        return AnalysisService(
            DocumentRepository(session),
            ClauseRepository(session),
            AnalysisRepository(session),
            pipeline=application.state.pipeline,
            references=application.state.references,
        )

    application.include_router(documents_router, prefix="/api/v1")
    application.dependency_overrides[get_document_service] = get_document_service_with_session
    application.dependency_overrides[get_analysis_service] = get_analysis_service_with_session

    @application.get("/health", tags=["Health Check"])
    async def health_check():
        return {"status": "healthy", "version": VERSION}

    return application


app = create_app()
