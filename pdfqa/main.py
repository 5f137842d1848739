"""
FastAPI application for the PDF Q&A Backend.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, File, UploadFile, Body, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import Settings, settings
from .dependencies import build_services, get_ingestion_service, get_qa_service
from .exceptions import PipelineError
from .models import (
    QuestionRequest, AnswerResponse, MessageResponse,
    HealthResponse, ErrorResponse
)
from .services import IngestionService, QAService
from .utils import format_timestamp, handle_processing_error

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the provider-backed services unless they were injected."""
    if app.state.ingestion_service is None or app.state.qa_service is None:
        ingestion_service, qa_service = build_services(app.state.settings)
        if app.state.ingestion_service is None:
            app.state.ingestion_service = ingestion_service
        if app.state.qa_service is None:
            app.state.qa_service = qa_service
    logger.info(f"{app.title} {app.version} ready")
    yield


def create_app(
    ingestion_service: Optional[IngestionService] = None,
    qa_service: Optional[QAService] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Services that are not passed in are built from settings on startup.
    """
    config = config or settings

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Upload a PDF and ask questions answered from its content",
        lifespan=lifespan
    )
    app.state.settings = config
    app.state.ingestion_service = ingestion_service
    app.state.qa_service = qa_service

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return error_response(400, f"Invalid request: {exc.errors()}")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {str(exc)}")
        return error_response(
            500,
            str(exc) if config.debug else "An unexpected error occurred"
        )

    @app.get("/", response_model=MessageResponse)
    async def root():
        """Root endpoint."""
        return MessageResponse(message="Backend running successfully!")

    @app.get("/health", response_model=HealthResponse)
    async def health_check(qa: QAService = Depends(get_qa_service)):
        """Report whether the vector index is reachable."""
        index_health = await run_in_threadpool(qa.index.health_check)
        status = index_health.get("status", "unknown")
        health = HealthResponse(
            status=status,
            version=config.app_version,
            timestamp=format_timestamp(),
            vector_index=index_health
        )
        if status != "healthy":
            return JSONResponse(status_code=503, content=health.model_dump())
        return health

    @app.post("/upload-document", response_model=MessageResponse)
    async def upload_document(
        document: Optional[UploadFile] = File(default=None),
        ingestion: IngestionService = Depends(get_ingestion_service)
    ):
        """Extract, chunk, embed and index an uploaded PDF."""
        if document is None:
            return error_response(400, "No document uploaded.")

        content = await document.read()

        max_size_bytes = config.max_file_size_mb * 1024 * 1024
        if len(content) > max_size_bytes:
            return error_response(
                400,
                f"Document {document.filename} is too large: {len(content) / 1024 / 1024:.1f}MB. "
                f"Maximum size is {config.max_file_size_mb}MB."
            )

        try:
            result = await run_in_threadpool(ingestion.ingest, content, document.filename)
        except Exception as e:
            handle_processing_error("upload_document", e, {"filename": document.filename})
            return error_response(500, f"Error processing document: {e}")

        logger.info(f"Uploaded {result.chunk_count} embeddings for {document.filename}")
        return MessageResponse(message="Document processed and indexed successfully.")

    @app.post("/ask-question", response_model=AnswerResponse)
    async def ask_question(
        payload: Optional[QuestionRequest] = Body(default=None),
        qa: QAService = Depends(get_qa_service)
    ):
        """Answer a question from the indexed documents."""
        question = payload.question if payload else None
        if not question or not question.strip():
            return error_response(400, "Question is required.")

        try:
            result = await run_in_threadpool(qa.answer, question)
        except PipelineError as e:
            handle_processing_error("ask_question", e, {"question": question})
            if e.status_code < 500:
                return error_response(e.status_code, e.message)
            return error_response(500, f"Error answering question: {e}")
        except Exception as e:
            handle_processing_error("ask_question", e, {"question": question})
            return error_response(500, f"Error answering question: {e}")

        return AnswerResponse(answer=result.answer)

    return app


app = create_app()


def run() -> None:
    import uvicorn
    uvicorn.run(
        "pdfqa.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
