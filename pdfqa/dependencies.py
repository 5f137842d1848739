"""
Service construction and FastAPI dependencies.

Provider clients are built once per process and shared by both pipelines.
"""

from typing import Optional

from fastapi import Request

from .config import Settings, settings as default_settings, validate_required_settings
from .services import (
    GeminiCompletionProvider,
    GeminiEmbeddingProvider,
    IngestionService,
    PDFProcessor,
    QAService,
    QdrantVectorIndex,
    TextChunker,
)
from .utils import RetryPolicy, log_processing_info


def build_services(config: Optional[Settings] = None) -> tuple[IngestionService, QAService]:
    """
    Build both pipelines from settings.

    Raises:
        ValueError: If required settings are missing
    """
    config = config or default_settings
    validate_required_settings(config)

    retry_policy = RetryPolicy.from_settings(config)
    embeddings = GeminiEmbeddingProvider(config)
    index = QdrantVectorIndex(config)
    completions = GeminiCompletionProvider(config)

    ingestion_service = IngestionService(
        extractor=PDFProcessor(),
        chunker=TextChunker(config.chunk_size, config.chunk_overlap),
        embeddings=embeddings,
        index=index,
        retry_policy=retry_policy,
    )
    qa_service = QAService(
        embeddings=embeddings,
        index=index,
        completions=completions,
        top_k=config.similarity_search_k,
        retry_policy=retry_policy,
    )

    log_processing_info("Services initialized", {
        "chunk_size": config.chunk_size,
        "chunk_overlap": config.chunk_overlap,
        "top_k": config.similarity_search_k,
        "max_attempts": retry_policy.max_attempts
    })

    return ingestion_service, qa_service


def get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def get_qa_service(request: Request) -> QAService:
    return request.app.state.qa_service
