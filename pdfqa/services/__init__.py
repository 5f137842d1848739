"""
Services package for the PDF Q&A Backend.
"""

from .chunker import TextChunker, chunk_text
from .pdf_processor import PDFProcessor
from .embedding_service import GeminiEmbeddingProvider
from .vector_service import QdrantVectorIndex
from .chat_service import GeminiCompletionProvider
from .ingestion_service import IngestionService
from .qa_service import QAService, NO_MATCHES_ANSWER

__all__ = [
    "TextChunker",
    "chunk_text",
    "PDFProcessor",
    "GeminiEmbeddingProvider",
    "QdrantVectorIndex",
    "GeminiCompletionProvider",
    "IngestionService",
    "QAService",
    "NO_MATCHES_ANSWER"
]
