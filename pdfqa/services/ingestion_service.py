"""
Ingestion pipeline: PDF bytes -> text -> chunks -> embeddings -> vector index.

Re-ingesting the same document is not deduplicated: every upload gets fresh
vector IDs, so the index will hold one copy per upload.
"""

from typing import Optional

from .chunker import TextChunker
from .providers import DocumentExtractor, EmbeddingProvider, VectorIndex
from ..exceptions import EmbeddingFailed, IndexWriteFailed
from ..models import IndexedVector, IngestionResult
from ..utils import (
    RetryPolicy,
    call_provider,
    format_timestamp,
    generate_vector_id,
    measure_time,
    log_processing_info,
    preview
)
import logging

logger = logging.getLogger(__name__)

TEXT_METADATA_KEY = "page_content"


class IngestionService:
    """Extracts, chunks, embeds and indexes uploaded documents."""

    def __init__(
        self,
        extractor: DocumentExtractor,
        chunker: TextChunker,
        embeddings: EmbeddingProvider,
        index: VectorIndex,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.extractor = extractor
        self.chunker = chunker
        self.embeddings = embeddings
        self.index = index
        self.retry_policy = retry_policy or RetryPolicy()

    @measure_time
    def ingest(self, content: bytes, filename: Optional[str] = None) -> IngestionResult:
        """
        Index a document.

        Args:
            content: Raw PDF bytes
            filename: Original filename, stored as ``source`` metadata

        Returns:
            IngestionResult with the number of chunks written

        Raises:
            ExtractionFailed: If the document cannot be read
            NoContentExtracted: If the document has no text
            EmbeddingFailed: If embedding the chunks fails
            IndexWriteFailed: If the upsert fails
            ProviderTimeout: If a provider call keeps timing out
        """
        full_text = self.extractor.extract_text(content)
        chunks = self.chunker.chunk(full_text)

        logger.info(f"Text extracted (cleaned): {preview(chunks[0].content)}")
        log_processing_info("Document chunked", {
            "filename": filename,
            "chunk_count": len(chunks),
            "chunk_size": self.chunker.max_size,
            "chunk_overlap": self.chunker.overlap
        })

        chunk_texts = [chunk.content for chunk in chunks]
        chunk_embeddings = call_provider(
            "embed_documents",
            self.embeddings.embed_many,
            chunk_texts,
            error_cls=EmbeddingFailed,
            policy=self.retry_policy,
        )

        # Vectors are paired with chunks by position.
        if len(chunk_embeddings) != len(chunks):
            raise EmbeddingFailed(
                f"Embedding provider returned {len(chunk_embeddings)} vectors "
                f"for {len(chunks)} chunks",
                {"chunk_count": len(chunks), "embedding_count": len(chunk_embeddings)}
            )

        ingestion_id = generate_vector_id()
        ingested_at = format_timestamp()
        vectors = []
        for chunk, values in zip(chunks, chunk_embeddings):
            metadata = {
                TEXT_METADATA_KEY: chunk.content,
                "chunk_index": chunk.index,
                "chunk_start": chunk.start,
                "total_chunks": len(chunks),
                "ingestion_id": ingestion_id,
                "ingested_at": ingested_at,
            }
            if filename:
                metadata["source"] = filename
            vectors.append(IndexedVector(id=generate_vector_id(), values=values, metadata=metadata))

        call_provider(
            "upsert",
            self.index.upsert,
            vectors,
            error_cls=IndexWriteFailed,
            policy=self.retry_policy,
        )

        log_processing_info("Document indexed", {
            "filename": filename,
            "ingestion_id": ingestion_id,
            "vector_count": len(vectors)
        })

        return IngestionResult(
            chunk_count=len(vectors),
            ingestion_id=ingestion_id,
            ids=[vector.id for vector in vectors]
        )
