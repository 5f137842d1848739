"""
Vector index backed by a Qdrant collection.
"""

from typing import Any, Dict, List, Optional, Sequence
from qdrant_client import QdrantClient
from qdrant_client.models import Distance, PointStruct, VectorParams

from ..config import Settings, settings as default_settings
from ..models import IndexedVector, Match
from ..utils import (
    measure_time,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)


class QdrantVectorIndex:
    """Stores embeddings with their payload and runs similarity search."""

    def __init__(self, config: Settings = None, client: Optional[QdrantClient] = None):
        """Initialize the vector index."""
        self.config = config or default_settings
        self.collection_name = self.config.vector_database_index_name
        self.client = client or self._initialize_qdrant_client()
        self._collection_ready = False

    def _initialize_qdrant_client(self) -> QdrantClient:
        """Initialize Qdrant client."""
        try:
            client = QdrantClient(
                url=self.config.vector_database_url,
                api_key=self.config.vector_database_api_key or None,
                timeout=self.config.provider_timeout_seconds
            )

            log_processing_info("Qdrant client initialized", {
                "url": self.config.vector_database_url,
                "collection_name": self.collection_name,
                "has_api_key": bool(self.config.vector_database_api_key)
            })

            return client

        except Exception as e:
            error_info = handle_processing_error("qdrant_client_init", e)
            raise RuntimeError(f"Failed to initialize Qdrant client: {error_info}") from e

    def ensure_collection(self) -> bool:
        """
        Create the collection if it does not exist yet.

        Returns:
            True if the collection was created, False if it already existed
        """
        if self._collection_ready:
            return False

        created = False
        if not self.client.collection_exists(self.collection_name):
            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(
                    size=self.config.vector_dimension,
                    distance=Distance.COSINE
                )
            )
            created = True

            log_processing_info("Collection created", {
                "collection_name": self.collection_name,
                "vector_dimension": self.config.vector_dimension
            })

        self._collection_ready = True
        return created

    @measure_time
    def upsert(self, vectors: Sequence[IndexedVector]) -> None:
        """Write all vectors in a single batch."""
        self.ensure_collection()

        points = [
            PointStruct(id=vector.id, vector=list(vector.values), payload=vector.metadata)
            for vector in vectors
        ]
        self.client.upsert(collection_name=self.collection_name, points=points, wait=True)

        log_processing_info("Vectors upserted", {
            "collection_name": self.collection_name,
            "vector_count": len(points)
        })

    @measure_time
    def query(self, vector: Sequence[float], top_k: int, include_metadata: bool = True) -> List[Match]:
        """Return the ``top_k`` nearest vectors, most similar first."""
        self.ensure_collection()

        response = self.client.query_points(
            collection_name=self.collection_name,
            query=list(vector),
            limit=top_k,
            with_payload=include_metadata
        )

        return [
            Match(id=str(point.id), score=point.score, metadata=point.payload or {})
            for point in response.points
        ]

    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the vector index.

        Returns:
            Dictionary with health status information
        """
        try:
            exists = self.client.collection_exists(self.collection_name)

            return {
                "status": "healthy",
                "url": self.config.vector_database_url,
                "collection_name": self.collection_name,
                "collection_exists": exists
            }

        except Exception as e:
            handle_processing_error("health_check", e)
            return {
                "status": "unhealthy",
                "error": str(e),
                "url": self.config.vector_database_url
            }
