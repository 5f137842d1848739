"""
Embedding provider backed by Google Generative AI embeddings.
"""

from typing import List, Sequence
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ..config import Settings, settings as default_settings
from ..utils import log_processing_info, handle_processing_error
import logging

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider:
    """Maps text to vectors with a Gemini embedding model."""

    def __init__(self, config: Settings = None):
        """Initialize the embedding provider."""
        self.config = config or default_settings
        self.embeddings = self._initialize_embeddings()

    def _initialize_embeddings(self) -> GoogleGenerativeAIEmbeddings:
        """Initialize Google Generative AI embeddings."""
        try:
            embeddings = GoogleGenerativeAIEmbeddings(
                model=self.config.gemini_embedding_model,
                google_api_key=self.config.gemini_api_key,
                request_options={"timeout": self.config.provider_timeout_seconds}
            )

            log_processing_info("Embeddings initialized", {
                "model": self.config.gemini_embedding_model
            })

            return embeddings

        except Exception as e:
            error_info = handle_processing_error("embeddings_init", e)
            raise RuntimeError(f"Failed to initialize embeddings: {error_info}") from e

    def embed_many(self, texts: Sequence[str]) -> List[List[float]]:
        return self.embeddings.embed_documents(list(texts))

    def embed_one(self, text: str) -> List[float]:
        return self.embeddings.embed_query(text)
