"""
Interfaces of the external collaborators the pipelines depend on.
"""

from typing import Any, Dict, List, Protocol, Sequence

from ..models import IndexedVector, Match


class DocumentExtractor(Protocol):
    def extract_text(self, content: bytes) -> str:
        """Return the document's plain text, pages separated by a blank line."""
        ...


class EmbeddingProvider(Protocol):
    def embed_many(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed texts; output order must follow input order."""
        ...

    def embed_one(self, text: str) -> List[float]:
        ...


class VectorIndex(Protocol):
    def upsert(self, vectors: Sequence[IndexedVector]) -> None:
        ...

    def query(self, vector: Sequence[float], top_k: int, include_metadata: bool = True) -> List[Match]:
        """Return up to ``top_k`` matches, most similar first."""
        ...

    def health_check(self) -> Dict[str, Any]:
        ...


class CompletionProvider(Protocol):
    def complete(self, prompt: str) -> str:
        ...
