"""
Shared fixtures: in-memory stand-ins for the external collaborators.
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from pdfqa.config import Settings
from pdfqa.main import create_app
from pdfqa.models import IndexedVector, Match
from pdfqa.services import IngestionService, QAService, TextChunker
from pdfqa.utils import RetryPolicy


NO_WAIT = RetryPolicy(max_attempts=1, initial_wait=0, max_wait=0, timeout=5)


class FakeExtractor:
    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[bytes] = []

    def extract_text(self, content: bytes) -> str:
        self.calls.append(content)
        if self.error:
            raise self.error
        return self.text


class FakeEmbeddings:
    """Returns a distinct vector per text; can fail the first N calls."""

    def __init__(self, dimension: int = 3, failures: int = 0, error: Optional[Exception] = None):
        self.dimension = dimension
        self.failures = failures
        self.error = error or ConnectionError("embedding service unavailable")
        self.many_calls: List[List[str]] = []
        self.one_calls: List[str] = []
        self.drop_last = False

    def _maybe_fail(self):
        if self.failures > 0:
            self.failures -= 1
            raise self.error

    def _vector(self, seed: int) -> List[float]:
        return [float(seed)] * self.dimension

    def embed_many(self, texts):
        self.many_calls.append(list(texts))
        self._maybe_fail()
        vectors = [self._vector(i) for i, _ in enumerate(texts)]
        return vectors[:-1] if self.drop_last else vectors

    def embed_one(self, text):
        self.one_calls.append(text)
        self._maybe_fail()
        return self._vector(42)


class FakeIndex:
    def __init__(self, matches: Optional[List[Match]] = None, error: Optional[Exception] = None):
        self.matches = matches or []
        self.error = error
        self.upserts: List[List[IndexedVector]] = []
        self.queries: List[dict] = []
        self.health = {"status": "healthy", "collection_name": "test"}

    def upsert(self, vectors):
        if self.error:
            raise self.error
        self.upserts.append(list(vectors))

    def query(self, vector, top_k, include_metadata=True):
        self.queries.append({"vector": list(vector), "top_k": top_k, "include_metadata": include_metadata})
        if self.error:
            raise self.error
        return list(self.matches)

    def health_check(self):
        return self.health

    @property
    def stored(self) -> List[IndexedVector]:
        return [vector for batch in self.upserts for vector in batch]


class FakeCompletions:
    def __init__(self, answer: str = "The answer is 42.", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.answer


def make_match(index: int, text: Optional[str], score: float = 0.9) -> Match:
    metadata = {} if text is None else {"page_content": text}
    return Match(id=f"vec-{index}", score=score, metadata=metadata)


@pytest.fixture
def extractor():
    return FakeExtractor(text="Alpha beta gamma. " * 10)


@pytest.fixture
def embeddings():
    return FakeEmbeddings()


@pytest.fixture
def index():
    return FakeIndex()


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def ingestion_service(extractor, embeddings, index):
    return IngestionService(
        extractor=extractor,
        chunker=TextChunker(max_size=50, overlap=10),
        embeddings=embeddings,
        index=index,
        retry_policy=NO_WAIT,
    )


@pytest.fixture
def qa_service(embeddings, index, completions):
    return QAService(
        embeddings=embeddings,
        index=index,
        completions=completions,
        top_k=5,
        retry_policy=NO_WAIT,
    )


@pytest.fixture
def test_settings():
    return Settings(
        gemini_api_key="test-key",
        vector_database_index_name="test-index",
        max_file_size_mb=1,
    )


@pytest.fixture
def client(ingestion_service, qa_service, test_settings):
    app = create_app(
        ingestion_service=ingestion_service,
        qa_service=qa_service,
        config=test_settings,
    )
    return TestClient(app)
