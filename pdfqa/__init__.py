"""
PDF Q&A Backend

Upload a PDF, index its text in a vector database, and ask questions that are
answered by an LLM from the most similar chunks.

Features:
- In-memory PDF processing (no file storage)
- Overlapping fixed-size text chunking
- Qdrant vector database integration
- Google Gemini embeddings and completions
- Bounded retries and timeouts on provider calls
- Structured logging
"""

__version__ = "1.0.0"
__description__ = "Retrieval-augmented question answering over uploaded PDFs"
