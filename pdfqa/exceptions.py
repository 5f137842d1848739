"""
Exception hierarchy for the ingestion and answering pipelines.

Every error carries the HTTP status the API layer should answer with and a
context dict for logging.
"""

from typing import Any, Dict, Optional


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ExtractionFailed(PipelineError):
    """Raised when the uploaded document cannot be read or has no pages."""


class NoContentExtracted(PipelineError):
    """Raised when the extracted text is empty after normalization."""


class EmbeddingFailed(PipelineError):
    """Raised when the embedding provider errors or returns mismatched output."""


class IndexWriteFailed(PipelineError):
    """Raised when upserting vectors into the index fails."""


class QueryFailed(PipelineError):
    """Raised when the similarity query against the index fails."""


class CompletionFailed(PipelineError):
    """Raised when the completion provider errors."""


class EmptyQuestion(PipelineError):
    """Raised when a blank question is submitted."""

    status_code = 400


class ProviderTimeout(PipelineError):
    """Raised when an external provider call keeps timing out."""

    def __init__(
        self,
        operation: str,
        timeout: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.operation = operation
        self.timeout = timeout
        message = f"{operation} timed out"
        if timeout is not None:
            message += f" after {timeout}s"
        super().__init__(message, details)
