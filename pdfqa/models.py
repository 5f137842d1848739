"""
Pydantic models for request/response validation and pipeline data.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


# Pipeline data
class Chunk(BaseModel):
    """A contiguous slice of normalized document text."""
    content: str = Field(..., description="Chunk content")
    index: int = Field(..., ge=0, description="Sequence index within the document")
    start: int = Field(..., ge=0, description="Character offset in the normalized text")


class IndexedVector(BaseModel):
    """An embedding ready to be written to the vector index."""
    id: str = Field(..., description="Unique vector identifier")
    values: List[float] = Field(..., description="Embedding values")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Payload stored with the vector")


class Match(BaseModel):
    """A similarity query hit."""
    id: str = Field(..., description="Vector identifier")
    score: float = Field(..., description="Similarity score, higher is more similar")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Payload stored with the vector")


class IngestionResult(BaseModel):
    """Outcome of ingesting one document."""
    chunk_count: int = Field(..., description="Number of chunks indexed")
    ingestion_id: str = Field(..., description="Identifier shared by all chunks of this upload")
    ids: List[str] = Field(default_factory=list, description="Identifiers of the upserted vectors")


class AnswerResult(BaseModel):
    """Outcome of answering one question."""
    answer: str = Field(..., description="Generated or fallback answer")
    matches: List[Match] = Field(default_factory=list, description="Matches the answer was grounded on")


# API models
class QuestionRequest(BaseModel):
    """Request model for questions."""
    question: Optional[str] = Field(default=None, description="User's question")


class AnswerResponse(BaseModel):
    """Response model for answers."""
    answer: str = Field(..., description="Generated answer")


class MessageResponse(BaseModel):
    """Response model for status messages."""
    message: str = Field(..., description="Status message")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    timestamp: str = Field(..., description="Current timestamp")
    vector_index: Dict[str, Any] = Field(default_factory=dict, description="Vector index health details")


class ErrorResponse(BaseModel):
    """Response model for errors."""
    error: str = Field(..., description="Error message")
