"""
Retrieval-augmented answering: embed the question, fetch the closest chunks,
and have the LLM answer from them.
"""

from typing import List, Optional
from langchain_core.prompts import PromptTemplate

from .ingestion_service import TEXT_METADATA_KEY
from .providers import CompletionProvider, EmbeddingProvider, VectorIndex
from ..exceptions import CompletionFailed, EmbeddingFailed, EmptyQuestion, QueryFailed
from ..models import AnswerResult, Match
from ..utils import (
    RetryPolicy,
    call_provider,
    measure_time,
    log_processing_info,
    preview
)
import logging

logger = logging.getLogger(__name__)

NO_MATCHES_ANSWER = (
    "I couldn't find relevant information in the document to answer your question. "
    "Please try rephrasing or provide more context."
)

CONTEXT_SEPARATOR = "\n\n"

ANSWER_PROMPT = PromptTemplate.from_template(
    """You are an intelligent assistant designed to provide answers based on the *provided context only*.

Carefully read the following context:
{context}

Now, please answer the user's question. Answer the question as per the context, try to be intelligent and understand the question, if the information isn't available in the provided context, politely state that you don't have enough information from the document to answer.
Question: {question}

Answer:"""
)


def build_context(matches: List[Match]) -> str:
    """Join the stored chunk texts of ``matches`` in the order given."""
    texts = []
    for match in matches:
        text = match.metadata.get(TEXT_METADATA_KEY)
        if not isinstance(text, str) or not text:
            logger.warning(f"Match {match.id} has no usable '{TEXT_METADATA_KEY}' metadata ({text!r}), skipping")
            continue
        texts.append(text)
    return CONTEXT_SEPARATOR.join(texts)


def build_prompt(context: str, question: str) -> str:
    return ANSWER_PROMPT.format(context=context, question=question)


class QAService:
    """Answers questions from the indexed documents."""

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        index: VectorIndex,
        completions: CompletionProvider,
        top_k: int = 5,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        if top_k <= 0:
            raise ValueError(f"top_k must be positive, got {top_k}")
        self.embeddings = embeddings
        self.index = index
        self.completions = completions
        self.top_k = top_k
        self.retry_policy = retry_policy or RetryPolicy()

    @measure_time
    def answer(self, question: str) -> AnswerResult:
        """
        Answer a question from the indexed documents.

        Args:
            question: User's question

        Returns:
            AnswerResult with the answer text and the matches it used

        Raises:
            EmptyQuestion: If the question is blank
            EmbeddingFailed: If embedding the question fails
            QueryFailed: If the similarity query fails
            CompletionFailed: If the LLM call fails
            ProviderTimeout: If a provider call keeps timing out
        """
        if question is None or not question.strip():
            raise EmptyQuestion("Question is required.")

        logger.info(f"[Ask Question] Incoming question: \"{question}\"")

        question_embedding = call_provider(
            "embed_query",
            self.embeddings.embed_one,
            question,
            error_cls=EmbeddingFailed,
            policy=self.retry_policy,
        )

        matches = call_provider(
            "query",
            self.index.query,
            question_embedding,
            self.top_k,
            include_metadata=True,
            error_cls=QueryFailed,
            policy=self.retry_policy,
        )

        for i, match in enumerate(matches, start=1):
            text = match.metadata.get(TEXT_METADATA_KEY)
            text = text if isinstance(text, str) else ""
            logger.info(f"[Ask Question] Doc {i} (Score: {match.score}): {preview(text, 300)!r}")

        context = build_context(matches)
        if not context:
            logger.warning("[Ask Question] No relevant documents found for this question.")
            return AnswerResult(answer=NO_MATCHES_ANSWER, matches=matches)

        log_processing_info("[Ask Question] Context assembled", {
            "match_count": len(matches),
            "context_length": len(context)
        })

        prompt = build_prompt(context, question)
        answer = call_provider(
            "complete",
            self.completions.complete,
            prompt,
            error_cls=CompletionFailed,
            policy=self.retry_policy,
        )

        log_processing_info("[Ask Question] Answer generated", {
            "question_length": len(question),
            "answer_length": len(answer)
        })

        return AnswerResult(answer=answer, matches=matches)
