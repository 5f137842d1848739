"""
Completion provider backed by a Gemini chat model.
"""

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.output_parsers import StrOutputParser

from ..config import Settings, settings as default_settings
from ..utils import log_processing_info, handle_processing_error
import logging

logger = logging.getLogger(__name__)


class GeminiCompletionProvider:
    """Service for generating completions using an LLM."""

    def __init__(self, config: Settings = None):
        """Initialize the completion provider."""
        self.config = config or default_settings
        self.llm = self._initialize_llm()
        self.output_parser = StrOutputParser()

    def _initialize_llm(self) -> ChatGoogleGenerativeAI:
        """Initialize the language model."""
        try:
            llm = ChatGoogleGenerativeAI(
                model=self.config.gemini_chat_model,
                google_api_key=self.config.gemini_api_key,
                temperature=self.config.gemini_temperature,
                timeout=self.config.provider_timeout_seconds
            )

            log_processing_info("LLM initialized", {
                "model": self.config.gemini_chat_model,
                "temperature": self.config.gemini_temperature
            })

            return llm

        except Exception as e:
            error_info = handle_processing_error("llm_init", e)
            raise RuntimeError(f"Failed to initialize LLM: {error_info}") from e

    def complete(self, prompt: str) -> str:
        """Send a rendered prompt to the model and return its text output."""
        response = self.llm.invoke(prompt)
        return self.output_parser.invoke(response)
