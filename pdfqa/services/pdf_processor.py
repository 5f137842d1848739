"""
PDF processing service for extracting text from PDF files.
"""

import PyPDF2
from io import BytesIO
from typing import List

from ..exceptions import ExtractionFailed
from ..utils import (
    measure_time,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)


class PDFProcessor:
    """Service for extracting text from PDF files held in memory."""

    @measure_time
    def extract_text(self, content: bytes) -> str:
        """
        Extract text from PDF file content.

        Args:
            content: PDF file content as bytes

        Returns:
            Text of all pages, joined by a blank line

        Raises:
            ExtractionFailed: If the PDF cannot be read or has no pages
        """
        if not content:
            raise ExtractionFailed("No text found in PDF or PDF parsing failed.", {"file_size": 0})

        try:
            pdf_reader = PyPDF2.PdfReader(BytesIO(content))
            pages = pdf_reader.pages
            total_pages = len(pages)
        except Exception as e:
            handle_processing_error("pdf_extraction", e, {"file_size": len(content)})
            raise ExtractionFailed(f"PDF parsing failed: {e}", {"file_size": len(content)}) from e

        if total_pages == 0:
            raise ExtractionFailed("No text found in PDF or PDF parsing failed.", {"total_pages": 0})

        log_processing_info("PDF extraction started", {
            "total_pages": total_pages,
            "file_size": len(content)
        })

        page_texts: List[str] = []
        for page_num, page in enumerate(pages):
            try:
                page_texts.append(page.extract_text() or "")
            except Exception as page_error:
                error_info = handle_processing_error(
                    "page_extraction",
                    page_error,
                    {"page": page_num + 1}
                )
                logger.warning(f"Skipping page {page_num + 1}: {error_info}")

        full_text = "\n\n".join(page_texts)

        log_processing_info("PDF extraction completed", {
            "total_pages": total_pages,
            "pages_extracted": len(page_texts),
            "characters": len(full_text)
        })

        return full_text
