import io
import logging
import re
from datetime import datetime
from typing import Dict, Protocol, Union

from PyPDF2 import PdfReader

from models.resume_models import ParsedDocument
from services.exceptions import DecodeError

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    """Anything that turns document bytes into a ParsedDocument."""

    def extract_text(self, data: bytes) -> ParsedDocument:
        ...


class PDFProcessor:
    def __init__(self):
        self.text_cleaning_patterns = [
            (r'\r\n?', '\n'),  # Normalise line endings
            (r'[ \t\f\v\xa0]+', ' '),  # Collapse spaces within a line
            (r' *\n *', '\n'),  # Trim around line breaks
            (r'\n+', '\n'),  # Multiple newlines to single newline
        ]
        self.string_metadata_fields = {
            'title': 'title',
            'author': 'author',
            'creator': 'creator',
            'producer': 'producer',
        }
        self.date_metadata_fields = {
            'creationDate': 'creation_date',
            'modificationDate': 'modification_date',
        }

    def extract_text(self, data: bytes) -> ParsedDocument:
        """
        Extract text, page count and document info from PDF bytes
        """
        try:
            pdf_reader = PdfReader(io.BytesIO(data))
            page_texts = [page.extract_text() or "" for page in pdf_reader.pages]
            page_count = len(pdf_reader.pages)
            document_info = self.extract_document_info(pdf_reader)
        except Exception as e:
            logger.error(f"Error extracting text from PDF: {str(e)}")
            raise DecodeError(f"Could not read PDF document: {str(e)}") from e

        cleaned_text = self.clean_text("\n".join(page_texts))
        logger.info(f"Extracted {len(cleaned_text)} characters from {page_count} page(s)")

        return ParsedDocument(
            text=cleaned_text,
            page_count=page_count,
            document_info=document_info,
        )

    def extract_document_info(self, pdf_reader: PdfReader) -> Dict[str, Union[datetime, str]]:
        metadata = pdf_reader.metadata
        if metadata is None:
            return {}

        info: Dict[str, Union[datetime, str]] = {}
        for key, attribute in self.string_metadata_fields.items():
            value = getattr(metadata, attribute, None)
            if value:
                info[key] = str(value)

        for key, attribute in self.date_metadata_fields.items():
            try:
                value = getattr(metadata, attribute, None)
            except ValueError as e:
                logger.warning(f"Skipping malformed PDF {key}: {str(e)}")
                continue
            if value is not None:
                info[key] = value

        return info

    def clean_text(self, text: str) -> str:
        """
        Normalize whitespace while keeping line breaks intact
        """
        for pattern, replacement in self.text_cleaning_patterns:
            text = re.sub(pattern, replacement, text)

        return text.strip()
