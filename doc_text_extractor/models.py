"""Data models for document text extraction."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from doc_text_extractor.exceptions import UnsupportedTypeError


class DocumentType(str, Enum):
    """Declared format of a document; drives the extraction strategy."""

    PDF = "PDF"
    DOCX = "DOCX"
    DOC = "DOC"
    TEXT = "TEXT"

    @classmethod
    def parse(cls, value: Union["DocumentType", str]) -> "DocumentType":
        """Return the member for ``value`` or raise UnsupportedTypeError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedTypeError(value) from None

    @property
    def uses_analysis(self) -> bool:
        return self is not DocumentType.TEXT


@dataclass(frozen=True)
class DocumentReference:
    """Location and declared type of a document in the object store."""

    bucket: str
    key: str
    document_type: DocumentType


@dataclass
class ExtractionResult:
    """Result of local file extraction."""

    text: str
    file_name: str
    document_type: DocumentType
    character_count: int
    ocr_used: bool = False
