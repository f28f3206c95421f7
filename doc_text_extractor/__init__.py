"""Plain-text extraction from S3 documents (via Textract) and local files."""

from doc_text_extractor.api import extract_file, extract_s3_text
from doc_text_extractor.config import AnalysisConfig, AWSConfig, OCRConfig
from doc_text_extractor.detector import detect_document_type
from doc_text_extractor.exceptions import (
    UPSTREAM_ERRORS,
    DocumentExtractorError,
    ExtractionError,
    StreamReadError,
    UnsupportedTypeError,
)
from doc_text_extractor.local_extractor import LocalFileExtractor
from doc_text_extractor.models import DocumentReference, DocumentType, ExtractionResult
from doc_text_extractor.s3_extractor import S3TextExtractor, lines_from_blocks

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "extract_s3_text",
    "extract_file",
    # Core classes
    "S3TextExtractor",
    "LocalFileExtractor",
    "detect_document_type",
    "lines_from_blocks",
    # Data models
    "DocumentType",
    "DocumentReference",
    "ExtractionResult",
    # Configuration
    "AWSConfig",
    "AnalysisConfig",
    "OCRConfig",
    # Exceptions
    "DocumentExtractorError",
    "UnsupportedTypeError",
    "StreamReadError",
    "ExtractionError",
    "UPSTREAM_ERRORS",
]
