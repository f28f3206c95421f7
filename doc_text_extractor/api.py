"""High-level API for text extraction."""

from pathlib import Path
from typing import Optional, Union

from doc_text_extractor.config import AWSConfig, OCRConfig
from doc_text_extractor.detector import detect_document_type
from doc_text_extractor.local_extractor import LocalFileExtractor
from doc_text_extractor.logger import Timer, get_logger, set_extraction_id
from doc_text_extractor.models import DocumentType, ExtractionResult
from doc_text_extractor.s3_extractor import S3TextExtractor

logger = get_logger(__name__)


def extract_s3_text(
    bucket: str,
    key: str,
    document_type: Union[DocumentType, str],
    aws_config: Optional[AWSConfig] = None,
) -> str:
    """Extract text from an S3 object using freshly created clients.

    Long-running callers should build one ``S3TextExtractor`` and reuse it
    instead.

    Examples:
        >>> text = extract_s3_text("bucket1", "report.pdf", "PDF")
        >>> notes = extract_s3_text("bucket1", "notes.txt", DocumentType.TEXT)
    """
    return S3TextExtractor(aws_config=aws_config).extract_text(bucket, key, document_type)


def extract_file(
    file_path: Union[str, Path], ocr_config: Optional[OCRConfig] = None
) -> ExtractionResult:
    """Extract text from a local file.

    Args:
        file_path: Path to a PDF, DOCX, DOC or plain-text file
        ocr_config: OCR settings for scanned PDFs (optional)

    Returns:
        ExtractionResult with the text and what was used to get it

    Raises:
        FileNotFoundError: If file_path does not exist
        UnsupportedTypeError: If the file type is not recognised
        ExtractionError: If extraction fails
        UnicodeDecodeError: If a text file is not valid UTF-8
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    set_extraction_id()
    file_bytes = path.read_bytes()
    document_type = detect_document_type(file_bytes, path.name)

    extractor = LocalFileExtractor(config=ocr_config)
    with Timer("local_extraction") as timer:
        text, ocr_used = extractor.extract(file_bytes, path.name, document_type)

    logger.info(
        "Extracted text from local file",
        extra_data={
            "file_name": path.name,
            "document_type": document_type.value,
            "character_count": len(text),
            "ocr_used": ocr_used,
            "extraction_time_ms": timer.get_elapsed_ms(),
        },
    )

    return ExtractionResult(
        text=text,
        file_name=path.name,
        document_type=document_type,
        character_count=len(text),
        ocr_used=ocr_used,
    )
