"""Document type detection for local files."""

from pathlib import Path
from typing import Optional

from doc_text_extractor.exceptions import UnsupportedTypeError
from doc_text_extractor.logger import get_logger
from doc_text_extractor.models import DocumentType

logger = get_logger(__name__)


PDF_SIGNATURE = b"%PDF"
ZIP_SIGNATURE = b"PK\x03\x04"
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"  # Legacy Office container

EXTENSION_TYPES = {
    ".pdf": DocumentType.PDF,
    ".docx": DocumentType.DOCX,
    ".doc": DocumentType.DOC,
    ".txt": DocumentType.TEXT,
    ".text": DocumentType.TEXT,
    ".md": DocumentType.TEXT,
    ".csv": DocumentType.TEXT,
    ".log": DocumentType.TEXT,
}

# Extensions under which a ZIP/OLE signature is trusted
CONTAINER_SUFFIXES = {
    DocumentType.DOCX: {".docx", ""},
    DocumentType.DOC: {".doc", ""},
}


def sniff_document_type(file_bytes: bytes) -> Optional[DocumentType]:
    """Detect the document type from its leading magic bytes."""
    head = file_bytes[:4]
    if head.startswith(PDF_SIGNATURE):
        return DocumentType.PDF
    if head.startswith(ZIP_SIGNATURE):
        # DOCX is a ZIP archive
        return DocumentType.DOCX
    if head.startswith(OLE_SIGNATURE):
        return DocumentType.DOC
    return None


def detect_document_type(file_bytes: bytes, file_name: str) -> DocumentType:
    """Decide how a local file should be extracted.

    A PDF signature wins over the extension. ZIP and OLE containers also
    hold spreadsheets, presentations and plain archives, so they count as
    DOCX/DOC only when the extension agrees or is missing. Text files have
    no signature and are recognised by extension alone.

    Raises:
        UnsupportedTypeError: If neither signature nor extension is known
    """
    suffix = Path(file_name).suffix.lower()

    document_type = sniff_document_type(file_bytes)
    source = "signature"
    if document_type in CONTAINER_SUFFIXES:
        if suffix not in CONTAINER_SUFFIXES[document_type]:
            document_type = None
    elif document_type is None:
        document_type = EXTENSION_TYPES.get(suffix)
        source = "extension"

    if document_type is None:
        logger.warning(
            "Unsupported local file type",
            extra_data={"file_name": file_name, "file_extension": suffix or "<none>"},
        )
        raise UnsupportedTypeError(suffix or file_name)

    logger.debug(
        "Detected document type",
        extra_data={
            "file_name": file_name,
            "document_type": document_type.value,
            "detected_from": source,
            "file_size_bytes": len(file_bytes),
        },
    )
    return document_type
