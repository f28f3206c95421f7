"""Configuration classes for document text extraction."""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_REGION = "default-region"
DEFAULT_ACCESS_KEY_ID = "default-access-key-id"
DEFAULT_SECRET_ACCESS_KEY = "default-secret-access-key"


@dataclass
class AWSConfig:
    """Region and credentials shared by the S3 and Textract clients.

    Examples:
        >>> # Read AWS_DEFAULT_REGION / AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY
        >>> config = AWSConfig.from_env()

        >>> # Explicit values, e.g. for a worker with its own credentials
        >>> config = AWSConfig(region="eu-west-1", access_key_id="...", secret_access_key="...")
    """

    region: str = DEFAULT_REGION
    access_key_id: str = DEFAULT_ACCESS_KEY_ID
    secret_access_key: str = DEFAULT_SECRET_ACCESS_KEY

    @classmethod
    def from_env(cls) -> "AWSConfig":
        """Build config from the standard AWS environment variables.

        Unset (or empty) variables fall back to the placeholder defaults.
        """
        return cls(
            region=os.environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            access_key_id=os.environ.get("AWS_ACCESS_KEY_ID") or DEFAULT_ACCESS_KEY_ID,
            secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY")
            or DEFAULT_SECRET_ACCESS_KEY,
        )


@dataclass
class AnalysisConfig:
    """Settings for object-store extraction."""

    feature_types: Tuple[str, ...] = ("TABLES", "FORMS")
    """Textract features requested for PDF/DOC/DOCX analysis.

    Fixed for the lifetime of an extractor; not chosen per document.
    """

    chunk_size: int = 64 * 1024
    """Read size in bytes used when draining an object body."""


@dataclass
class OCRConfig:
    """Configuration for the Tesseract OCR fallback on local PDFs.

    Examples:
        >>> # Defaults (150 DPI, 3 workers, English)
        >>> config = OCRConfig()

        >>> # Higher quality on a larger machine
        >>> config = OCRConfig(dpi=300, max_workers=7)

        >>> # Native text only
        >>> config = OCRConfig(enabled=False)
    """

    enabled: bool = True
    """Run OCR when native PDF text looks like a scan."""

    tesseract_cmd: str = "tesseract"
    """Path to tesseract binary. Default: "tesseract" (assumes in PATH)."""

    tessdata_prefix: Optional[str] = None
    """Optional path to tessdata directory. If None, uses system default."""

    languages: str = "eng"
    """OCR languages in Tesseract format (e.g., "eng", "eng+fra")."""

    dpi: int = 150
    """Render DPI for PDF pages. Higher is slower and uses more memory."""

    psm_mode: int = 6
    """Tesseract page segmentation mode. 6 = uniform block of text."""

    max_workers: int = 3
    """Pages OCR'd in parallel."""

    pdf_ocr_min_chars: int = 500
    """Below this many native characters (on a large file) OCR is tried."""

    pdf_ocr_min_chars_per_page: int = 150
    """Below this many native characters per page OCR is tried."""

    pdf_ocr_min_file_size_bytes: int = 200_000
    """Files smaller than this are not OCR'd on the absolute-count rule."""
