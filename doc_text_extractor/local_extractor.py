"""Local file extraction with PyMuPDF4LLM, python-docx and Tesseract OCR."""

import io
import os
import shutil
import subprocess
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
import pymupdf4llm
import pytesseract
from docx import Document
from PIL import Image

from doc_text_extractor.config import OCRConfig
from doc_text_extractor.exceptions import ExtractionError
from doc_text_extractor.logger import Timer, get_logger
from doc_text_extractor.models import DocumentType

logger = get_logger(__name__)


class LocalFileExtractor:
    """Extracts text from PDF, DOCX, DOC and plain-text files on disk.

    PDFs are read natively with PyMuPDF4LLM; pages of scanned PDFs are
    OCR'd with Tesseract. DOCX goes through python-docx, legacy DOC
    through textutil or LibreOffice when one is installed.
    """

    def __init__(self, config: Optional[OCRConfig] = None):
        self.config = config or OCRConfig()

        if self.config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.config.tesseract_cmd
        if self.config.tessdata_prefix:
            os.environ["TESSDATA_PREFIX"] = self.config.tessdata_prefix

    def extract(
        self, file_bytes: bytes, file_name: str, document_type: DocumentType
    ) -> tuple[str, bool]:
        """Extract text from a file's bytes.

        Args:
            file_bytes: Raw file content
            file_name: Original filename, used in logs and for DOC conversion
            document_type: How to read the content

        Returns:
            Tuple of (extracted text, whether OCR produced it). PDFs come
            back as Markdown.

        Raises:
            ExtractionError: If PDF/DOCX/DOC extraction fails
            UnicodeDecodeError: If a TEXT file is not valid UTF-8
        """
        if document_type is DocumentType.TEXT:
            return file_bytes.decode("utf-8"), False

        try:
            if document_type is DocumentType.PDF:
                return self._extract_pdf(file_bytes, file_name)
            if document_type is DocumentType.DOCX:
                return self._extract_docx(file_bytes, file_name), False
            return self._extract_doc(file_bytes, file_name), False
        except ExtractionError:
            raise
        except Exception as exc:
            logger.error(
                "Local extraction failed",
                extra_data={
                    "file_name": file_name,
                    "document_type": document_type.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise ExtractionError(f"Failed to extract {file_name}: {exc}") from exc

    def _extract_pdf(self, file_bytes: bytes, file_name: str) -> tuple[str, bool]:
        with fitz.open(stream=file_bytes, filetype="pdf") as pdf:
            page_count = pdf.page_count
            with Timer("pdf_native_extraction") as timer:
                text = pymupdf4llm.to_markdown(
                    pdf,
                    table_strategy="lines_strict",
                    force_text=True,
                    write_images=False,
                    ignore_images=True,
                    fontsize_limit=3,
                ).strip()

        logger.debug(
            "PDF native text extraction completed",
            extra_data={
                "file_name": file_name,
                "characters_extracted": len(text),
                "page_count": page_count,
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )

        if not self._should_ocr_pdf(len(text), page_count, len(file_bytes)):
            return text, False

        logger.info(
            "Triggering OCR fallback for PDF",
            extra_data={"file_name": file_name, "native_characters": len(text)},
        )
        ocr_text = self._ocr_pdf(file_bytes, page_count, file_name)

        # Keep whichever reading recovered more text
        if len(ocr_text) > len(text):
            return ocr_text, True
        return text, False

    def _should_ocr_pdf(
        self, native_char_count: int, page_count: int, file_size_bytes: int
    ) -> bool:
        """Decide whether native PDF text looks like a scan."""
        if not self.config.enabled or page_count == 0:
            return False
        if native_char_count == 0:
            return True
        if native_char_count / page_count < self.config.pdf_ocr_min_chars_per_page:
            return True
        return (
            native_char_count < self.config.pdf_ocr_min_chars
            and file_size_bytes >= self.config.pdf_ocr_min_file_size_bytes
        )

    def _ocr_page(self, file_bytes: bytes, page_num: int, file_name: str) -> str:
        """OCR one page. Each worker opens its own document handle."""
        try:
            with fitz.open(stream=file_bytes, filetype="pdf") as pdf:
                pix = pdf[page_num].get_pixmap(dpi=self.config.dpi)
                image = Image.open(io.BytesIO(pix.tobytes("png")))

            return pytesseract.image_to_string(
                image,
                lang=self.config.languages,
                config=f"--psm {self.config.psm_mode}",
            ).strip()
        except Exception as exc:
            # One unreadable page must not lose the rest of the document
            logger.error(
                f"OCR failed for page {page_num + 1}",
                extra_data={
                    "file_name": file_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return ""

    def _ocr_pdf(self, file_bytes: bytes, page_count: int, file_name: str) -> str:
        """OCR every page in parallel and join the pages in page order."""
        with Timer("pdf_ocr") as timer:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                pages = list(
                    executor.map(
                        lambda n: self._ocr_page(file_bytes, n, file_name),
                        range(page_count),
                    )
                )
            text = "\n\n".join(page for page in pages if page)

        logger.info(
            "PDF OCR completed",
            extra_data={
                "file_name": file_name,
                "page_count": page_count,
                "pages_with_text": sum(1 for page in pages if page),
                "characters_extracted": len(text),
                "ocr_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    def _extract_docx(self, file_bytes: bytes, file_name: str) -> str:
        """Paragraphs first, then tables as pipe-separated rows."""
        with Timer("docx_extraction") as timer:
            doc = Document(io.BytesIO(file_bytes))

            parts = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
            table_count = 0
            for table in doc.tables:
                rows = [" | ".join(cell.text.strip() for cell in row.cells) for row in table.rows]
                if rows:
                    parts.append("\n".join(rows))
                    table_count += 1

            text = "\n\n".join(parts)

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "file_name": file_name,
                "table_count": table_count,
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    def _extract_doc(self, file_bytes: bytes, file_name: str) -> str:
        """Convert legacy .doc to text with textutil (macOS) or LibreOffice."""
        textutil = shutil.which("textutil")
        soffice = shutil.which("soffice") or shutil.which("libreoffice")
        if not textutil and not soffice:
            raise ExtractionError(
                "Cannot extract .doc files: install textutil (macOS) or LibreOffice, "
                "or convert the file to DOCX"
            )

        with tempfile.TemporaryDirectory() as tmp_dir:
            source = Path(tmp_dir) / "source.doc"
            source.write_bytes(file_bytes)

            if textutil:
                result = subprocess.run(
                    [textutil, "-convert", "txt", str(source), "-stdout"],
                    capture_output=True,
                    text=True,
                )
                if result.returncode == 0 and result.stdout.strip():
                    return result.stdout.strip()

            if soffice:
                out_dir = Path(tmp_dir) / "out"
                result = subprocess.run(
                    [soffice, "--headless", "--convert-to", "txt:Text", str(source),
                     "--outdir", str(out_dir)],
                    capture_output=True,
                    text=True,
                )
                converted = out_dir / "source.txt"
                if result.returncode == 0 and converted.exists():
                    return converted.read_text(encoding="utf-8", errors="ignore").strip()

        logger.warning(
            "DOC conversion produced no output",
            extra_data={"file_name": file_name, "returncode": result.returncode},
        )
        raise ExtractionError(f"Failed to convert {file_name} to text")
