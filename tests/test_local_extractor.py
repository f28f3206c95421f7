"""Tests for local file extraction."""

import zipfile
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import fitz
import pytest
from docx import Document

from doc_text_extractor import (
    DocumentType,
    ExtractionError,
    LocalFileExtractor,
    OCRConfig,
    UnsupportedTypeError,
    extract_file,
)


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "report.pdf"
    pdf = fitz.open()
    page = pdf.new_page()
    page.insert_text((72, 72), "Quarterly report for the compliance team")
    pdf.save(str(path))
    pdf.close()
    return path


@pytest.fixture
def docx_path(tmp_path):
    path = tmp_path / "minutes.docx"
    doc = Document()
    doc.add_paragraph("Meeting minutes")
    doc.add_paragraph("   ")
    doc.add_paragraph("Action items follow")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Owner"
    table.cell(0, 1).text = "Task"
    table.cell(1, 0).text = "Ana"
    table.cell(1, 1).text = "Review"
    doc.save(str(path))
    return path


class TestExtractFile:
    def test_text_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("first line\nsecond line", encoding="utf-8")

        result = extract_file(path)

        assert result.text == "first line\nsecond line"
        assert result.document_type is DocumentType.TEXT
        assert result.file_name == "notes.txt"
        assert result.character_count == len(result.text)
        assert result.ocr_used is False

    def test_docx_paragraphs_then_tables(self, docx_path):
        result = extract_file(docx_path)

        assert result.document_type is DocumentType.DOCX
        assert result.text == (
            "Meeting minutes\n\nAction items follow\n\nOwner | Task\nAna | Review"
        )

    def test_pdf_native_text(self, pdf_path):
        result = extract_file(pdf_path, ocr_config=OCRConfig(enabled=False))

        assert result.document_type is DocumentType.PDF
        assert "Quarterly report for the compliance team" in result.text
        assert result.ocr_used is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            extract_file(tmp_path / "nope.pdf")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "photo.xyz"
        path.write_bytes(b"\x00\x00")

        with pytest.raises(UnsupportedTypeError):
            extract_file(path)

    def test_zip_archive_is_unsupported(self, tmp_path):
        """Test a plain ZIP is rejected up front instead of failing as a DOCX."""
        path = tmp_path / "bundle.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("readme.txt", "not a word document")

        with pytest.raises(UnsupportedTypeError, match=r"\.zip"):
            extract_file(path)

    def test_invalid_utf8_text(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("café".encode("latin-1"))

        with pytest.raises(UnicodeDecodeError):
            extract_file(path)


class TestLocalFileExtractor:
    def test_corrupt_docx_raises_extraction_error(self):
        extractor = LocalFileExtractor()

        with pytest.raises(ExtractionError, match="broken.docx"):
            extractor.extract(b"PK\x03\x04not a zip", "broken.docx", DocumentType.DOCX)

    def test_doc_without_converters(self):
        extractor = LocalFileExtractor()

        with patch("doc_text_extractor.local_extractor.shutil.which", return_value=None):
            with pytest.raises(ExtractionError, match="LibreOffice"):
                extractor.extract(b"\xd0\xcf\x11\xe0", "legacy.doc", DocumentType.DOC)

    def test_ocr_result_used_when_longer(self, pdf_path):
        extractor = LocalFileExtractor(OCRConfig(max_workers=1))

        with patch.object(
            LocalFileExtractor, "_ocr_page", return_value="Scanned text " * 50
        ) as ocr_page:
            text, ocr_used = extractor.extract(
                pdf_path.read_bytes(), "report.pdf", DocumentType.PDF
            )

        assert ocr_page.call_count == 1
        assert text.startswith("Scanned text")
        assert ocr_used is True

    def test_native_text_kept_when_ocr_finds_nothing(self, pdf_path):
        extractor = LocalFileExtractor()

        with patch.object(LocalFileExtractor, "_ocr_page", return_value=""):
            text, ocr_used = extractor.extract(
                pdf_path.read_bytes(), "report.pdf", DocumentType.PDF
            )

        assert "Quarterly report" in text
        assert ocr_used is False

    def test_concurrent_calls_keep_their_own_ocr_flag(self, pdf_path):
        """Test one shared extractor reports OCR use per call, not per instance."""
        extractor = LocalFileExtractor(OCRConfig(max_workers=1))
        pdf_bytes = pdf_path.read_bytes()
        jobs = [
            (pdf_bytes, "report.pdf", DocumentType.PDF),
            (b"plain notes", "notes.txt", DocumentType.TEXT),
        ] * 4

        with patch.object(
            LocalFileExtractor, "_ocr_page", return_value="Scanned text " * 50
        ):
            with ThreadPoolExecutor(max_workers=4) as executor:
                results = list(executor.map(lambda job: extractor.extract(*job), jobs))

        assert [ocr_used for _, ocr_used in results] == [True, False] * 4
        assert not hasattr(extractor, "last_ocr_used")


class TestShouldOcrPdf:
    @pytest.fixture
    def extractor(self):
        return LocalFileExtractor(OCRConfig())

    def test_no_native_text(self, extractor):
        assert extractor._should_ocr_pdf(0, 3, 10_000) is True

    def test_sparse_pages(self, extractor):
        assert extractor._should_ocr_pdf(200, 4, 10_000) is True

    def test_small_text_in_large_file(self, extractor):
        assert extractor._should_ocr_pdf(400, 1, 500_000) is True

    def test_text_pdf(self, extractor):
        assert extractor._should_ocr_pdf(5_000, 2, 500_000) is False

    def test_disabled(self):
        extractor = LocalFileExtractor(OCRConfig(enabled=False))
        assert extractor._should_ocr_pdf(0, 3, 10_000) is False

    def test_empty_document(self, extractor):
        assert extractor._should_ocr_pdf(0, 0, 1_000) is False
