"""Command-line interface for doc-text-extractor."""

import typer

from doc_text_extractor.api import extract_file
from doc_text_extractor.config import OCRConfig
from doc_text_extractor.exceptions import UPSTREAM_ERRORS, DocumentExtractorError
from doc_text_extractor.logger import setup_logging
from doc_text_extractor.models import DocumentType
from doc_text_extractor.s3_extractor import S3TextExtractor

app = typer.Typer(
    name="doc-text",
    help="Extract plain text from local files or S3 objects",
    add_completion=False,
)

# Errors reported as "Error: ..." with exit code 1 instead of a traceback
REPORTED_ERRORS = (DocumentExtractorError, OSError, UnicodeDecodeError) + UPSTREAM_ERRORS


def _fail(exc: Exception):
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
):
    """Extract plain text from local files or S3 objects."""
    setup_logging(log_level)


@app.command("file")
def file_command(
    path: str = typer.Argument(..., help="Path to a PDF, DOCX, DOC or text file"),
    no_ocr: bool = typer.Option(
        False,
        "--no-ocr",
        help="Use native PDF text only, never OCR",
    ),
):
    """Print the text of a local file."""
    try:
        result = extract_file(path, ocr_config=OCRConfig(enabled=not no_ocr))
    except REPORTED_ERRORS as exc:
        _fail(exc)
    typer.echo(result.text)


@app.command("s3")
def s3_command(
    bucket: str = typer.Argument(..., help="S3 bucket name"),
    key: str = typer.Argument(..., help="Object key"),
    document_type: DocumentType = typer.Option(
        ...,
        "--type",
        "-t",
        case_sensitive=False,
        help="Declared document type",
    ),
):
    """Print the text of an S3 object (credentials from AWS_* variables)."""
    try:
        text = S3TextExtractor().extract_text(bucket, key, document_type)
    except REPORTED_ERRORS as exc:
        _fail(exc)
    typer.echo(text)


if __name__ == "__main__":
    app()
