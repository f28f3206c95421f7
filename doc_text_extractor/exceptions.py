"""Custom exceptions for document text extraction."""

from botocore.exceptions import BotoCoreError, ClientError

# Errors raised by S3/Textract are propagated as-is; catch them with this tuple.
UPSTREAM_ERRORS = (ClientError, BotoCoreError)


class DocumentExtractorError(Exception):
    """Base exception for document text extraction errors."""

    pass


class UnsupportedTypeError(DocumentExtractorError):
    """Raised when a declared document type is not supported.

    The message starts with the ``500.2:S`` code so log consumers that
    match on it keep working.
    """

    code = "500.2:S"

    def __init__(self, document_type: object):
        self.document_type = document_type
        super().__init__(f"{self.code}:Unsupported file type: {document_type}")


class StreamReadError(DocumentExtractorError):
    """Raised when an object body fails while it is being read."""

    pass


class ExtractionError(DocumentExtractorError):
    """Raised when local file extraction fails."""

    pass
