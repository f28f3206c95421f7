"""Text extraction for documents stored in S3."""

from typing import Any, Optional, Union

from doc_text_extractor.clients import create_s3_client, create_textract_client
from doc_text_extractor.config import AnalysisConfig, AWSConfig
from doc_text_extractor.logger import Timer, get_logger, set_extraction_id
from doc_text_extractor.models import DocumentReference, DocumentType
from doc_text_extractor.streams import read_stream

logger = get_logger(__name__)

LINE_BLOCK_TYPE = "LINE"


def lines_from_blocks(blocks: Optional[list[dict[str, Any]]]) -> str:
    """Join the text of LINE blocks with newlines, in the order given.

    Blocks of any other type are skipped. A LINE block without text
    contributes an empty line. No blocks at all gives "".
    """
    return "\n".join(
        block.get("Text") or ""
        for block in blocks or ()
        if block.get("BlockType") == LINE_BLOCK_TYPE
    )


class S3TextExtractor:
    """Extracts plain text from S3 objects by declared document type.

    PDF, DOCX and DOC are sent to Textract ``AnalyzeDocument``. TEXT
    objects are downloaded and decoded as UTF-8. Every call is independent,
    so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        s3_client=None,
        textract_client=None,
        aws_config: Optional[AWSConfig] = None,
        analysis_config: Optional[AnalysisConfig] = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            s3_client: boto3 S3 client. If None, one is created from aws_config.
            textract_client: boto3 Textract client. If None, one is created
                from aws_config.
            aws_config: Region and credentials for clients created here. If
                None, read from the environment.
            analysis_config: Textract features and read chunk size.
        """
        if s3_client is None or textract_client is None:
            aws_config = aws_config or AWSConfig.from_env()
        self.s3_client = s3_client if s3_client is not None else create_s3_client(aws_config)
        self.textract_client = (
            textract_client
            if textract_client is not None
            else create_textract_client(aws_config)
        )
        self.analysis_config = analysis_config or AnalysisConfig()

    def extract_text(
        self, bucket: str, key: str, document_type: Union[DocumentType, str]
    ) -> str:
        """Extract text from ``s3://bucket/key``.

        Raises:
            UnsupportedTypeError: If document_type is not PDF, DOCX, DOC or
                TEXT. No AWS call is made.
            botocore.exceptions.ClientError: Re-raised unmodified from S3 or
                Textract.
            StreamReadError: If the object body fails while being read.
            UnicodeDecodeError: If a TEXT object is not valid UTF-8.
        """
        return self.extract(
            DocumentReference(bucket=bucket, key=key, document_type=document_type)
        )

    def extract(self, reference: DocumentReference) -> str:
        """Extract text for a document reference. See ``extract_text``."""
        document_type = DocumentType.parse(reference.document_type)
        set_extraction_id()

        logger.debug(
            "Starting S3 extraction",
            extra_data={
                "bucket": reference.bucket,
                "key": reference.key,
                "document_type": document_type.value,
            },
        )

        with Timer("s3_extraction") as timer:
            if document_type.uses_analysis:
                text = self._analyze_document(reference.bucket, reference.key)
            else:
                text = self._read_text_object(reference.bucket, reference.key)

        logger.info(
            "Extracted text from S3 object",
            extra_data={
                "bucket": reference.bucket,
                "key": reference.key,
                "document_type": document_type.value,
                "character_count": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    def _analyze_document(self, bucket: str, key: str) -> str:
        """Run Textract AnalyzeDocument on the object and keep LINE text."""
        feature_types = list(self.analysis_config.feature_types)
        try:
            response = self.textract_client.analyze_document(
                Document={"S3Object": {"Bucket": bucket, "Name": key}},
                FeatureTypes=feature_types,
            )
        except Exception as exc:
            logger.error(
                "Error processing document with Textract",
                extra_data={
                    "bucket": bucket,
                    "key": key,
                    "feature_types": ",".join(feature_types),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise

        blocks = response.get("Blocks")
        logger.debug(
            "Textract analysis completed",
            extra_data={"bucket": bucket, "key": key, "block_count": len(blocks or ())},
        )
        return lines_from_blocks(blocks)

    def _read_text_object(self, bucket: str, key: str) -> str:
        """Download the whole object and decode it as UTF-8."""
        response = self.s3_client.get_object(Bucket=bucket, Key=key)
        content = read_stream(response["Body"], self.analysis_config.chunk_size)

        logger.debug(
            "Downloaded text object",
            extra_data={"bucket": bucket, "key": key, "size_bytes": len(content)},
        )
        return content.decode("utf-8")
