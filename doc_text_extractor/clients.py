"""boto3 client factories for S3 and Textract."""

from typing import Optional

import boto3

from doc_text_extractor.config import AWSConfig
from doc_text_extractor.logger import get_logger

logger = get_logger(__name__)


def _create_client(service_name: str, config: Optional[AWSConfig]):
    config = config or AWSConfig.from_env()
    logger.debug(
        "Creating AWS client",
        extra_data={"service": service_name, "region": config.region},
    )
    return boto3.client(
        service_name,
        region_name=config.region,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
    )


def create_s3_client(config: Optional[AWSConfig] = None):
    """Create an S3 client from config (or from the environment)."""
    return _create_client("s3", config)


def create_textract_client(config: Optional[AWSConfig] = None):
    """Create a Textract client from config (or from the environment)."""
    return _create_client("textract", config)
