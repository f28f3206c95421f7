"""Shared fixtures for doc-text-extractor tests."""

import logging
from unittest.mock import MagicMock

import pytest

from doc_text_extractor.s3_extractor import S3TextExtractor


class FakeBody:
    """Stand-in for botocore's StreamingBody yielding fixed chunks."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error
        self.closed = False
        self.requested_chunk_size = None

    def iter_chunks(self, chunk_size=1024):
        self.requested_chunk_size = chunk_size
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True


@pytest.fixture
def s3_client():
    return MagicMock(name="s3_client")


@pytest.fixture
def textract_client():
    return MagicMock(name="textract_client")


@pytest.fixture
def extractor(s3_client, textract_client):
    return S3TextExtractor(s3_client=s3_client, textract_client=textract_client)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
