"""Draining object-store response bodies."""

from botocore.exceptions import BotoCoreError

from doc_text_extractor.exceptions import StreamReadError
from doc_text_extractor.logger import get_logger

logger = get_logger(__name__)


def read_stream(body, chunk_size: int = 64 * 1024) -> bytes:
    """Read a response body to the end and return its bytes.

    Chunks are concatenated in the order they are received. If the stream
    fails part way, StreamReadError is raised and nothing read so far is
    returned. The body is closed either way.

    Args:
        body: A botocore ``StreamingBody`` (anything with ``iter_chunks``)
        chunk_size: Size of each read in bytes

    Returns:
        The complete object content

    Raises:
        StreamReadError: If reading from the body fails
    """
    chunks: list[bytes] = []
    try:
        for chunk in body.iter_chunks(chunk_size):
            chunks.append(chunk)
    except (OSError, BotoCoreError) as exc:
        received = sum(len(c) for c in chunks)
        logger.error(
            "Object body read failed",
            extra_data={
                "error_type": type(exc).__name__,
                "error": str(exc),
                "bytes_received": received,
            },
        )
        raise StreamReadError(f"Failed to read object body: {exc}") from exc
    finally:
        body.close()

    return b"".join(chunks)
