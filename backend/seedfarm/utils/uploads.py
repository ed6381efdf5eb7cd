"""
In-Memory Upload Handling
=========================

Parses multipart uploads straight from the request stream into memory.

WHY NOT UploadFile?
------------------
FastAPI's File(...) parameters go through Starlette's parser, which spools
anything over 1 MB to a temporary file on disk. Images sent to the proxy
must stay in memory and be capped, so we:
    1. Reject early if Content-Length already says the body is too big
    2. Count bytes while streaming and stop as soon as the cap is passed
    3. Parse with a spool size as large as the cap

Author: SeedFarm Team
"""

import logging
from typing import AsyncIterator, NamedTuple, Optional

from fastapi import HTTPException, Request
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartParser

logger = logging.getLogger(__name__)


# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class InMemoryUpload(NamedTuple):
    """A file upload held entirely in memory."""
    filename: Optional[str]
    content_type: str
    content: bytes


def _too_large(max_bytes: int) -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"Upload too large. Maximum size is {max_bytes:,} bytes ({max_bytes / (1024 * 1024):.2f} MB)."
    )


def _is_multipart(request: Request) -> bool:
    return request.headers.get("content-type", "").startswith("multipart/form-data")


async def _limited_stream(request: Request, limit: int, max_bytes: int) -> AsyncIterator[bytes]:
    """Yield the request body, failing once more than `limit` bytes arrived."""
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise _too_large(max_bytes)
        yield chunk


async def read_multipart(request: Request, max_bytes: int) -> FormData:
    """
    Parse a multipart/form-data request without touching the disk.

    Args:
        request: Incoming request
        max_bytes: Largest file we accept

    Raises:
        HTTPException(400): Not a multipart request
        HTTPException(413): Body bigger than the cap
    """
    if not _is_multipart(request):
        raise HTTPException(
            status_code=400,
            detail="Expected a multipart/form-data upload"
        )

    limit = max_bytes + MULTIPART_OVERHEAD_BYTES

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        logger.warning(f"Rejected upload: Content-Length {content_length} > {limit}")
        raise _too_large(max_bytes)

    parser = MultiPartParser(request.headers, _limited_stream(request, limit, max_bytes))
    # Keep file parts in the SpooledTemporaryFile's memory buffer
    parser.spool_max_size = limit
    return await parser.parse()


async def read_upload(form: FormData, field: str, max_bytes: int) -> Optional[InMemoryUpload]:
    """
    Pull one file field out of a parsed form.

    Returns:
        The file as bytes, or None if the field is missing or not a file

    Raises:
        HTTPException(413): The file itself is bigger than the cap
    """
    upload = form.get(field)
    if not isinstance(upload, UploadFile):
        return None

    content = await upload.read(max_bytes + 1)
    await upload.close()
    if len(content) > max_bytes:
        raise _too_large(max_bytes)

    return InMemoryUpload(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        content=content,
    )


async def read_body(request: Request, max_bytes: int) -> bytes:
    """
    Read a whole request body into memory, capped.

    Multipart bodies get the same boundary allowance as read_multipart, so a
    file exactly at the cap still fits.

    Raises:
        HTTPException(413): Body bigger than the cap
    """
    limit = max_bytes
    if _is_multipart(request):
        limit += MULTIPART_OVERHEAD_BYTES

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise _too_large(max_bytes)

    chunks = []
    async for chunk in _limited_stream(request, limit, max_bytes):
        chunks.append(chunk)
    return b"".join(chunks)
