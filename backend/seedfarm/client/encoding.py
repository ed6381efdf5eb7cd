"""
Image Encoding Helpers
======================

The disease-diagnosis webhook wants the image INSIDE a JSON body, as plain
base64 text. These helpers get you from "a file" to that text.

    base64_text = await file_to_base64(upload)
    result = await diagnose_disease(base64_text)

Author: SeedFarm Team
"""

import asyncio
import base64
import inspect
import os
from pathlib import Path


DATA_URI_PREFIX = "data:"


def strip_data_uri(value: str) -> str:
    """
    Drop a "data:image/jpeg;base64," prefix if there is one.

    "data:image/png;base64,iVBORw0..." -> "iVBORw0..."
    "iVBORw0..."                        -> "iVBORw0..."
    """
    if value.startswith(DATA_URI_PREFIX) and "," in value:
        return value.split(",", 1)[1]
    return value


async def _read_all(file) -> bytes:
    """Read a file-like, path, or bytes object to the end."""
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)

    if isinstance(file, (str, os.PathLike)):
        return await asyncio.to_thread(Path(file).read_bytes)

    read = getattr(file, "read", None)
    if read is None:
        raise TypeError(f"Cannot read image data from {type(file).__name__}")

    # Starlette's UploadFile.read() is a coroutine, open() files are not
    data = read()
    if inspect.isawaitable(data):
        data = await data
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


async def file_to_base64(file) -> str:
    """
    Read an image completely and return it as base64 text.

    Args:
        file: Any of
            - bytes / bytearray
            - a path (str or Path) to an image on disk
            - a file object with read() (sync or async, e.g. UploadFile)
            - a data URI string ("data:image/jpeg;base64,...")

    Returns:
        Base64 text WITHOUT the "data:...;base64," prefix

    Raises:
        Whatever the underlying read raises (OSError, etc.).
        Nothing is returned until the whole payload has been read.
    """
    # A data URI string is already encoded, just cut the prefix off
    if isinstance(file, str) and file.startswith(DATA_URI_PREFIX):
        return strip_data_uri(file)

    data = await _read_all(file)
    return base64.b64encode(data).decode("ascii")
