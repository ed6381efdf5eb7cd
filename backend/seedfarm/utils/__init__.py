"""
Utility modules for the tomato farm docs/proxy server.
"""

from seedfarm.utils.validation import (
    normalize_path,
    is_path_allowed,
    is_blank,
    sanitize_filename,
)
from seedfarm.utils.uploads import (
    InMemoryUpload,
    read_multipart,
    read_upload,
    read_body,
)

__all__ = [
    "normalize_path",
    "is_path_allowed",
    "is_blank",
    "sanitize_filename",
    "InMemoryUpload",
    "read_multipart",
    "read_upload",
    "read_body",
]
