"""
Input Validation Utilities
===========================

Checks the proxy routes run on incoming requests before anything is
forwarded to n8n.

Author: SeedFarm Team
"""

import re
from typing import Iterable, Optional


def normalize_path(path: str) -> str:
    """
    Turn a forwarded path into "/a/b" form.

    Leading/trailing slashes are collapsed. Returns "" for an empty path.
    Raises ValueError for "." or ".." segments so nobody can walk out of
    the webhook root.
    """
    segments = [segment for segment in path.split("/") if segment]
    if any(segment in (".", "..") for segment in segments):
        raise ValueError(f"Relative path segments are not allowed: {path}")
    if not segments:
        return ""
    return "/" + "/".join(segments)


def is_path_allowed(path: str, allowed_paths: Iterable[str]) -> bool:
    """
    Is `path` one of the allowed webhook paths (or below one)?

    Matching is per segment, so "/app" allows "/app/home" but not "/apple".

    Args:
        path: Normalized path, e.g. "/chat-message/history"
        allowed_paths: Allowed prefixes, e.g. ["/chat-message", "/app/home"]
    """
    if not path:
        return False
    for allowed in allowed_paths:
        try:
            prefix = normalize_path(allowed)
        except ValueError:
            continue
        if prefix and (path == prefix or path.startswith(prefix + "/")):
            return True
    return False


def is_blank(value: Optional[str]) -> bool:
    """True for None, "" and whitespace-only strings."""
    return value is None or not value.strip()


def sanitize_filename(name: Optional[str], default: str = "upload.jpg") -> str:
    """
    Sanitize an uploaded filename before passing it on.

    Args:
        name: Original filename (may be None)
        default: Used when nothing usable is left

    Returns:
        Filename without path separators or other dangerous characters
    """
    if not name:
        return default
    # Keep only the last path component
    name = re.split(r"[\\/]", name)[-1]
    sanitized = re.sub(r'[<>:"|?*\x00-\x1f]', "_", name)
    sanitized = sanitized.strip(". ")
    return sanitized[:255] or default
