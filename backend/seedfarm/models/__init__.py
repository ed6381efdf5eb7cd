"""
Models Package
==============

Request bodies the client sends and the proxy accepts.

Example:
    from seedfarm.models import YieldPredictionParams, ChatMessageRequest
"""

from .farm import (
    # What the client library sends
    YieldPredictionParams,
    DiaryEntry,

    # What the proxy routes accept
    DiseaseDiagnosisRequest,
    ChatMessageRequest,

    dump_body,
)

__all__ = [
    "YieldPredictionParams",
    "DiaryEntry",
    "DiseaseDiagnosisRequest",
    "ChatMessageRequest",
    "dump_body",
]
