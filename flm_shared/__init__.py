"""Shared utilities for the FLM file listing engine."""
from .errors import sanitize_error_message
from .log import get_logger, log_structured, request_id_var
from .result import Result
from .time import format_modification_date, now, timer
from .types import DIR_MIME, HIDE_MARKER, EntryType, ErrorCode, MimeClass, classify_mime

__all__ = [
    "Result",
    "get_logger",
    "log_structured",
    "request_id_var",
    "now",
    "timer",
    "format_modification_date",
    "EntryType",
    "MimeClass",
    "ErrorCode",
    "DIR_MIME",
    "HIDE_MARKER",
    "classify_mime",
    "sanitize_error_message",
]
