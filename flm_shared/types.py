"""
Shared types, enums, and constants.
"""
from enum import Enum
from typing import Final, Literal, Optional, Union

EntryType = Literal["file", "dir"]

# Display classes derived from a raw MIME string
MimeClass = Literal["dir", "image", "pdf", "audio", "video", "text", "file"]

# Sentinel MIME value attached to directory entries
DIR_MIME: Final[str] = "dir"

# Name of the marker file that hides its parent directory
HIDE_MARKER: Final[str] = ".hide"


class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    INVALID_INPUT = "INVALID_INPUT"

    UNSUPPORTED = "UNSUPPORTED"
    TIMEOUT = "TIMEOUT"

    PROBE_FAILED = "PROBE_FAILED"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


# Ordered rules: first substring hit wins. "image" and "dir" are handled first.
MIME_RULES: Final[tuple[tuple[MimeClass, tuple[str, ...]], ...]] = (
    ("pdf", ("pdf",)),
    ("audio", ("audio",)),
    ("video", ("video",)),
    ("file", ("zip", "rar", "octet-stream")),
    ("text", ("excel", "word", "css", "javascript", "plain", "rtf", "text")),
)


def classify_mime(
    mime: Optional[str],
    extension: Optional[str],
    entry_type: str = "file",
) -> Union[MimeClass, Literal[False]]:
    """
    Map a raw MIME string and extension to a coarse display class.

    Matching is case-sensitive substring search on the MIME string as reported
    by the storage backend. Returns False when nothing matches.
    """
    if entry_type == "dir":
        return "dir"

    mime = mime or ""
    if "directory" in mime:
        return "dir"
    if "image" in mime or extension == "svg":
        return "image"

    for mime_class, needles in MIME_RULES:
        if any(needle in mime for needle in needles):
            return mime_class

    return False
