"""
Local disk storage adapter built on pathlib.
"""
from __future__ import annotations

import mimetypes
import stat
from pathlib import Path
from typing import Iterator, Optional

from flm_shared import get_logger, sanitize_error_message

from ...path_utils import clean_slashes, is_within_root, safe_rel_path
from .base import (
    DirectoryAttributes,
    FileAttributes,
    ProbeError,
    StorageAttributes,
    StorageCapabilities,
    StorageUnavailableError,
)

logger = get_logger(__name__)

# `mimetypes` misses some modern formats depending on platform registry state.
_KNOWN_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".avif": "image/avif",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mkv": "video/x-matroska",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".rar": "application/vnd.rar",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".css": "text/css",
    ".js": "text/javascript",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


class LocalStorage:
    """
    Serve a directory tree as a storage backend.

    Entry paths are POSIX-style and relative to `root`. Public URLs are built
    by joining `base_url` with the entry path.
    """

    def __init__(self, root: str | Path, base_url: str = "/storage", *, public: bool = True):
        self.root = Path(root).expanduser().resolve()
        self.base_url = str(base_url or "").rstrip("/")
        self.capabilities = StorageCapabilities(public_thumbnails=public, local_paths=True)

    def _resolve(self, relative_path: str) -> Optional[Path]:
        rel = safe_rel_path(relative_path)
        if rel is None:
            return None
        return self.root / rel

    def _relative(self, target: Path) -> str:
        return target.relative_to(self.root).as_posix()

    def list_contents(self, path: str) -> Iterator[StorageAttributes]:
        target = self._resolve(path)
        if target is None or not target.is_dir() or not is_within_root(target, self.root):
            raise StorageUnavailableError(f"Directory not found: {path}")
        try:
            children = sorted(target.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise StorageUnavailableError(sanitize_error_message(exc, "Failed to list directory")) from exc

        for child in children:
            if not is_within_root(child, self.root):
                logger.debug("Skipping entry outside storage root: %s", child.name)
                continue
            try:
                st = child.stat()
            except OSError as exc:
                # Broken symlink or entry removed while listing.
                logger.debug("Skipping unreadable entry %s: %s", child.name, exc)
                continue
            visibility = "public" if st.st_mode & stat.S_IROTH else "private"
            rel = self._relative(child)
            if stat.S_ISDIR(st.st_mode):
                yield DirectoryAttributes(path=rel, visibility=visibility, last_modified=int(st.st_mtime))
            else:
                yield FileAttributes(
                    path=rel,
                    file_size=int(st.st_size),
                    visibility=visibility,
                    last_modified=int(st.st_mtime),
                )

    def mime_type(self, path: str) -> str:
        target = self._resolve(path)
        if target is None or not target.is_file():
            raise ProbeError(f"Unable to retrieve the mime type of {path}")
        ext = target.suffix.lower()
        if ext in _KNOWN_MIME_TYPES:
            return _KNOWN_MIME_TYPES[ext]
        guessed, _ = mimetypes.guess_type(target.name)
        return guessed or DEFAULT_MIME_TYPE

    def path(self, relative_path: str) -> str:
        rel = safe_rel_path(relative_path)
        if rel is None or str(rel) in ("", "."):
            return str(self.root) + "/"
        return str(self.root / rel)

    def url(self, path: str) -> str:
        return clean_slashes(f"{self.base_url}/{str(path or '').lstrip('/')}") or ""
