"""
Visibility rules: dotfiles, exclusion lists and `.hide` marker directories.
"""
from __future__ import annotations

from typing import Callable, Iterable

from flm_shared import HIDE_MARKER

from ...adapters.storage import StorageBackend
from .models import RawEntry
from .normalizer import list_contents

AcceptPredicate = Callable[[RawEntry], bool]


def is_dot(entry: RawEntry) -> bool:
    return entry.basename.startswith(".")


def default_accept(entry: RawEntry) -> bool:
    """Default custom predicate. Subclasses or callers may swap in their own."""
    return not entry.basename.startswith(".")


def accept(
    entry: RawEntry,
    excluded_extensions: Iterable[str] = (),
    excluded_folders: Iterable[str] = (),
    excluded_files: Iterable[str] = (),
    predicate: AcceptPredicate = default_accept,
) -> bool:
    """
    Whether an entry may appear in a listing at all.

    Does not include the `.hide` check, which costs an extra listing call and
    is applied by the enricher for directories only.
    """
    if is_dot(entry):
        return False
    if entry.extension and entry.extension in excluded_extensions:
        return False
    if entry.is_dir and entry.basename in excluded_folders:
        return False
    if entry.is_file and entry.basename in excluded_files:
        return False
    return bool(predicate(entry))


def folder_is_visible(storage: StorageBackend, path: str) -> bool:
    """False when `path` directly contains a file named exactly `.hide`."""
    return not any(child.basename == HIDE_MARKER for child in list_contents(storage, path, probe_mime=False))
