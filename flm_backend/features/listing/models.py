"""
Entry descriptors produced by the listing pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal, Optional, Union

from flm_shared import EntryType, MimeClass

# Keys dropped from `to_dict` when unset
_OPTIONAL_KEYS = ("last_modified", "date", "dimensions")


@dataclass(frozen=True)
class RawEntry:
    """One storage entry, normalized. Built fresh for every listing call."""

    type: EntryType
    basename: str
    path: str
    extension: Optional[str] = None
    size: int = 0
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    mime_type: Optional[str] = None
    mime_probed: bool = True

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def is_file(self) -> bool:
        return self.type == "file"


@dataclass(frozen=True)
class EntryRecord:
    """Presentation record for an accepted entry."""

    id: str
    name: str
    path: str
    type: EntryType
    mime_class: Union[MimeClass, Literal["dirBack"], Literal[False]]
    extension: Union[str, Literal[False]]
    size: int
    size_human: str
    thumbnail: Optional[str]
    asset_url: str
    can_act: bool = True
    is_loading: bool = False
    last_modified: Union[int, Literal[False], None] = None
    date: Union[str, Literal[False], None] = None
    dimensions: Optional[str] = None

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _OPTIONAL_KEYS and value is None:
                continue
            out[f.name] = value
        return out
