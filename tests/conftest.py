import sys
from collections import Counter
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from flm_backend.adapters.storage import (  # noqa: E402
    DirectoryAttributes,
    FileAttributes,
    ProbeError,
    StorageCapabilities,
    StorageUnavailableError,
)


class MemoryStorage:
    """
    Object-store style backend kept in a dict: folder -> child attributes.

    Counts list and MIME calls so tests can assert on backend traffic.
    """

    def __init__(
        self,
        tree,
        mimes=None,
        *,
        base_url="https://cdn.example.com/bucket",
        public_thumbnails=False,
        local_paths=False,
    ):
        self.tree = {self._key(k): list(v) for k, v in tree.items()}
        self.mimes = dict(mimes or {})
        self.base_url = base_url
        self.capabilities = StorageCapabilities(public_thumbnails=public_thumbnails, local_paths=local_paths)
        self.list_calls = Counter()
        self.mime_calls = Counter()

    @staticmethod
    def _key(path):
        return str(path or "").strip("/")

    def list_contents(self, path):
        key = self._key(path)
        self.list_calls[key] += 1
        if key not in self.tree:
            raise StorageUnavailableError(f"No such folder: {path}")
        return list(self.tree[key])

    def mime_type(self, path):
        self.mime_calls[path] += 1
        mime = self.mimes.get(path)
        if mime is None or isinstance(mime, Exception):
            raise ProbeError(f"cannot read mime of {path}")
        return mime

    def path(self, relative_path):
        return "/" + self._key(relative_path)

    def url(self, path):
        return f"{self.base_url}/{str(path or '').lstrip('/')}"


def file_attrs(path, size=10, last_modified=1_700_000_000, visibility="public"):
    return FileAttributes(path=path, file_size=size, visibility=visibility, last_modified=last_modified)


def dir_attrs(path, last_modified=1_700_000_000, visibility="public"):
    return DirectoryAttributes(path=path, visibility=visibility, last_modified=last_modified)


@pytest.fixture
def memory_storage():
    tree = {
        "": [
            dir_attrs("docs"),
            dir_attrs("secret"),
            dir_attrs(".git"),
            file_attrs("a.jpg", size=2048),
            file_attrs("b.txt", size=5),
            file_attrs(".env", size=1),
        ],
        "docs": [file_attrs("docs/readme.txt")],
        "secret": [file_attrs("secret/.hide", size=0), file_attrs("secret/key.txt")],
        ".git": [],
    }
    mimes = {
        "a.jpg": "image/jpeg",
        "b.txt": "text/plain",
        ".env": "text/plain",
        "docs/readme.txt": "text/plain",
    }
    return MemoryStorage(tree, mimes)


@pytest.fixture
def make_png():
    from PIL import Image

    def _make(path: Path, size=(4, 3)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color=(200, 10, 10)).save(path, format="PNG")
        return path

    return _make
