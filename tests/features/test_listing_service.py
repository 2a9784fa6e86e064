import logging
from pathlib import Path

import httpx
import pytest

from flm_backend.adapters.cache import TTLCache
from flm_backend.adapters.storage import LocalStorage, StorageUnavailableError
from flm_backend.config import ListingConfig
from flm_backend.features.listing import ListingService
from flm_shared import ErrorCode

from ..conftest import MemoryStorage, dir_attrs, file_attrs


def _local_tree(root: Path, make_png) -> Path:
    (root / "Albums").mkdir(parents=True)
    (root / "archive").mkdir()
    (root / "private").mkdir()
    (root / "private" / ".hide").write_text("", encoding="utf-8")
    (root / ".cache").mkdir()
    (root / ".env").write_text("SECRET=1", encoding="utf-8")
    (root / "notes.txt").write_text("x" * 3000, encoding="utf-8")
    (root / "Readme.md").write_text("# hi", encoding="utf-8")
    make_png(root / "photo.png", size=(16, 9))
    return root


def test_list_folder_local_end_to_end(tmp_path: Path, make_png) -> None:
    root = _local_tree(tmp_path / "disk", make_png)
    service = ListingService(LocalStorage(root), ListingConfig())

    records = service.list_folder("/", "name")
    names = [r.name for r in records]
    assert names == ["Albums", "archive", "notes.txt", "photo.png", "Readme.md"]

    by_name = {r.name: r for r in records}
    photo = by_name["photo.png"]
    assert photo.mime_class == "image"
    assert photo.dimensions == "16x9"
    assert photo.thumbnail == "/storage/photo.png"
    assert by_name["notes.txt"].mime_class == "text"
    assert by_name["notes.txt"].size_human == "3 KB"
    assert by_name["Albums"].type == "dir"
    assert "dimensions" not in by_name["Albums"].to_dict()


def test_dotfiles_and_hidden_folders_never_listed(tmp_path: Path, make_png) -> None:
    root = _local_tree(tmp_path / "disk", make_png)
    service = ListingService(LocalStorage(root), ListingConfig())
    for order in ("name", "size", "date", "mime"):
        for key in (None, "images", "documents"):
            names = {r.name for r in service.list_folder("", order, key)}
            assert ".env" not in names
            assert ".cache" not in names
            assert "private" not in names


@pytest.mark.parametrize("order", ["name", "size", "date", "mime", "ext"])
@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_directories_always_precede_files(memory_storage, order, direction) -> None:
    service = ListingService(memory_storage, ListingConfig(disk="s3"))
    records = service.list_folder("", order, direction=direction)
    types = [r.type for r in records]
    assert types == sorted(types, key=lambda t: 0 if t == "dir" else 1)
    assert {r.name for r in records} == {"docs", "a.jpg", "b.txt"}


def test_filter_key_keeps_directories() -> None:
    storage = MemoryStorage(
        {
            "": [file_attrs("a.jpg"), file_attrs("b.txt"), dir_attrs("subdir")],
            "subdir": [],
        },
        {"a.jpg": "image/jpeg", "b.txt": "text/plain"},
    )
    cfg = ListingConfig(disk="s3", filters={"images": ["jpg", "png"]})
    service = ListingService(storage, cfg)
    assert [r.name for r in service.list_folder("", "name", "images")] == ["subdir", "a.jpg"]
    assert [r.name for r in service.list_folder("", "name", "missing")] == ["subdir"]


def test_global_direction_switch(memory_storage) -> None:
    service = ListingService(memory_storage, ListingConfig(disk="s3", direction="desc"))
    assert [r.name for r in service.list_folder("")] == ["docs", "b.txt", "a.jpg"]
    assert [r.name for r in service.get_files("", "name", direction="ASC")] == ["docs", "a.jpg", "b.txt"]


def test_cache_skips_mime_probe_on_second_listing(memory_storage) -> None:
    service = ListingService(memory_storage, ListingConfig(disk="s3", cache_ttl=300))
    assert isinstance(service.cache, TTLCache)

    first = service.list_folder("", "name")
    probes_after_first = sum(memory_storage.mime_calls.values())
    assert probes_after_first == 2

    second = service.list_folder("", "name")
    assert sum(memory_storage.mime_calls.values()) == probes_after_first
    assert [r.to_dict() for r in second] == [r.to_dict() for r in first]
    assert all(a is b for a, b in zip(first, second))


def test_without_ttl_every_listing_probes_again(memory_storage) -> None:
    cache = TTLCache()
    service = ListingService(memory_storage, ListingConfig(disk="s3"), cache=cache)
    service.list_folder("")
    service.list_folder("")
    assert memory_storage.mime_calls["a.jpg"] == 2
    assert len(cache) == 0


def test_changed_mtime_produces_new_id_and_fresh_record() -> None:
    storage = MemoryStorage({"": [file_attrs("a.txt", last_modified=1)]}, {"a.txt": "text/plain"})
    service = ListingService(storage, ListingConfig(disk="s3", cache_ttl=300))
    [before] = service.list_folder("")
    storage.tree[""] = [file_attrs("a.txt", last_modified=2)]
    [after] = service.list_folder("")
    assert before.id != after.id
    assert storage.mime_calls["a.txt"] == 2


def test_unreadable_mime_degrades_record_instead_of_dropping() -> None:
    storage = MemoryStorage({"": [file_attrs("mystery.bin"), file_attrs("ok.txt")]}, {"ok.txt": "text/plain"})
    service = ListingService(storage, ListingConfig(disk="s3"))
    records = {r.name: r for r in service.list_folder("")}
    assert set(records) == {"mystery.bin", "ok.txt"}
    assert records["mystery.bin"].mime_class is False
    assert records["mystery.bin"].thumbnail is None


def test_storage_failure_propagates(memory_storage) -> None:
    service = ListingService(memory_storage, ListingConfig(disk="s3"))
    seen = []

    class _Capture(logging.Handler):
        def emit(self, record):
            seen.append((record.levelno, record.getMessage()))

    handler = _Capture()
    service_logger = logging.getLogger("flm.features.listing.service")
    service_logger.addHandler(handler)
    try:
        with pytest.raises(StorageUnavailableError) as excinfo:
            service.list_folder("does-not-exist")
    finally:
        service_logger.removeHandler(handler)

    assert excinfo.value.code == ErrorCode.STORAGE_UNAVAILABLE
    warnings = [msg for level, msg in seen if level == logging.WARNING]
    assert warnings and '"code": "STORAGE_UNAVAILABLE"' in warnings[0]


def test_parallel_workers_match_sequential_result(memory_storage) -> None:
    sequential = ListingService(memory_storage, ListingConfig(disk="s3")).list_folder("", "name")
    parallel = ListingService(memory_storage, ListingConfig(disk="s3", workers=4)).list_folder("", "name")
    assert [r.to_dict() for r in parallel] == [r.to_dict() for r in sequential]


def test_excluded_lists_and_custom_predicate() -> None:
    storage = MemoryStorage(
        {
            "": [
                dir_attrs("node_modules"),
                dir_attrs("src"),
                file_attrs("Thumbs.db"),
                file_attrs("backup.bak"),
                file_attrs("draft_plan.txt"),
                file_attrs("plan.txt"),
            ],
            "node_modules": [],
            "src": [],
        },
        {name: "text/plain" for name in ("Thumbs.db", "backup.bak", "draft_plan.txt", "plan.txt")},
    )
    cfg = ListingConfig(
        disk="s3",
        excluded_extensions={"bak"},
        excluded_folders={"node_modules"},
        excluded_files={"Thumbs.db"},
    )
    service = ListingService(storage, cfg, predicate=lambda e: not e.basename.startswith(("draft_", ".")))
    assert [r.name for r in service.list_folder("")] == ["src", "plan.txt"]


def test_cloud_dimensions_over_http_when_enabled(make_png, tmp_path: Path) -> None:
    png = make_png(tmp_path / "remote.png", size=(30, 20)).read_bytes()
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=png))
    storage = MemoryStorage({"gallery": [file_attrs("gallery/remote.png")]}, {"gallery/remote.png": "image/png"})
    cfg = ListingConfig(disk="s3", probe_cloud_dimensions=True)

    with httpx.Client(transport=transport) as client:
        [record] = ListingService(storage, cfg, http_client=client).list_folder("gallery")
    assert record.dimensions == "30x20"
    assert record.thumbnail == "/gallery/remote.png"
    assert record.asset_url == "https://cdn.example.com/bucket/remote.png"


def test_malformed_cloud_url_degrades_only_that_entry() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    storage = MemoryStorage(
        {"": [file_attrs("bad\x01.png"), file_attrs("ok.txt")]},
        {"bad\x01.png": "image/png", "ok.txt": "text/plain"},
    )
    cfg = ListingConfig(disk="s3", probe_cloud_dimensions=True)

    with httpx.Client(transport=transport) as client:
        records = {r.name: r for r in ListingService(storage, cfg, http_client=client).list_folder("")}
    assert set(records) == {"bad\x01.png", "ok.txt"}
    assert records["bad\x01.png"].mime_class == "image"
    assert records["bad\x01.png"].dimensions is None


def test_navigation_helpers_on_service(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    service = ListingService(LocalStorage(tmp_path), ListingConfig())
    assert service.generate_parent("/a/b").path == "/a"
    assert service.generate_parent("/") is None
    assert service.get_paths("a/b") == [{"name": "b", "path": "a/b"}, {"name": "a", "path": "a"}]
    assert service.relative_path("a/b") == "/storage/a/b"
