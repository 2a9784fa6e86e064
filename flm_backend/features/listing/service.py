"""
Folder listing orchestration: normalize, identify, enrich (cached), filter, order.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import httpx

from flm_shared import get_logger, log_structured, timer

from ...adapters.cache import CacheStore, TTLCache
from ...adapters.storage import StorageBackend, StorageUnavailableError
from ...config import ListingConfig
from .acceptance import AcceptPredicate, default_accept
from .cache_gate import get_or_compute
from .enricher import EnrichContext, build_entry_record
from .identity import generate_id
from .models import EntryRecord, RawEntry
from .navigation import GO_UP_LABEL, generate_parent, get_paths, relative_path
from .normalizer import list_contents
from .ordering import filter_data, order_data

logger = get_logger(__name__)


class ListingService:
    """
    Lists one storage backend.

    Holds no per-call state: every `list_folder` call re-reads the backend and
    only shares enriched records through the cache.
    """

    def __init__(
        self,
        storage: StorageBackend,
        config: Optional[ListingConfig] = None,
        cache: Optional[CacheStore] = None,
        *,
        predicate: AcceptPredicate = default_accept,
        http_client: Optional[httpx.Client] = None,
    ):
        self.storage = storage
        self.config = config or ListingConfig()
        if cache is None and self.config.cache_enabled:
            cache = TTLCache()
        self.cache = cache
        self.predicate = predicate
        self.http_client = http_client

    def generate_id(self, entry: RawEntry) -> str:
        return generate_id(entry, self.config.disk)

    def _context(self, folder: str) -> EnrichContext:
        return EnrichContext(
            storage=self.storage,
            config=self.config,
            current_folder=relative_path(folder, self.storage, self.config),
            predicate=self.predicate,
            http_client=self.http_client,
        )

    def get_file_data(self, entry: RawEntry, entry_id: str, ctx: EnrichContext) -> Optional[EntryRecord]:
        return build_entry_record(entry, entry_id, ctx)

    def _record_for(self, entry: RawEntry, ctx: EnrichContext) -> Optional[EntryRecord]:
        entry_id = self.generate_id(entry)
        return get_or_compute(
            self.cache,
            entry_id,
            self.config.cache_ttl,
            lambda: self.get_file_data(entry, entry_id, ctx),
        )

    def list_folder(
        self,
        folder: str,
        order: str = "name",
        filter_key: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> list[EntryRecord]:
        """
        Enriched, filtered and ordered entries of `folder`.

        Raises StorageUnavailableError when the folder itself cannot be listed.
        Per-entry probe failures only degrade that entry's record.
        """
        ctx = self._context(folder)
        with timer(f"listing {folder!r}", logger):
            try:
                # MIME probing happens inside the cache gate so hits skip it.
                entries = list_contents(self.storage, folder, probe_mime=False)
            except StorageUnavailableError as exc:
                log_structured(
                    logger,
                    logging.WARNING,
                    "folder listing failed",
                    folder=folder,
                    code=exc.code.value,
                    error=str(exc),
                )
                raise

            if self.config.workers > 1 and len(entries) > 1:
                with ThreadPoolExecutor(max_workers=min(self.config.workers, len(entries))) as executor:
                    computed = list(executor.map(lambda e: self._record_for(e, ctx), entries))
            else:
                computed = [self._record_for(e, ctx) for e in entries]

            records = [r for r in computed if r is not None]
            if filter_key:
                records = filter_data(records, filter_key, self.config.filters)
            result = order_data(records, order, str(direction or self.config.direction).lower())

        log_structured(
            logger,
            logging.DEBUG,
            "folder listed",
            folder=folder,
            raw=len(entries),
            listed=len(result),
            order=order,
            filter=filter_key,
        )
        return result

    get_files = list_folder

    def generate_parent(self, folder: str, label: str = GO_UP_LABEL) -> Optional[EntryRecord]:
        return generate_parent(folder, self.storage, label=label)

    def get_paths(self, folder: str) -> list[dict[str, str]]:
        return get_paths(folder, self.storage)

    def relative_path(self, folder: str) -> str:
        return relative_path(folder, self.storage, self.config)
