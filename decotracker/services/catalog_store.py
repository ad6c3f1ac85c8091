"""
Catalog store service.

Loads the decoration and obstacle catalogs once and serves them read-only.

Each catalog source is either a filesystem path or an http(s) URL pointing
at a JSON array of records:

    [{"Code": "18000001", "Name": "Flag", "image": "images/flag.png"}, ...]

Loading is best-effort: a catalog that fails to load becomes empty and is
reported, while the other catalog is still served. Only when both fail is
the store unusable.
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from decotracker.config import settings
from decotracker.models.catalog import Catalog, CatalogEntry, ItemKind
from decotracker.models.failure import CatalogLoadError, NotReadyError

logger = logging.getLogger(__name__)


def _parse_code(raw: Any) -> int | None:
    """Coerce a catalog code (int or decimal-digit string) to int."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        # isdigit() accepts superscripts that int() rejects
        if not text.isdecimal():
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def derive_image_ref(code: int, kind: ItemKind) -> str:
    """
    Build the conventional image path for an item without an explicit image.

    The first two digits of a code are a kind prefix and are not part of
    the file name: decoration 18000042 -> images/decorations/decoration_000042.png
    """
    return f"images/{kind.value}s/{kind.value}_{str(code)[2:]}.png"


def load_catalog_records(raw: Any, kind: ItemKind) -> list[CatalogEntry]:
    """
    Parse raw catalog records into entries, preserving order.

    Records without a usable code or name are skipped. Duplicate codes
    keep the first record.

    Raises:
        CatalogLoadError: If raw is not a list of records
    """
    if not isinstance(raw, list):
        raise CatalogLoadError(
            detail=f"{kind.value} catalog must be a JSON array, got {type(raw).__name__}"
        )

    entries: list[CatalogEntry] = []
    seen: set[int] = set()
    skipped = 0

    for record in raw:
        if not isinstance(record, dict):
            skipped += 1
            continue

        code = _parse_code(record.get("Code"))
        name = record.get("name") or record.get("Name")
        if code is None or not isinstance(name, str) or not name.strip():
            skipped += 1
            continue

        if code in seen:
            skipped += 1
            continue
        seen.add(code)

        image = record.get("image") or record.get("Image")
        image_ref = image if isinstance(image, str) and image else derive_image_ref(code, kind)

        entries.append(CatalogEntry(code=code, name=name.strip(), image_ref=image_ref, kind=kind))

    if skipped:
        logger.warning("Skipped %d malformed %s catalog records", skipped, kind.value)

    return entries


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _read_source(source: str, client: httpx.AsyncClient) -> Any:
    """Read and decode one catalog source."""
    if _is_url(source):
        response = await client.get(source)
        response.raise_for_status()
        return response.json()

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found at {path}")

    text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return json.loads(text)


class CatalogStore:
    """
    Holder for the two catalogs with a load-once, read-many lifecycle.

    Until `load` completes the store is not ready and callers get
    `NotReadyError`. After a load where both catalogs failed, callers get
    `CatalogLoadError`.
    """

    def __init__(self) -> None:
        self._catalog = Catalog()
        self._loaded = False
        self._sources: dict[ItemKind, str] = {}
        self.failures: dict[ItemKind, str] = {}

    @classmethod
    def from_entries(
        cls,
        decorations: Iterable[CatalogEntry] = (),
        obstacles: Iterable[CatalogEntry] = (),
    ) -> "CatalogStore":
        """Build an already-loaded store from in-memory entries."""
        store = cls()
        store._catalog = Catalog(decorations=tuple(decorations), obstacles=tuple(obstacles))
        store._loaded = True
        return store

    @property
    def is_loaded(self) -> bool:
        """True once a load attempt has finished, successful or not."""
        return self._loaded

    @property
    def is_ready(self) -> bool:
        """True when at least one catalog is available."""
        return self._loaded and len(self.failures) < len(ItemKind)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def require_catalog(self) -> Catalog:
        """
        Return the catalog for an analysis request.

        Raises:
            NotReadyError: If loading has not finished yet
            CatalogLoadError: If every catalog failed to load
        """
        if not self._loaded:
            raise NotReadyError()
        if not self.is_ready:
            raise CatalogLoadError(detail="; ".join(self.failures.values()))
        return self._catalog

    async def _load_one(
        self, kind: ItemKind, source: str, client: httpx.AsyncClient
    ) -> list[CatalogEntry]:
        try:
            raw = await _read_source(source, client)
            return load_catalog_records(raw, kind)
        except (OSError, ValueError, httpx.HTTPError) as e:
            raise CatalogLoadError(detail=f"{kind.value} catalog from {source}: {e}") from e

    async def _load_all(self, client: httpx.AsyncClient) -> list[Any]:
        return await asyncio.gather(
            *(self._load_one(kind, source, client) for kind, source in self._sources.items()),
            return_exceptions=True,
        )

    async def load(
        self,
        decoration_source: str | None = None,
        obstacle_source: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> Catalog:
        """
        Load both catalogs concurrently.

        Args:
            decoration_source: Path or URL. Defaults to settings.
            obstacle_source: Path or URL. Defaults to settings.
            timeout: HTTP timeout in seconds. Defaults to settings.
            client: HTTP client to use for URL sources. A client is
                created (and closed) per call when omitted.

        Returns:
            The loaded catalog (possibly missing one kind).

        Raises:
            CatalogLoadError: If both catalogs failed to load
        """
        self._sources = {
            ItemKind.DECORATION: decoration_source or settings.decoration_catalog_source,
            ItemKind.OBSTACLE: obstacle_source or settings.obstacle_catalog_source,
        }
        if timeout is None:
            timeout = settings.catalog_fetch_timeout

        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                results = await self._load_all(owned_client)
        else:
            results = await self._load_all(client)

        loaded: dict[ItemKind, tuple[CatalogEntry, ...]] = {}
        failures: dict[ItemKind, str] = {}

        for kind, result in zip(self._sources, results, strict=True):
            if isinstance(result, CatalogLoadError):
                failures[kind] = result.detail or result.message
                logger.error("Failed to load %s catalog: %s", kind.value, failures[kind])
            elif isinstance(result, Exception):
                failures[kind] = f"{kind.value} catalog: {type(result).__name__}: {result}"
                logger.error(
                    "Unexpected error loading %s catalog",
                    kind.value,
                    exc_info=result,
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                loaded[kind] = tuple(result)
                logger.info("Loaded %d %ss from catalog", len(result), kind.value)

        self._catalog = Catalog(
            decorations=loaded.get(ItemKind.DECORATION, ()),
            obstacles=loaded.get(ItemKind.OBSTACLE, ()),
        )
        self.failures = failures
        self._loaded = True

        if not self.is_ready:
            raise CatalogLoadError(detail="; ".join(failures.values()))

        return self._catalog

    def status(self) -> dict[str, Any]:
        """Per-catalog load status for readiness reporting."""
        counts = {
            ItemKind.DECORATION: len(self._catalog.decorations),
            ItemKind.OBSTACLE: len(self._catalog.obstacles),
        }
        catalogs: dict[str, dict[str, Any]] = {}
        for kind in ItemKind:
            if not self._loaded:
                state = "loading"
            elif kind in self.failures:
                state = "failed"
            else:
                state = "loaded"
            catalogs[kind.value] = {
                "status": state,
                "count": counts[kind],
                "source": self._sources.get(kind),
                "error": self.failures.get(kind),
            }
        return {"ready": self.is_ready, "catalogs": catalogs}
