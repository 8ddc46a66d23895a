from __future__ import annotations

import asyncio
from typing import Any, Mapping

from loguru import logger

from pokerank.dataset.client import DatasetClient
from pokerank.exceptions import DatasetError, MalformedDataError, ensure_category
from pokerank.roster.exclusion import DEFAULT_EXCLUSION_FILTER, ExclusionFilter
from pokerank.roster.images import ImageResolver
from pokerank.roster.lineage import LineageResolver
from pokerank.roster.models import CreatureRecord, RosterBuildStats
from pokerank.utils.memo import InflightCache

__all__ = ["RosterBuilder"]


class _Build:
    """Outcome of one build attempt; ``listed`` is False when the listing itself failed."""

    __slots__ = ("roster", "listed")

    def __init__(self, roster: list[CreatureRecord], listed: bool):
        self.roster = roster
        self.listed = listed


class RosterBuilder:
    """
    Builds and caches the validated, de-duplicated roster of each category.

    - One build per category for the lifetime of the builder; concurrent
      callers share the in-flight build.
    - Per-member failures drop that member only; a failed listing yields an
      empty roster which is not cached.
    """

    def __init__(
        self,
        client: DatasetClient,
        exclusion: ExclusionFilter = DEFAULT_EXCLUSION_FILTER,
        images: ImageResolver | None = None,
        lineage: LineageResolver | None = None,
    ):
        self.client = client
        self.exclusion = exclusion
        self.images = images or ImageResolver(client)
        self.lineage = lineage or LineageResolver(client, self.images)
        self._builds: InflightCache[str, _Build] = InflightCache(
            "rosters", should_cache=lambda b: b.listed
        )
        self.stats: dict[str, RosterBuildStats] = {}

    def is_cached(self, category: str) -> bool:
        return category in self._builds

    def cached(self, category: str) -> list[CreatureRecord] | None:
        build = self._builds.peek(category)
        return list(build.roster) if build is not None else None

    async def build(self, category: str) -> list[CreatureRecord]:
        """Return the roster for ``category``, building it on first request."""
        category = ensure_category(category)
        build = await self._builds.get(category, lambda: self._build(category))
        return list(build.roster)

    # ------------------------------------------------------------------

    async def _build(self, category: str) -> _Build:
        stats = RosterBuildStats(category=category)
        self.stats[category] = stats
        logger.info(f"[RosterBuilder] Building roster for '{category}'")

        try:
            members = await self._list_members(category)
        except DatasetError as e:
            logger.error(f"[RosterBuilder] Listing failed for '{category}': {e}")
            return _Build([], listed=False)

        stats.listed = len(members)
        candidates = []
        for name, url in members:
            marker = self.exclusion.matched_marker(name)
            if marker:
                stats.excluded += 1
                logger.debug(f"[RosterBuilder] Excluding variant {name} (marker '{marker}')")
                continue
            candidates.append((name, url))

        sema = asyncio.Semaphore(self.client.config.max_concurrency)

        async def _guarded(name: str, url: str) -> CreatureRecord | None:
            async with sema:
                return await self._load_member(name, url, stats)

        records = await asyncio.gather(*(_guarded(n, u) for n, u in candidates))

        by_name: dict[str, CreatureRecord] = {}
        for record in records:
            if record is None:
                continue
            if record.name in by_name:
                stats.duplicates += 1
            by_name[record.name] = record

        roster = list(by_name.values())
        stats.accepted = len(roster)
        logger.info(f"[RosterBuilder] Roster ready | {stats.summary()}")
        if not roster:
            logger.warning(f"[RosterBuilder] No valid entries for '{category}'")
        return _Build(roster, listed=True)

    async def _list_members(self, category: str) -> list[tuple[str, str]]:
        data = await self.client.fetch_json(self.client.url_for("type", category))
        entries = data.get("pokemon") if isinstance(data, Mapping) else None
        if not isinstance(entries, list):
            raise MalformedDataError(f"type record for '{category}' has no member list")

        members = []
        for entry in entries:
            ref = entry.get("pokemon") if isinstance(entry, Mapping) else None
            if (
                not isinstance(ref, Mapping)
                or not isinstance(ref.get("name"), str)
                or not isinstance(ref.get("url"), str)
                or not ref["name"].strip()
                or not ref["url"]
            ):
                logger.warning(f"[RosterBuilder] Skipping malformed member entry in '{category}'")
                continue
            members.append((ref["name"], ref["url"]))
        return members

    async def _load_member(
        self, ref_name: str, url: str, stats: RosterBuildStats
    ) -> CreatureRecord | None:
        try:
            detail = await self.client.fetch_json(url)
            record = await self._to_record(detail)
        except DatasetError as e:
            stats.failed += 1
            logger.warning(f"[RosterBuilder] Dropping {ref_name}: {e}")
            return None

        if record is None:
            stats.excluded += 1
        return record

    async def _to_record(self, detail: Any) -> CreatureRecord | None:
        if not isinstance(detail, Mapping):
            raise MalformedDataError("detail record is not an object")
        name = detail.get("name")
        if not isinstance(name, str) or not name.strip():
            raise MalformedDataError("detail record has no name")

        marker = self.exclusion.matched_marker(name)
        if marker:
            logger.debug(f"[RosterBuilder] Excluding variant {name} (marker '{marker}')")
            return None

        species = detail.get("species")
        species_url = species.get("url") if isinstance(species, Mapping) else None
        if species_url is not None and not isinstance(species_url, str):
            raise MalformedDataError(f"{name} has a non-string species url")
        lineage = await self.lineage.resolve(species_url) if species_url else ()

        return CreatureRecord(
            name=name,
            image_url=self.images.select_or_placeholder(detail.get("sprites")),
            species_url=species_url,
            lineage=lineage,
        )
