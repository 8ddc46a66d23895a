from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from pokerank.dataset.client import DatasetClient
from pokerank.exceptions import DatasetError
from pokerank.utils.memo import InflightCache

# Key paths into a ``sprites`` record, best first.
IMAGE_SOURCE_PRIORITY: tuple[tuple[str, ...], ...] = (
    ("other", "official-artwork", "front_default"),
    ("other", "home", "front_default"),
    ("front_default",),
    ("other", "showdown", "front_default"),
    ("back_default",),
)


def _lookup(sprites: Any, path: tuple[str, ...]) -> str | None:
    node = sprites
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node
    return None


class ImageResolver:
    """Picks the best available artwork for a creature, falling back to a placeholder."""

    def __init__(
        self,
        client: DatasetClient,
        priority: tuple[tuple[str, ...], ...] = IMAGE_SOURCE_PRIORITY,
        placeholder: str | None = None,
    ):
        self.client = client
        self.priority = priority
        self.placeholder = placeholder or client.config.placeholder_image
        self._cache: InflightCache[str, str] = InflightCache("images")

    def select(self, sprites: Any) -> str | None:
        """Return the first available source in priority order, or None."""
        for path in self.priority:
            url = _lookup(sprites, path)
            if url is not None:
                return url
        return None

    def select_or_placeholder(self, sprites: Any) -> str:
        return self.select(sprites) or self.placeholder

    async def resolve(self, name: str) -> str:
        """Fetch ``pokemon/{name}`` and resolve its artwork. Never raises."""
        return await self._cache.get(name, lambda: self._resolve(name))

    async def _resolve(self, name: str) -> str:
        try:
            data = await self.client.fetch_json(self.client.url_for("pokemon", name))
        except DatasetError as e:
            logger.warning(f"[ImageResolver] Lookup failed for {name}: {e}")
            return self.placeholder

        sprites = data.get("sprites") if isinstance(data, Mapping) else None
        url = self.select(sprites)
        if url is None:
            logger.warning(f"[ImageResolver] No artwork found for {name}, using placeholder")
            return self.placeholder

        logger.debug(f"[ImageResolver] {name} -> {url}")
        return url
