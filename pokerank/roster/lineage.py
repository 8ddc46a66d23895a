from __future__ import annotations

import asyncio
from typing import Any, Mapping

from loguru import logger

from pokerank.dataset.client import DatasetClient
from pokerank.exceptions import DatasetError, MalformedDataError
from pokerank.roster.images import ImageResolver
from pokerank.roster.models import LineageNode
from pokerank.utils.memo import InflightCache


def _species_name(node: Any) -> str | None:
    if not isinstance(node, Mapping):
        return None
    species = node.get("species")
    if not isinstance(species, Mapping):
        return None
    name = species.get("name")
    return name if isinstance(name, str) and name else None


def flatten_chain(chain: Any) -> list[str]:
    """Flatten an evolution-chain tree into species names, pre-order.

    Every ``evolves_to`` branch is followed, siblings in source order. A node
    without a species name ends its branch: neither it nor anything below it
    is emitted.
    """
    names: list[str] = []
    stack = [chain]
    while stack:
        node = stack.pop()
        name = _species_name(node)
        if name is None:
            logger.warning("[LineageResolver] Chain node without species, branch skipped")
            continue
        names.append(name)
        successors = node.get("evolves_to")
        if not isinstance(successors, list):
            continue
        # reversed so the first sibling is popped first
        stack.extend(reversed(successors))
    return names


class LineageResolver:
    """Resolves a species reference into its flattened evolutionary family."""

    def __init__(self, client: DatasetClient, images: ImageResolver):
        self.client = client
        self.images = images
        self._chains: InflightCache[str, list[str]] = InflightCache("chains")

    async def resolve(self, species_url: str) -> tuple[LineageNode, ...]:
        """Return the lineage for ``species_url``; ``()`` when unavailable. Never raises."""
        try:
            chain_url = await self._chain_url(species_url)
            if chain_url is None:
                return ()
            names = await self._chains.get(chain_url, lambda: self._load_chain(chain_url))
        except DatasetError as e:
            logger.warning(f"[LineageResolver] Lineage unavailable for {species_url}: {e}")
            return ()

        # gather keeps the flattened order regardless of completion order
        image_urls = await asyncio.gather(*(self.images.resolve(n) for n in names))
        return tuple(
            LineageNode(name=name, image_url=url) for name, url in zip(names, image_urls)
        )

    async def _chain_url(self, species_url: str) -> str | None:
        species = await self.client.fetch_json(species_url)
        if not isinstance(species, Mapping):
            raise MalformedDataError(f"species record at {species_url} is not an object")
        ref = species.get("evolution_chain")
        if not isinstance(ref, Mapping) or not ref.get("url"):
            logger.debug(f"[LineageResolver] No evolution chain for {species_url}")
            return None
        return ref["url"]

    async def _load_chain(self, chain_url: str) -> list[str]:
        data = await self.client.fetch_json(chain_url)
        if not isinstance(data, Mapping) or "chain" not in data:
            raise MalformedDataError(f"chain record at {chain_url} has no 'chain'")
        names = flatten_chain(data["chain"])
        logger.debug(f"[LineageResolver] {chain_url}: {' -> '.join(names) or '<empty>'}")
        return names
