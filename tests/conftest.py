"""
Shared fixtures: an in-memory PokeAPI stand-in and engine wiring.
"""

import asyncio
import copy
from typing import Any

import pytest

from pokerank.dataset.client import DatasetClient
from pokerank.dataset.config import DatasetConfig
from pokerank.exceptions import TransientFetchError
from pokerank.roster.builder import RosterBuilder
from pokerank.roster.models import CreatureRecord
from pokerank.tournament.pairing import PairSelector

BASE_URL = "https://pokeapi.test/api/v2"
PLACEHOLDER = "static/placeholder-image.png"


def artwork(name: str) -> dict[str, Any]:
    """Full sprite set with official artwork available."""
    return {
        "front_default": f"https://img.test/{name}/front.png",
        "back_default": f"https://img.test/{name}/back.png",
        "other": {
            "official-artwork": {"front_default": f"https://img.test/{name}/official.png"},
            "home": {"front_default": f"https://img.test/{name}/home.png"},
            "showdown": {"front_default": f"https://img.test/{name}/showdown.gif"},
        },
    }


class FakeDatasetClient(DatasetClient):
    """Serves canned JSON by URL and records every request."""

    def __init__(self, config: DatasetConfig | None = None):
        super().__init__(
            config
            or DatasetConfig(base_url=BASE_URL, max_concurrency=4, placeholder_image=PLACEHOLDER)
        )
        self.responses: dict[str, Any] = {}
        self.calls: list[str] = []

    async def fetch_json(self, url: str) -> Any:
        self.calls.append(url)
        # always suspend so concurrent callers really interleave
        await asyncio.sleep(0)
        if url not in self.responses:
            raise TransientFetchError(url, "404 Not Found")
        value = self.responses[url]
        if isinstance(value, Exception):
            raise value
        return copy.deepcopy(value)

    def count(self, url: str) -> int:
        return self.calls.count(url)

    # --- dataset builders ---------------------------------------------

    @staticmethod
    def node(name: str, *successors: dict) -> dict:
        return {
            "species": {"name": name, "url": f"{BASE_URL}/pokemon-species/{name}/"},
            "evolves_to": list(successors),
        }

    def fail(self, url: str) -> None:
        self.responses[url] = TransientFetchError(url, "503 Service Unavailable")

    def add_type(self, category: str, names: list[str]) -> str:
        url = self.url_for("type", category)
        self.responses[url] = {
            "name": category,
            "pokemon": [
                {"pokemon": {"name": n, "url": self.url_for("pokemon", n)}, "slot": 1}
                for n in names
            ],
        }
        return url

    def add_pokemon(
        self,
        name: str,
        sprites: dict | None = None,
        species: str | None = None,
    ) -> str:
        species = species or name
        url = self.url_for("pokemon", name)
        self.responses[url] = {
            "name": name,
            "species": {"name": species, "url": f"{BASE_URL}/pokemon-species/{species}/"},
            "sprites": artwork(name) if sprites is None else sprites,
        }
        return url

    def add_species(self, species: str, chain_id: int | None) -> str:
        url = f"{BASE_URL}/pokemon-species/{species}/"
        self.responses[url] = {
            "name": species,
            "evolution_chain": (
                {"url": f"{BASE_URL}/evolution-chain/{chain_id}/"} if chain_id is not None else None
            ),
        }
        return url

    def add_chain(self, chain_id: int, tree: dict) -> str:
        url = f"{BASE_URL}/evolution-chain/{chain_id}/"
        self.responses[url] = {"id": chain_id, "chain": tree}
        return url

    def add_family(self, chain_id: int, tree: dict) -> list[str]:
        """Register a chain plus species and pokemon records for every stage."""
        self.add_chain(chain_id, tree)
        names = []
        stack = [tree]
        while stack:
            current = stack.pop()
            name = current["species"]["name"]
            names.append(name)
            self.add_species(name, chain_id)
            self.add_pokemon(name)
            stack.extend(reversed(current["evolves_to"]))
        return names


class ScriptedPairSelector(PairSelector):
    """Returns the pool members named in ``script``, in order."""

    def __init__(self, script: list[tuple[str, str]]):
        self.script = list(script)

    def select(self, pool):
        first, second = self.script.pop(0)
        by_name = {c.name: c for c in pool}
        return by_name[first], by_name[second]


@pytest.fixture
def fake_client() -> FakeDatasetClient:
    return FakeDatasetClient()


@pytest.fixture
def builder(fake_client) -> RosterBuilder:
    return RosterBuilder(fake_client)


@pytest.fixture
def make_record():
    def _make(name: str) -> CreatureRecord:
        return CreatureRecord(name=name, image_url=f"https://img.test/{name}/official.png")

    return _make


@pytest.fixture
def scripted():
    return ScriptedPairSelector
