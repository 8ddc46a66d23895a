"""
Tests for lineage flattening and resolution.
"""

import pytest

from pokerank.roster.images import ImageResolver
from pokerank.roster.lineage import LineageResolver, flatten_chain
from conftest import BASE_URL, PLACEHOLDER, FakeDatasetClient

node = FakeDatasetClient.node


@pytest.fixture
def resolver(fake_client):
    return LineageResolver(fake_client, ImageResolver(fake_client))


class TestFlattenChain:
    def test_single_stage(self):
        assert flatten_chain(node("tauros")) == ["tauros"]

    def test_linear_chain(self):
        tree = node("charmander", node("charmeleon", node("charizard")))
        assert flatten_chain(tree) == ["charmander", "charmeleon", "charizard"]

    def test_sibling_branches_keep_source_order(self):
        assert flatten_chain(node("a", node("b"), node("c"))) == ["a", "b", "c"]

    def test_branches_are_depth_first(self):
        tree = node(
            "oddish",
            node("gloom", node("vileplume"), node("bellossom")),
            node("stray", node("stray-child")),
        )
        assert flatten_chain(tree) == [
            "oddish",
            "gloom",
            "vileplume",
            "bellossom",
            "stray",
            "stray-child",
        ]

    def test_eevee_fan_out(self):
        children = ["vaporeon", "jolteon", "flareon", "espeon", "umbreon"]
        tree = node("eevee", *(node(c) for c in children))
        assert flatten_chain(tree) == ["eevee", *children]

    def test_malformed_node_ends_its_branch(self):
        broken = {"evolves_to": [node("hidden")]}
        tree = node("a", broken, node("c"))
        assert flatten_chain(tree) == ["a", "c"]

    def test_non_list_successors_are_terminal(self):
        tree = node("a")
        tree["evolves_to"] = None
        assert flatten_chain(tree) == ["a"]

    def test_malformed_root(self):
        assert flatten_chain({"species": None}) == []
        assert flatten_chain(None) == []


@pytest.mark.asyncio
async def test_resolve_branching_family(fake_client, resolver):
    tree = node("a", node("b"), node("c"))
    fake_client.add_family(1, tree)

    lineage = await resolver.resolve(f"{BASE_URL}/pokemon-species/b/")

    assert [n.name for n in lineage] == ["a", "b", "c"]
    assert [n.image_url for n in lineage] == [
        "https://img.test/a/official.png",
        "https://img.test/b/official.png",
        "https://img.test/c/official.png",
    ]


@pytest.mark.asyncio
async def test_species_without_chain(fake_client, resolver):
    url = fake_client.add_species("tauros", chain_id=None)
    assert await resolver.resolve(url) == ()


@pytest.mark.asyncio
async def test_species_fetch_failure(fake_client, resolver):
    url = f"{BASE_URL}/pokemon-species/ghost/"
    fake_client.fail(url)
    assert await resolver.resolve(url) == ()


@pytest.mark.asyncio
async def test_chain_fetch_failure(fake_client, resolver):
    url = fake_client.add_species("lonely", chain_id=99)
    assert await resolver.resolve(url) == ()


@pytest.mark.asyncio
async def test_missing_stage_image_uses_placeholder(fake_client, resolver):
    fake_client.add_chain(5, node("a", node("b")))
    url = fake_client.add_species("a", chain_id=5)
    fake_client.add_pokemon("a")

    lineage = await resolver.resolve(url)

    assert [n.name for n in lineage] == ["a", "b"]
    assert lineage[1].image_url == PLACEHOLDER


@pytest.mark.asyncio
async def test_chain_shared_by_family_is_fetched_once(fake_client, resolver):
    tree = node("a", node("b", node("c")))
    fake_client.add_family(7, tree)

    first = await resolver.resolve(f"{BASE_URL}/pokemon-species/a/")
    second = await resolver.resolve(f"{BASE_URL}/pokemon-species/c/")

    assert first == second
    assert fake_client.count(f"{BASE_URL}/evolution-chain/7/") == 1
