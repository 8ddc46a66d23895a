from pokerank.roster.builder import RosterBuilder
from pokerank.roster.exclusion import DEFAULT_EXCLUSION_FILTER, ExclusionFilter
from pokerank.roster.images import IMAGE_SOURCE_PRIORITY, ImageResolver
from pokerank.roster.lineage import LineageResolver, flatten_chain
from pokerank.roster.models import CreatureRecord, LineageNode, RosterBuildStats

__all__ = [
    "RosterBuilder",
    "ExclusionFilter",
    "DEFAULT_EXCLUSION_FILTER",
    "ImageResolver",
    "IMAGE_SOURCE_PRIORITY",
    "LineageResolver",
    "flatten_chain",
    "CreatureRecord",
    "LineageNode",
    "RosterBuildStats",
]
