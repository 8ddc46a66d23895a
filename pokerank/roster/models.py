from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LineageNode(BaseModel):
    """One stage of an evolutionary family."""

    name: str = Field(..., min_length=1, description="Species name of the stage")
    image_url: str = Field(..., min_length=1, description="Best available artwork")

    model_config = ConfigDict(frozen=True)


class CreatureRecord(BaseModel):
    """A roster entry: the creature, its artwork and its full lineage."""

    name: str = Field(..., min_length=1, description="Unique within a roster")
    image_url: str = Field(..., min_length=1, description="Best available artwork")
    species_url: str | None = Field(
        default=None, description="Species reference the lineage was resolved from"
    )
    lineage: tuple[LineageNode, ...] = Field(
        default=(), description="Pre-order flattened evolutionary family"
    )

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def lineage_names(self) -> list[str]:
        return [node.name for node in self.lineage]


class RosterBuildStats(BaseModel):
    """Counters collected while building one category roster."""

    category: str
    listed: int = Field(default=0, description="Member references in the listing")
    excluded: int = Field(default=0, description="Dropped by the exclusion filter")
    failed: int = Field(default=0, description="Dropped after a fetch / shape failure")
    duplicates: int = Field(default=0, description="Records collapsed by name")
    accepted: int = Field(default=0, description="Records in the final roster")

    def summary(self) -> str:
        return (
            f"category={self.category}, listed={self.listed}, excluded={self.excluded}, "
            f"failed={self.failed}, duplicates={self.duplicates}, accepted={self.accepted}"
        )
