class PokeRankError(Exception):
    """Base for all PokeRank exceptions."""

    pass


# High-level families
class ValidationError(PokeRankError):
    """Invalid caller input."""

    pass


class DatasetError(PokeRankError):
    """Reference dataset access failures."""

    pass


class TournamentError(PokeRankError):
    """Tournament engine failures."""

    pass


# Dataset subtypes
class TransientFetchError(DatasetError):
    """A single resource could not be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class MalformedDataError(DatasetError):
    """A dataset record does not have the expected shape."""

    pass


# Tournament subtypes
class InvalidChoiceError(TournamentError):
    """A choice does not match the current pool."""

    pass


def ensure_category(category: str | None) -> str:
    """Return the stripped category id, rejecting empty values."""
    if category is None or not isinstance(category, str) or not category.strip():
        raise ValidationError("category must be a non-empty string")
    return category.strip()
