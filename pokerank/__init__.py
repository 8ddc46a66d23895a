"""PokeRank – favourite-creature knockout tournaments over PokeAPI data."""

__version__ = "0.1.0"
