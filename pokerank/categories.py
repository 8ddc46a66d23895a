"""Creature categories offered by the terminal driver (PokeAPI type names)."""

CATEGORIES: tuple[str, ...] = (
    "normal",
    "fire",
    "water",
    "grass",
    "flying",
    "fighting",
    "poison",
    "electric",
    "ground",
    "rock",
    "psychic",
    "ice",
    "bug",
    "ghost",
    "steel",
    "dragon",
    "dark",
    "fairy",
)
