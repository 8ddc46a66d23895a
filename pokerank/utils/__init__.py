"""Utility helpers shared across the *pokerank* codebase."""
