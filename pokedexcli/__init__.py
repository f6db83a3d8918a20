"""Interactive command-line Pokedex backed by the PokeAPI, with an expiring in-memory cache."""

__version__ = "0.1.0"
__all__ = ["__version__"]