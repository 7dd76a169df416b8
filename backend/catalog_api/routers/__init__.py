"""Router exports for the Catalog API."""
from . import catalog, health, play, shows

__all__ = ["catalog", "health", "play", "shows"]
