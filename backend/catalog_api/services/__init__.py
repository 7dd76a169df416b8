"""Service layer helpers for upstream integrations."""

from .resolver_service import ResolverService, ResolverServiceError, WatchLinkNotFoundError
from .show_service import ShowService
from .thumbnail_cache import InvalidCacheKeyError, ThumbnailCache

__all__ = [
    "InvalidCacheKeyError",
    "ResolverService",
    "ResolverServiceError",
    "ShowService",
    "ThumbnailCache",
    "WatchLinkNotFoundError",
]
