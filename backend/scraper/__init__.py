"""
Scraper package for the Anicat catalog service.

This package bundles the upstream page fetcher, the CSS field extractors,
the episode aggregator, the catalog snapshot store and the search ranker.
"""

__all__ = ["aggregator", "catalog", "extractor", "fetcher", "models", "ranking"]
