"""
Pipeline services: batch fetching, the shared game catalog and the season
pipeline itself.

The pipeline is imported from ``season_stats.services.pipeline`` (or the
package root) to keep this module free of aggregator imports.
"""

from .batch import chunked, fetch_in_chunks
from .catalog import SharedGameCatalog, build_game_catalog

__all__ = [
    "chunked",
    "fetch_in_chunks",
    "SharedGameCatalog",
    "build_game_catalog",
]
