"""
Rate-limited batch fetching.

The /stats endpoint accepts several ``game_ids[]`` filters per request, but a
season's worth of ids has to be split up and spaced out to stay under the
API's rate limit.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from ..core.http import ExternalAPIError, MissingCredentialError

logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 10
DEFAULT_DELAY_SECONDS = 0.2


def chunked(ids: Sequence[K], size: int) -> list[list[K]]:
    """Split ids into contiguous chunks of at most ``size``."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


async def fetch_in_chunks(
    ids: Sequence[K],
    fetch_chunk: Callable[[list[K]], Awaitable[Sequence[T]]],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    delay: float = DEFAULT_DELAY_SECONDS,
) -> list[T]:
    """
    Fetch ``ids`` chunk by chunk and concatenate the results.

    Chunks run one after another in input order. A chunk that fails with an
    API error is skipped and the batch carries on. The delay is applied after
    every chunk, including failed ones.

    Args:
        ids: Identifiers to fetch, in order
        fetch_chunk: Coroutine fetching the records for one chunk
        chunk_size: Maximum identifiers per request
        delay: Seconds to wait after each request

    Returns:
        Records of all successful chunks, in chunk order
    """
    results: list[T] = []
    chunks = chunked(ids, chunk_size)

    for index, chunk in enumerate(chunks, start=1):
        try:
            records = await fetch_chunk(chunk)
            results.extend(records)
            logger.debug("Chunk %d/%d: %d records", index, len(chunks), len(records))
        except MissingCredentialError:
            raise
        except ExternalAPIError as e:
            logger.warning("Skipping chunk %d/%d (%d ids): %s", index, len(chunks), len(chunk), e)
        await asyncio.sleep(delay)

    return results
