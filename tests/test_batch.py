"""
Tests for chunked, rate-limited batch fetching.
"""

from __future__ import annotations

import pytest

from season_stats.core.http import HttpError, MissingCredentialError, NetworkError
from season_stats.services import batch
from season_stats.services.batch import chunked, fetch_in_chunks


@pytest.fixture
def sleeps(monkeypatch):
    """Record asyncio.sleep calls made by the batch fetcher."""
    recorded = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(batch.asyncio, "sleep", fake_sleep)
    return recorded


class TestChunked:
    def test_sizes(self):
        assert [len(c) for c in chunked(list(range(25)), 10)] == [10, 10, 5]

    def test_preserves_order(self):
        assert chunked([5, 3, 9, 1], 3) == [[5, 3, 9], [1]]

    def test_empty(self):
        assert chunked([], 10) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            chunked([1, 2], size)


class TestFetchInChunks:
    @pytest.mark.asyncio
    async def test_three_chunks_in_order_with_delay_after_each(self, sleeps):
        ids = list(range(1, 26))
        seen = []

        async def fetch(chunk):
            seen.append(chunk)
            return [i * 10 for i in chunk]

        result = await fetch_in_chunks(ids, fetch, chunk_size=10, delay=0.2)

        assert seen == [ids[0:10], ids[10:20], ids[20:25]]
        assert result == [i * 10 for i in ids]
        assert sleeps == [0.2, 0.2, 0.2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [HttpError(500, "/stats"), NetworkError("reset")])
    async def test_failed_chunk_is_skipped(self, sleeps, error):
        ids = list(range(1, 26))
        calls = []

        async def fetch(chunk):
            calls.append(chunk)
            if len(calls) == 2:
                raise error
            return list(chunk)

        result = await fetch_in_chunks(ids, fetch, chunk_size=10, delay=0.2)

        assert len(calls) == 3
        assert result == ids[0:10] + ids[20:25]
        # The delay still elapses after the failed chunk
        assert sleeps == [0.2, 0.2, 0.2]

    @pytest.mark.asyncio
    async def test_all_chunks_fail(self, sleeps):
        async def fetch(chunk):
            raise HttpError(503)

        assert await fetch_in_chunks([1, 2, 3], fetch, chunk_size=2) == []
        assert len(sleeps) == 2

    @pytest.mark.asyncio
    async def test_empty_input(self, sleeps):
        async def fetch(chunk):
            raise AssertionError("should not be called")

        assert await fetch_in_chunks([], fetch) == []
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_missing_credential_is_not_swallowed(self, sleeps):
        async def fetch(chunk):
            raise MissingCredentialError()

        with pytest.raises(MissingCredentialError):
            await fetch_in_chunks([1, 2, 3], fetch, chunk_size=1)

    @pytest.mark.asyncio
    async def test_sequential_not_concurrent(self, sleeps):
        active = []
        peak = []

        async def fetch(chunk):
            active.append(chunk)
            peak.append(len(active))
            await batch.asyncio.sleep(0)
            active.remove(chunk)
            return chunk

        await fetch_in_chunks(list(range(6)), fetch, chunk_size=2)
        assert max(peak) == 1
