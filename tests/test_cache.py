"""
Tests for the query cache.
"""

import pytest

from character_quiz.cache import QueryCache


class TestQueryCache:
    """Tests for QueryCache."""

    @pytest.mark.asyncio
    async def test_read_through(self):
        cache = QueryCache()
        calls = []

        async def fetcher():
            calls.append(1)
            return 826

        assert await cache.fetch(("total_count",), fetcher) == 826
        assert await cache.fetch(("total_count",), fetcher) == 826
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failures_not_cached(self):
        cache = QueryCache()

        async def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await cache.fetch(("quiz", 0), failing)

        assert ("quiz", 0) not in cache
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_prefix_invalidation(self):
        cache = QueryCache()

        async def value():
            return "x"

        await cache.fetch(("total_count",), value)
        await cache.fetch(("quiz", 0), value)
        await cache.fetch(("quiz", 1), value)

        assert cache.invalidate(("quiz",)) == 2
        assert ("total_count",) in cache
        assert cache.get(("quiz", 1)) is None

    @pytest.mark.asyncio
    async def test_invalidate_everything(self):
        cache = QueryCache()

        async def value():
            return 1

        await cache.fetch(("a",), value)
        await cache.fetch(("b", 2), value)

        assert cache.invalidate() == 2
        assert len(cache) == 0
