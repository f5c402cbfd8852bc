"""Tests for CounterService.increment_and_get."""

import asyncio

import pytest


class TestIncrementAndGet:
    """Tests for atomic counter increments."""

    async def test_first_call_without_seed_starts_at_one(self, counter_service, counters):
        """Test that a missing counter is created with value 1."""
        assert await counter_service.increment_and_get("cadet") == 1
        assert counters["cadet"]["seq"] == 1

    async def test_subsequent_calls_increment(self, counter_service):
        """Test that existing counters are incremented by one per call."""
        values = [await counter_service.increment_and_get("cadet") for _ in range(5)]
        assert values == [1, 2, 3, 4, 5]

    async def test_counters_are_independent(self, counter_service):
        """Test that namespaces do not share values."""
        assert await counter_service.increment_and_get("cadet") == 1
        assert await counter_service.increment_and_get("poomsae") == 1
        assert await counter_service.increment_and_get("cadet") == 2

    async def test_first_call_uses_seed_plus_one(self, counter_service):
        """Test that the seed function determines the starting value."""

        async def seed() -> int:
            return 41

        assert await counter_service.increment_and_get("cadet", seed) == 42

    async def test_seed_only_consulted_when_counter_missing(self, counter_service):
        """Test that the seed function is not called once the counter exists."""
        calls = 0

        async def seed() -> int:
            nonlocal calls
            calls += 1
            return 10

        assert await counter_service.increment_and_get("cadet", seed) == 11
        assert await counter_service.increment_and_get("cadet", seed) == 12
        assert calls == 1

    async def test_failing_seed_falls_back_to_one(self, counter_service):
        """Test that a broken seed function does not block allocation."""

        async def seed() -> int:
            raise RuntimeError("scan failed")

        assert await counter_service.increment_and_get("cadet", seed) == 1

    async def test_concurrent_first_calls_return_distinct_values(self, counter_service, counter_database):
        """Test that two callers racing to create a counter never get the same value."""
        both_seeding = asyncio.Barrier(2)

        async def seed() -> int:
            # Hold both callers after their failed increment so both try to create the counter
            await both_seeding.wait()
            return 41

        first, second = await asyncio.gather(
            counter_service.increment_and_get("cadet", seed),
            counter_service.increment_and_get("cadet", seed),
        )

        assert sorted([first, second]) == [42, 43]
        assert counter_database.get_collection("counters").insert_calls == 2

    @pytest.mark.parametrize("callers", [2, 10, 50])
    async def test_concurrent_increments_are_unique(self, counter_service, callers):
        """Test that many concurrent callers receive a gap-free set of distinct values."""
        values = await asyncio.gather(*(counter_service.increment_and_get("cadet") for _ in range(callers)))
        assert sorted(values) == list(range(1, callers + 1))
