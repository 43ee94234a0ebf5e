"""
Tests for the status snapshot cache.
"""

from leave_sheet_bot.cache import StatusCache


class TestStatusCache:
    """Test TTL behaviour with a fake clock."""

    def test_empty_cache_misses(self, status_cache):
        """A fresh cache has nothing to return."""
        assert status_cache.get() is None

    def test_hit_within_ttl(self, status_cache, fake_clock):
        """Snapshot is served while younger than the TTL."""
        status_cache.put([{"Request ID": "LID-1"}])
        fake_clock.advance(299)

        assert status_cache.get() == ({"Request ID": "LID-1"},)

    def test_miss_at_ttl(self, status_cache, fake_clock):
        """Snapshot expires exactly at the TTL."""
        status_cache.put([{"Request ID": "LID-1"}])
        fake_clock.advance(300)

        assert status_cache.get() is None

    def test_put_replaces_slot_and_restamps(self, status_cache, fake_clock):
        """A new put replaces the slot and resets its age."""
        status_cache.put([{"Request ID": "LID-1"}])
        fake_clock.advance(200)
        status_cache.put([{"Request ID": "LID-2"}])
        fake_clock.advance(200)

        assert status_cache.get() == ({"Request ID": "LID-2"},)

    def test_returns_same_snapshot_object(self, status_cache):
        """Hits return the stored snapshot object itself."""
        stored = status_cache.put([{"Request ID": "LID-1"}])
        assert status_cache.get() is stored
        assert status_cache.get() is status_cache.get()

    def test_clear(self, status_cache):
        """Clearing empties the slot."""
        status_cache.put([])
        status_cache.clear()
        assert status_cache.get() is None

    def test_state(self, status_cache, fake_clock):
        """State reports row count and age for monitoring."""
        assert status_cache.state() == {"ttl_seconds": 300, "cached_rows": None, "age_seconds": None}

        status_cache.put([{}, {}])
        fake_clock.advance(12.5)

        assert status_cache.state() == {"ttl_seconds": 300, "cached_rows": 2, "age_seconds": 12.5}

    def test_default_ttl(self):
        """Default TTL is five minutes."""
        assert StatusCache().ttl_seconds == 300
