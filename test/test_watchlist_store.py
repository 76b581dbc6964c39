import asyncio
import sys
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from filmfinder.application import ObserverContext, WatchlistStore
from filmfinder.domain import MovieSummary
from filmfinder.infrastructure.persistence import InMemoryKeyValueStore

BEGINS = MovieSummary(id="tt0372784", title="Batman Begins", year="2005", poster_url="p1")
DARK_KNIGHT = MovieSummary(id="tt0468569", title="The Dark Knight", year="2008", poster_url="p2")
RISES = MovieSummary(id="tt1345836", title="The Dark Knight Rises", year="2012", poster_url="p3")


class _FlakyStorage:
    def get(self, key):
        raise OSError("disk gone")

    def set(self, key, value):
        raise OSError("disk gone")


class TestWatchlistStore(unittest.TestCase):
    def test_add_is_idempotent_by_id(self) -> None:
        store = WatchlistStore()
        self.assertTrue(store.add(BEGINS))
        self.assertFalse(store.add(BEGINS))
        # Same id with stale display data is still the same entry.
        self.assertFalse(store.add(MovieSummary(id=BEGINS.id, title="Renamed")))

        self.assertEqual(store.entries, (BEGINS,))
        self.assertTrue(store.contains(BEGINS.id))

    def test_insertion_order_is_preserved(self) -> None:
        store = WatchlistStore()
        for movie in (RISES, BEGINS, DARK_KNIGHT):
            store.add(movie)
        self.assertEqual([m.id for m in store], [RISES.id, BEGINS.id, DARK_KNIGHT.id])
        self.assertEqual(len(store), 3)

    def test_remove_after_add_restores_previous_state(self) -> None:
        store = WatchlistStore()
        store.add(BEGINS)
        before = store.entries

        store.add(DARK_KNIGHT)
        self.assertTrue(store.remove(DARK_KNIGHT))

        self.assertEqual(store.entries, before)
        self.assertFalse(store.contains(DARK_KNIGHT.id))
        self.assertFalse(store.remove(DARK_KNIGHT))

    def test_toggle_flips_liked_state(self) -> None:
        store = WatchlistStore()
        self.assertTrue(store.toggle(BEGINS))
        self.assertTrue(store.contains(BEGINS.id))
        self.assertFalse(store.toggle(BEGINS))
        self.assertFalse(store.contains(BEGINS.id))

    def test_listeners_see_every_change_and_no_noops(self) -> None:
        store = WatchlistStore()
        seen: list[tuple] = []
        store.subscribe(seen.append)

        store.add(BEGINS)
        store.add(BEGINS)
        store.remove(DARK_KNIGHT)
        store.add(DARK_KNIGHT)
        store.remove(BEGINS)

        self.assertEqual(seen, [(BEGINS,), (BEGINS, DARK_KNIGHT), (DARK_KNIGHT,)])
        self.assertEqual(store.version, 3)

    def test_unsubscribe_stops_notifications(self) -> None:
        store = WatchlistStore()
        seen: list[tuple] = []
        unsubscribe = store.subscribe(seen.append)
        store.add(BEGINS)
        unsubscribe()
        unsubscribe()
        store.add(DARK_KNIGHT)
        self.assertEqual(seen, [(BEGINS,)])

    def test_failing_listener_does_not_block_others(self) -> None:
        store = WatchlistStore()
        seen: list[tuple] = []

        def _boom(_snapshot) -> None:
            raise RuntimeError("ui crashed")

        store.subscribe(_boom)
        store.subscribe(seen.append)
        with self.assertLogs("filmfinder.application.watchlist_store", level="ERROR"):
            store.add(BEGINS)

        self.assertEqual(seen, [(BEGINS,)])
        self.assertTrue(store.contains(BEGINS.id))

    def test_memory_only_without_storage(self) -> None:
        store = WatchlistStore()
        store.add(BEGINS)
        self.assertEqual(WatchlistStore().load(), ())


class TestWatchlistPersistence(unittest.TestCase):
    def test_changes_are_saved_and_restored(self) -> None:
        storage = InMemoryKeyValueStore()
        store = WatchlistStore(storage=storage)
        store.add(BEGINS)
        store.add(DARK_KNIGHT)
        store.remove(BEGINS)

        restored = WatchlistStore(storage=storage)
        self.assertEqual(restored.load(), (DARK_KNIGHT,))

    def test_restore_skips_bad_rows_and_duplicate_ids(self) -> None:
        storage = InMemoryKeyValueStore(
            {
                "watchlist": [
                    {"id": "tt1", "title": "A", "year": "2001", "poster_url": ""},
                    {"id": "tt1", "title": "A again", "year": "2001", "poster_url": ""},
                    {"id": "tt2", "title": None, "year": "2002", "poster_url": ""},
                    "garbage",
                ]
            }
        )
        store = WatchlistStore(storage=storage)
        seen: list[tuple] = []
        store.subscribe(seen.append)

        self.assertEqual([m.id for m in store.load()], ["tt1"])
        self.assertEqual(len(seen), 1)

    def test_unreadable_storage_starts_empty_and_keeps_working(self) -> None:
        store = WatchlistStore(storage=_FlakyStorage())
        with self.assertLogs("filmfinder.application.watchlist_store", level="WARNING"):
            self.assertEqual(store.load(), ())
        with self.assertLogs("filmfinder.application.watchlist_store", level="WARNING"):
            store.add(BEGINS)
        self.assertTrue(store.contains(BEGINS.id))


class TestWatchlistObserverContext(unittest.IsolatedAsyncioTestCase):
    async def test_mutation_from_another_thread_is_rejected(self) -> None:
        store = WatchlistStore(context=ObserverContext())
        loop = asyncio.get_running_loop()

        with self.assertRaises(RuntimeError):
            await loop.run_in_executor(None, store.add, BEGINS)
        self.assertEqual(store.entries, ())

    async def test_hand_off_through_context_applies_on_loop(self) -> None:
        context = ObserverContext()
        store = WatchlistStore(context=context)
        loop = asyncio.get_running_loop()

        handle = await loop.run_in_executor(None, context.call, store.add, BEGINS)
        self.assertIsNotNone(handle)
        await asyncio.sleep(0)

        self.assertEqual(store.entries, (BEGINS,))

    async def test_on_loop_mutation_runs_inline(self) -> None:
        context = ObserverContext()
        store = WatchlistStore(context=context)
        self.assertIsNone(context.call(store.add, BEGINS))
        self.assertTrue(store.contains(BEGINS.id))


if __name__ == "__main__":
    unittest.main()
