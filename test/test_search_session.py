import asyncio
import sys
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from filmfinder.application import RecentSearchHistory, SearchService, SearchSession
from filmfinder.application.status_messages import IDLE_TEXT, NO_RESULTS_TEXT, describe_error
from filmfinder.domain import (
    DecodingError,
    InvalidRequestError,
    MalformedResponseError,
    TransportError,
)
from filmfinder.infrastructure.persistence import InMemoryKeyValueStore


def _page_payload(query: str, page: str, total: str = "23") -> dict:
    return {
        "Search": [{"Title": f"{query} #{page}", "Year": "2000", "imdbID": f"tt{page}", "Poster": ""}],
        "totalResults": total,
        "Response": "True",
    }


class _PagingClient:
    def __init__(self, total: str = "23") -> None:
        self.total = total
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None

    async def get_json(self, *, params):
        self.calls.append(dict(params))
        if self.fail_with is not None:
            raise self.fail_with
        if params["s"] == "nothing":
            return {"Response": "False", "Error": "Movie not found!"}
        return _page_payload(params["s"], params["page"], self.total)

    async def close(self) -> None:
        return None


class _GatedClient:
    """Holds each response until its query's gate is opened."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}

    async def get_json(self, *, params):
        gate = self.gates.setdefault(params["s"], asyncio.Event())
        await gate.wait()
        return _page_payload(params["s"], params["page"])

    async def close(self) -> None:
        return None


class TestSearchSession(unittest.IsolatedAsyncioTestCase):
    def _session(self, client, **kwargs) -> tuple[SearchSession, RecentSearchHistory]:
        history = RecentSearchHistory(storage=InMemoryKeyValueStore())
        session = SearchSession(search_service=SearchService(client=client), history=history, **kwargs)
        return session, history

    async def test_submit_starts_at_page_one_and_records_history(self) -> None:
        client = _PagingClient()
        session, history = self._session(client)
        self.assertEqual(session.status_text, IDLE_TEXT)

        page = await session.submit("batman")

        self.assertIsNotNone(page)
        self.assertEqual(session.status_text, "Found 23 movies.")
        self.assertEqual(session.page_count, 3)
        self.assertEqual(session.movies[0].title, "batman #1")
        self.assertEqual(history.terms, ("batman",))
        self.assertFalse(session.can_go_previous)
        self.assertTrue(session.can_go_next)

    async def test_paging_respects_bounds(self) -> None:
        client = _PagingClient()
        session, history = self._session(client)
        await session.submit("batman")

        self.assertIsNone(await session.previous_page())
        await session.next_page()
        await session.next_page()
        self.assertEqual(session.current_page, 3)
        self.assertIsNone(await session.next_page())
        await session.previous_page()

        self.assertEqual([c["page"] for c in client.calls], ["1", "2", "3", "2"])
        self.assertEqual(session.movies[0].title, "batman #2")
        # Paging repeats the head term, which is not re-recorded.
        self.assertEqual(history.terms, ("batman",))

    async def test_new_submit_resets_page(self) -> None:
        client = _PagingClient()
        session, history = self._session(client)
        await session.submit("batman")
        await session.next_page()
        await session.submit("alien")

        self.assertEqual(session.current_page, 1)
        self.assertEqual(client.calls[-1], {"s": "alien", "page": "1"})
        self.assertEqual(history.terms, ("alien", "batman"))

    async def test_open_page_jumps_directly(self) -> None:
        client = _PagingClient()
        session, _ = self._session(client)
        await session.open_page("batman", 3)
        self.assertEqual(client.calls, [{"s": "batman", "page": "3"}])
        self.assertFalse(session.can_go_next)

    async def test_no_results_clears_list(self) -> None:
        client = _PagingClient()
        session, _ = self._session(client)
        await session.submit("batman")
        page = await session.submit("nothing")

        self.assertTrue(page.no_results)
        self.assertEqual(session.status_text, NO_RESULTS_TEXT)
        self.assertEqual(session.movies, ())
        self.assertEqual(session.page_count, 1)
        self.assertIsNone(session.last_error)

    async def test_transport_error_sets_status_and_still_records_term(self) -> None:
        client = _PagingClient()
        client.fail_with = TransportError("connection reset")
        session, history = self._session(client)

        self.assertIsNone(await session.submit("batman"))
        self.assertEqual(session.status_text, "Error: connection reset")
        self.assertIsInstance(session.last_error, TransportError)
        self.assertEqual(history.terms, ("batman",))

    async def test_invalid_query_is_not_recorded_or_sent(self) -> None:
        client = _PagingClient()
        session, history = self._session(client)

        self.assertIsNone(await session.submit("bad\ud800"))
        self.assertEqual(session.status_text, "Invalid URL")
        self.assertEqual(history.terms, ())
        self.assertEqual(client.calls, [])

    async def test_invalid_page_is_not_recorded_or_sent(self) -> None:
        client = _PagingClient()
        session, history = self._session(client)

        for bad in (0, -2, True):
            self.assertIsNone(await session.open_page("batman", bad))
        self.assertEqual(session.status_text, "Invalid URL")
        self.assertEqual(history.terms, ())
        self.assertEqual(client.calls, [])

    async def test_last_resolved_response_wins_by_default(self) -> None:
        client = _GatedClient()
        session, _ = self._session(client)

        first = asyncio.create_task(session.submit("first"))
        await asyncio.sleep(0)
        second = asyncio.create_task(session.submit("second"))
        await asyncio.sleep(0)

        client.gates["second"].set()
        await second
        client.gates["first"].set()
        await first

        self.assertEqual(session.movies[0].title, "first #1")

    async def test_discard_stale_keeps_latest_request(self) -> None:
        client = _GatedClient()
        session, _ = self._session(client, discard_stale=True)

        first = asyncio.create_task(session.submit("first"))
        await asyncio.sleep(0)
        second = asyncio.create_task(session.submit("second"))
        await asyncio.sleep(0)

        client.gates["second"].set()
        self.assertIsNotNone(await second)
        client.gates["first"].set()
        self.assertIsNone(await first)

        self.assertEqual(session.movies[0].title, "second #1")


class TestDescribeError(unittest.TestCase):
    def test_messages_per_kind(self) -> None:
        self.assertEqual(describe_error(InvalidRequestError("x")), "Invalid URL")
        self.assertEqual(describe_error(TransportError("timed out")), "Error: timed out")
        self.assertEqual(describe_error(MalformedResponseError("bad")), "JSON parsing error: bad")
        self.assertEqual(describe_error(DecodingError("missing Title")), "Decoding error: missing Title")


if __name__ == "__main__":
    unittest.main()
