"""Shared test fixtures for Facts Today."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from facts.controller import FactsController  # noqa: E402
from facts.repository import FactRepository  # noqa: E402
from store.client import StoreError  # noqa: E402

VOTE_DEFAULTS = {"votesInteresting": 0, "votesMindBlowing": 0, "votesFalse": 0}


class InMemoryFactStore:
    """Stand-in for the hosted table with the same select/insert/update surface.

    ``fail`` maps an operation name to the error message it should raise.
    ``select_delays`` is consumed one entry per select; ``update_delays`` is
    keyed by row id. Every call yields to the event loop at least once.
    """

    def __init__(self, rows=None):
        self.rows = [dict(r) for r in rows or []]
        self.calls: list[tuple] = []
        self.fail: dict[str, str] = {}
        self.select_delays: list[float] = []
        self.update_delays: dict = {}
        self._next_id = max((r["id"] for r in self.rows), default=0) + 1

    def _maybe_fail(self, operation):
        if operation in self.fail:
            raise StoreError(self.fail[operation], status_code=400)

    def row(self, row_id):
        return next(r for r in self.rows if r["id"] == row_id)

    async def select(self, filters=None, order=None, descending=False, limit=None):
        self.calls.append(("select", filters, order, descending, limit))
        await asyncio.sleep(self.select_delays.pop(0) if self.select_delays else 0)
        self._maybe_fail("select")
        rows = [r for r in self.rows if all(r.get(k) == v for k, v in (filters or {}).items())]
        if order:
            rows.sort(key=lambda r: r.get(order) or 0, reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [dict(r) for r in rows]

    async def insert(self, record):
        self.calls.append(("insert", record))
        await asyncio.sleep(0)
        self._maybe_fail("insert")
        row = {"id": self._next_id, **VOTE_DEFAULTS, "createdIn": None, **record}
        self._next_id += 1
        self.rows.append(row)
        return [dict(row)]

    async def update(self, row_id, patch):
        self.calls.append(("update", row_id, patch))
        await asyncio.sleep(self.update_delays.get(row_id, 0))
        self._maybe_fail("update")
        matched = [r for r in self.rows if r["id"] == row_id]
        for r in matched:
            r.update(patch)
        return [dict(r) for r in matched]


@pytest.fixture
def sample_rows():
    """Rows as the store returns them (camelCase columns)."""
    return [
        {
            "id": 1,
            "text": "React is being developed by Meta (formerly facebook)",
            "source": "https://opensource.fb.com/",
            "category": "technology",
            "votesInteresting": 24,
            "votesMindBlowing": 9,
            "votesFalse": 4,
            "createdIn": 2021,
        },
        {
            "id": 2,
            "text": "Millennial dads spend 3 times as much time with their kids than their fathers spent with them.",
            "source": "https://www.mother.ly/parenting/millennial-dads-spend-more-time-with-their-kids",
            "category": "society",
            "votesInteresting": 11,
            "votesMindBlowing": 2,
            "votesFalse": 0,
            "createdIn": 2019,
        },
        {
            "id": 3,
            "text": "Lisbon is the capital of Portugal",
            "source": "https://en.wikipedia.org/wiki/Lisbon",
            "category": "society",
            "votesInteresting": 8,
            "votesMindBlowing": 3,
            "votesFalse": 1,
            "createdIn": 2015,
        },
        {
            "id": 4,
            "text": "The Great Wall of China is visible from the Moon",
            "source": "https://www.nasa.gov/",
            "category": "history",
            "votesInteresting": 2,
            "votesMindBlowing": 1,
            "votesFalse": 5,
            "createdIn": None,
        },
    ]


@pytest.fixture
def fake_store(sample_rows):
    return InMemoryFactStore(sample_rows)


@pytest.fixture
def repository(fake_store):
    return FactRepository(fake_store)


@pytest.fixture
def controller(repository):
    return FactsController(repository)
