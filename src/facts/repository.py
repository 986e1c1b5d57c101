"""Fact repository: UI intents in, store calls out, Fact models back."""

from typing import Protocol

import structlog
from pydantic import ValidationError

from facts.models import Fact, FactDraft, VoteUpdate
from shared_types import ALL_CATEGORIES, Category, VoteColumn
from store.client import StoreError

logger = structlog.get_logger()


class RowStore(Protocol):
    async def select(self, filters=None, order=None, descending=False, limit=None) -> list[dict]: ...

    async def insert(self, record: dict) -> list[dict]: ...

    async def update(self, row_id, patch: dict) -> list[dict]: ...


def _to_facts(rows: list[dict]) -> list[Fact]:
    try:
        return [Fact.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.warning("facts.bad_row", error=str(e))
        raise StoreError(f"The fact store returned a malformed row: {e.errors()[0]['msg']}") from e


def _single(rows: list[dict], action: str) -> Fact:
    if not rows:
        raise StoreError(f"The fact store returned no row for {action}")
    return _to_facts(rows[:1])[0]


class FactRepository:
    """Thin adapter over a RowStore (normally ``store.FactStoreClient``)."""

    ORDER_COLUMN = VoteColumn.INTERESTING

    def __init__(self, store: RowStore, row_limit: int = 1500):
        self.store = store
        self.row_limit = row_limit

    async def list_facts(self, category: Category | str = ALL_CATEGORIES) -> list[Fact]:
        """Up to ``row_limit`` facts, most interesting first, optionally one category."""
        filters = None if category == ALL_CATEGORIES else {"category": str(category)}
        rows = await self.store.select(
            filters=filters,
            order=self.ORDER_COLUMN.value,
            descending=True,
            limit=self.row_limit,
        )
        facts = _to_facts(rows)
        logger.info("facts.listed", category=str(category), count=len(facts))
        return facts

    async def create_fact(self, draft: FactDraft) -> Fact:
        fact = _single(await self.store.insert(draft.as_record()), "insert")
        logger.info("facts.created", fact_id=fact.id, category=fact.category.value)
        return fact

    async def increment_vote(self, fact: Fact, column: VoteColumn) -> Fact:
        """Write ``cached value + 1`` for ``column``; the store keeps the last write."""
        update = VoteUpdate.increment(fact, column)
        updated = _single(await self.store.update(update.fact_id, update.as_patch()), "update")
        logger.info("facts.voted", fact_id=fact.id, column=column.value, value=update.value)
        return updated
