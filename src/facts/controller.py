"""View state controller: the only writer of a session's ViewState."""

from dataclasses import dataclass, field
from typing import Optional

import structlog

from facts.models import Fact, FactValidationError, parse_category, validate_draft
from facts.repository import FactRepository
from shared_types import ALL_CATEGORIES, Category, VoteColumn
from store.client import StoreError

logger = structlog.get_logger()


@dataclass
class FormState:
    text: str = ""
    source: str = ""
    category: str = ""
    is_submitting: bool = False
    problems: list[str] = field(default_factory=list)

    def clear(self):
        self.text = ""
        self.source = ""
        self.category = ""
        self.problems = []


@dataclass
class ViewState:
    facts: list[Fact] = field(default_factory=list)
    is_loading: bool = False
    current_category: Category | str = ALL_CATEGORIES
    show_form: bool = False
    form: FormState = field(default_factory=FormState)
    pending_votes: set = field(default_factory=set)
    notice: Optional[str] = None
    loaded: bool = False


class FactsController:
    """Applies user intents and completed store calls to a ViewState.

    Fetches are tagged with a generation number; a result whose generation
    is no longer current is dropped, so the last requested filter wins even
    when responses arrive out of order.
    """

    def __init__(self, repository: FactRepository, state: Optional[ViewState] = None):
        self.repository = repository
        self.state = state or ViewState()
        self._generation = 0

    def report(self, message: str):
        """Surface a message to the user until dismissed."""
        self.state.notice = message

    async def load(self) -> None:
        """(Re)fetch facts for the current category."""
        self._generation += 1
        generation = self._generation
        category = self.state.current_category
        self.state.is_loading = True
        try:
            facts = await self.repository.list_facts(category)
        except StoreError as e:
            if generation != self._generation:
                logger.debug("facts.stale_error_dropped", category=str(category))
            else:
                logger.warning("facts.load_failed", category=str(category), error=e.message)
                self.report(e.message)
        else:
            if generation != self._generation:
                logger.debug("facts.stale_result_dropped", category=str(category))
            else:
                self.state.facts = facts
                self.state.loaded = True
        finally:
            # Unexpected errors propagate but must not leave the page stuck loading.
            if generation == self._generation:
                self.state.is_loading = False

    async def set_category(self, category: str) -> None:
        self.state.current_category = parse_category(category)
        await self.load()

    def toggle_form(self) -> bool:
        self.state.show_form = not self.state.show_form
        return self.state.show_form

    def dismiss_notice(self):
        self.state.notice = None

    async def submit_fact(self, text: str, source: str, category: str) -> Optional[Fact]:
        """Validate and post a new fact; returns it on success."""
        form = self.state.form
        if form.is_submitting:
            return None
        form.text, form.source, form.category = text, source, category

        try:
            draft = validate_draft(text, source, category)
        except FactValidationError as e:
            form.problems = e.problems
            self.state.show_form = True
            logger.info("facts.submit_rejected", problems=e.problems)
            return None

        form.problems = []
        form.is_submitting = True
        try:
            fact = await self.repository.create_fact(draft)
        except StoreError as e:
            logger.warning("facts.submit_failed", error=e.message)
            self.report(e.message)
            return None
        finally:
            form.is_submitting = False

        self.state.facts = [fact, *self.state.facts]
        form.clear()
        self.state.show_form = False
        return fact

    def _find(self, fact_id) -> Optional[Fact]:
        for fact in self.state.facts:
            if str(fact.id) == str(fact_id):
                return fact
        return None

    async def cast_vote(self, fact_id, column: VoteColumn | str) -> Optional[Fact]:
        """Increment one vote column of a cached fact; returns the updated fact."""
        try:
            column = VoteColumn(column)
        except ValueError:
            raise FactValidationError([f"Unknown vote column: {column}"]) from None
        fact = self._find(fact_id)
        if fact is None:
            self.report(f"Fact {fact_id} is not loaded")
            return None
        if fact.id in self.state.pending_votes:
            logger.debug("facts.vote_ignored_pending", fact_id=fact.id)
            return None

        self.state.pending_votes.add(fact.id)
        try:
            updated = await self.repository.increment_vote(fact, column)
        except StoreError as e:
            logger.warning("facts.vote_failed", fact_id=fact.id, column=column.value, error=e.message)
            self.report(e.message)
            return None
        finally:
            self.state.pending_votes.discard(fact.id)

        self.state.facts = [updated if f.id == updated.id else f for f in self.state.facts]
        return updated
