"""Presentation components: pure ViewState -> HTML functions (Jinja2 macros)."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from facts.controller import FormState, ViewState
from facts.models import Fact
from shared_types import CATEGORY_COLORS, MAX_FACT_LENGTH, Category, VoteColumn

TEMPLATES_DIR = Path(__file__).parent / "templates"

VOTE_BUTTONS = [
    (VoteColumn.INTERESTING, "👍"),
    (VoteColumn.MIND_BLOWING, "🤯"),
    (VoteColumn.FALSE, "⛔️"),
]

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def _components():
    return env.get_template("components.html").module


def render_header(show_form: bool) -> Markup:
    return _components().header(show_form)


def render_notice(message: str | None) -> Markup:
    return _components().notice(message)


def render_fact_form(form: FormState) -> Markup:
    return _components().fact_form(form, list(Category), MAX_FACT_LENGTH)


def render_category_filter(current_category: str) -> Markup:
    return _components().category_filter(current_category, list(Category), CATEGORY_COLORS)


def render_fact(fact: Fact, pending: bool = False) -> Markup:
    return _components().fact(fact, pending, VOTE_BUTTONS)


def render_fact_list(facts: list[Fact], pending_votes: set) -> Markup:
    return _components().fact_list(facts, pending_votes, VOTE_BUTTONS)


def render_loader() -> Markup:
    return _components().loader()


def render_page(state: ViewState) -> str:
    """Full page for one session's state; never mutates it."""
    if state.is_loading:
        body = render_loader()
    else:
        body = render_fact_list(state.facts, state.pending_votes)
    return env.get_template("index.html").render(
        header=render_header(state.show_form),
        notice=render_notice(state.notice),
        form=render_fact_form(state.form) if state.show_form else "",
        category_filter=render_category_filter(state.current_category),
        body=body,
    )
