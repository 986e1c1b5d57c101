"""Fact records, submission drafts and vote updates."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from shared_types import ALL_CATEGORIES, CATEGORY_COLORS, MAX_FACT_LENGTH, Category, VoteColumn

_http_url = TypeAdapter(HttpUrl)


class FactValidationError(ValueError):
    """Local, pre-network rejection of user input."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


class Fact(BaseModel):
    """A fact row as stored. Attribute names are snake_case, wire names camelCase."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int | str
    text: str
    source: str
    category: Category
    votes_interesting: int = Field(default=0, ge=0, alias="votesInteresting")
    votes_mind_blowing: int = Field(default=0, ge=0, alias="votesMindBlowing")
    votes_false: int = Field(default=0, ge=0, alias="votesFalse")
    created_in: Optional[int] = Field(default=None, alias="createdIn")

    @property
    def is_disputed(self) -> bool:
        return self.votes_interesting + self.votes_mind_blowing < self.votes_false

    @property
    def has_safe_source(self) -> bool:
        # Anything can be inserted with the public key; only http(s) is linkable.
        return is_valid_http_url(self.source)

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self.category]

    def votes(self, column: VoteColumn) -> int:
        return {
            VoteColumn.INTERESTING: self.votes_interesting,
            VoteColumn.MIND_BLOWING: self.votes_mind_blowing,
            VoteColumn.FALSE: self.votes_false,
        }[column]

    def to_row(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def is_valid_http_url(value: str) -> bool:
    """True for absolute http/https URLs with a host."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


class FactDraft(BaseModel):
    """User submission: the only three fields sent on insert."""

    text: str
    source: str
    category: Category

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v:
            raise ValueError("Fact text is required")
        if len(v) > MAX_FACT_LENGTH:
            raise ValueError(f"Fact text must be at most {MAX_FACT_LENGTH} characters (got {len(v)})")
        return v

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        if not is_valid_http_url(v):
            raise ValueError("Source must be a valid http(s) URL")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        if not v:
            raise ValueError("Choose a category")
        if v not in {c.value for c in Category}:
            raise ValueError(f"Unknown category: {v}")
        return v

    def as_record(self) -> dict:
        return {"text": self.text, "source": self.source, "category": self.category.value}


def validate_draft(text: str, source: str, category: str) -> FactDraft:
    """Build a FactDraft or raise FactValidationError listing every problem."""
    try:
        return FactDraft(text=text, source=source, category=category)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            ctx = err.get("ctx") or {}
            if "error" in ctx:
                problems.append(str(ctx["error"]))
            else:
                field = ".".join(str(part) for part in err["loc"])
                problems.append(f"{field}: {err['msg']}")
        raise FactValidationError(problems) from e


def parse_category(value: str) -> Category | str:
    """Return "all" or the matching Category; raise FactValidationError otherwise."""
    if value == ALL_CATEGORIES:
        return value
    try:
        return Category(value)
    except ValueError:
        raise FactValidationError([f"Unknown category: {value}"]) from None


@dataclass(frozen=True)
class VoteUpdate:
    """Set one vote column of one row to an absolute value."""

    fact_id: int | str
    column: VoteColumn
    value: int

    @classmethod
    def increment(cls, fact: Fact, column: VoteColumn) -> "VoteUpdate":
        # Read-then-write from the cached copy; not atomic at the store.
        return cls(fact_id=fact.id, column=column, value=fact.votes(column) + 1)

    def as_patch(self) -> dict:
        return {self.column.value: self.value}
