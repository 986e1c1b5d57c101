"""Pydantic request/response schemas for the web API."""

from typing import Optional

from pydantic import BaseModel, Field

# --- Facts ---


class FactCreate(BaseModel):
    """JSON body for POST /api/facts; content rules are checked by validate_draft."""

    text: str = ""
    source: str = ""
    category: str = ""


class FactOut(BaseModel):
    id: int | str
    text: str
    source: str
    category: str
    votesInteresting: int = 0
    votesMindBlowing: int = 0
    votesFalse: int = 0
    createdIn: Optional[int] = None
    isDisputed: bool = False


# --- Session ---


class FormSnapshot(BaseModel):
    text: str = ""
    source: str = ""
    category: str = ""
    is_submitting: bool = False
    problems: list[str] = Field(default_factory=list)


class SessionSnapshot(BaseModel):
    facts: list[FactOut]
    is_loading: bool
    current_category: str
    show_form: bool
    form: FormSnapshot
    pending_votes: list[int | str]
    notice: Optional[str] = None
