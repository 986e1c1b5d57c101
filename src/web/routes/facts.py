"""Fact JSON routes: list/create through the repository, session snapshot."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from facts.models import Fact, FactValidationError, parse_category, validate_draft
from facts.repository import FactRepository
from store.client import StoreError
from web.deps import SessionContext, get_repository, get_session
from web.models import FactCreate, FactOut, FormSnapshot, SessionSnapshot

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["facts"])


def _fact_out(fact: Fact) -> FactOut:
    return FactOut(**fact.to_row(), isDisputed=fact.is_disputed)


@router.get("/facts", response_model=list[FactOut])
async def list_facts(
    category: str = Query(default="all"),
    repository: FactRepository = Depends(get_repository),
):
    try:
        parsed = parse_category(category)
    except FactValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)
    try:
        facts = await repository.list_facts(parsed)
    except StoreError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return [_fact_out(f) for f in facts]


@router.post("/facts", response_model=FactOut, status_code=status.HTTP_201_CREATED)
async def create_fact(
    body: FactCreate,
    repository: FactRepository = Depends(get_repository),
):
    try:
        draft = validate_draft(body.text, body.source, body.category)
    except FactValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)
    try:
        fact = await repository.create_fact(draft)
    except StoreError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return _fact_out(fact)


@router.get("/session", response_model=SessionSnapshot)
async def session_snapshot(
    response: Response,
    session: SessionContext = Depends(get_session),
):
    state = session.controller.state
    session.attach(response)
    return SessionSnapshot(
        facts=[_fact_out(f) for f in state.facts],
        is_loading=state.is_loading,
        current_category=str(state.current_category),
        show_form=state.show_form,
        form=FormSnapshot(
            text=state.form.text,
            source=state.form.source,
            category=state.form.category,
            is_submitting=state.form.is_submitting,
            problems=state.form.problems,
        ),
        pending_votes=sorted(state.pending_votes, key=str),
        notice=state.notice,
    )
