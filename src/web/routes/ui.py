"""HTML routes: render the session's page and apply form-posted intents."""

import structlog
from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from facts.models import FactValidationError
from web.deps import SessionContext, get_session
from web.render import render_page

logger = structlog.get_logger()

router = APIRouter(tags=["ui"])


def _back_to_page(session: SessionContext) -> RedirectResponse:
    return session.attach(RedirectResponse("/", status_code=303))


@router.get("/", response_class=HTMLResponse)
async def index(session: SessionContext = Depends(get_session)):
    controller = session.controller
    if not controller.state.loaded and not controller.state.is_loading:
        await controller.load()
    html = render_page(controller.state)
    # Notices are shown once.
    controller.dismiss_notice()
    return session.attach(HTMLResponse(html))


@router.post("/ui/form/toggle")
async def toggle_form(session: SessionContext = Depends(get_session)):
    session.controller.toggle_form()
    return _back_to_page(session)


@router.post("/ui/category")
async def set_category(
    category: str = Form("all"),
    session: SessionContext = Depends(get_session),
):
    try:
        await session.controller.set_category(category)
    except FactValidationError as e:
        session.controller.report(str(e))
    return _back_to_page(session)


@router.post("/ui/facts")
async def submit_fact(
    text: str = Form(""),
    source: str = Form(""),
    category: str = Form(""),
    session: SessionContext = Depends(get_session),
):
    await session.controller.submit_fact(text, source, category)
    return _back_to_page(session)


@router.post("/ui/facts/{fact_id}/vote")
async def cast_vote(
    fact_id: str,
    column: str = Form(...),
    session: SessionContext = Depends(get_session),
):
    try:
        await session.controller.cast_vote(fact_id, column)
    except FactValidationError as e:
        session.controller.report(str(e))
    return _back_to_page(session)


@router.post("/ui/notice/dismiss")
async def dismiss_notice(session: SessionContext = Depends(get_session)):
    session.controller.dismiss_notice()
    return _back_to_page(session)
