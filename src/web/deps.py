"""Dependency injection for FastAPI routes."""

from functools import lru_cache

import structlog
from fastapi import Depends, Request

from config import load_config_model
from config_models import FactsConfig
from facts.controller import FactsController
from facts.repository import FactRepository
from store.client import FactStoreClient
from web.sessions import SessionRegistry

logger = structlog.get_logger()


@lru_cache
def get_config() -> FactsConfig:
    """Load shared config from config.yaml + FACTS_* env vars."""
    return load_config_model()


@lru_cache
def get_store_client() -> FactStoreClient:
    """One pooled httpx client for the process."""
    store = get_config().store
    if not store.api_key:
        logger.warning("store.no_api_key", url=store.url)
    return FactStoreClient(
        base_url=store.url,
        api_key=store.api_key,
        table=store.table,
        timeout=store.timeout,
    )


def get_repository() -> FactRepository:
    return FactRepository(get_store_client(), row_limit=get_config().store.row_limit)


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session_cookie() -> str:
    return get_config().web.session_cookie


class SessionContext:
    """The caller's controller plus the session id to (re)issue as a cookie."""

    def __init__(self, session_id: str, controller: FactsController, cookie_name: str):
        self.session_id = session_id
        self.controller = controller
        self.cookie_name = cookie_name

    def attach(self, response):
        response.set_cookie(self.cookie_name, self.session_id, httponly=True, samesite="lax")
        return response


def get_session(
    request: Request,
    repository: FactRepository = Depends(get_repository),
    sessions: SessionRegistry = Depends(get_sessions),
    cookie_name: str = Depends(get_session_cookie),
) -> SessionContext:
    session_id, controller = sessions.get_or_create(
        request.cookies.get(cookie_name), lambda: FactsController(repository)
    )
    return SessionContext(session_id, controller, cookie_name)
