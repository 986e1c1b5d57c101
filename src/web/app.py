"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logging_config import setup_logging_from_config
from observability import log_store_summary
from web.deps import get_config, get_store_client
from web.routes import facts, ui
from web.sessions import SessionRegistry

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging_from_config(config.logging)
    logger.info("web.startup", store_url=config.store.url, table=config.store.table)
    yield
    if get_store_client.cache_info().currsize:
        client = get_store_client()
        log_store_summary(client.metrics)
        await client.aclose()
    logger.info("web.shutdown")


app = FastAPI(
    title="Facts Today",
    version="0.1.0",
    lifespan=lifespan,
)

config = get_config()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.web.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.sessions = SessionRegistry(max_sessions=config.web.max_sessions)

app.include_router(facts.router)
app.include_router(ui.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
