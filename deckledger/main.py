import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckledger.api import (
    decks_router,
    formats_router,
    health_router,
    matches_router,
    stats_router,
    sync_router,
    tournaments_router,
)
from deckledger.config import Settings, settings
from deckledger.db.database import init_db
from deckledger.remote.base import RemoteStore
from deckledger.remote.identity import Identity, IdentitySource
from deckledger.remote.sql import SqlStore
from deckledger.remote.supabase import SupabaseStore
from deckledger.sync.tracker import Tracker

logger = logging.getLogger(__name__)


def build_store(config: Settings) -> RemoteStore:
    """Create the remote store selected in settings."""
    if config.remote_backend == "sql":
        return SqlStore()
    return SupabaseStore(
        config.supabase_url,
        config.supabase_key,
        timeout=config.request_timeout,
    )


def build_identity(config: Settings) -> IdentitySource:
    """Identity source seeded from settings (signed out if no user_id)."""
    if not config.user_id:
        return IdentitySource()
    return IdentitySource(Identity(config.user_id, config.access_token or None))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    if settings.remote_backend == "sql":
        await init_db()

    tracker = Tracker(build_store(settings), build_identity(settings))
    await tracker.refresh()
    app.state.tracker = tracker
    logger.info("Tracker ready (backend=%s, loaded=%s)", settings.remote_backend, tracker.loaded)
    yield
    await tracker.close()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckledger"),
    lifespan=lifespan,
)

app.include_router(decks_router)
app.include_router(formats_router)
app.include_router(health_router)
app.include_router(matches_router)
app.include_router(stats_router)
app.include_router(sync_router)
app.include_router(tournaments_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
