from deckledger.api.decks import router as decks_router
from deckledger.api.formats import router as formats_router
from deckledger.api.health import router as health_router
from deckledger.api.matches import router as matches_router
from deckledger.api.stats import router as stats_router
from deckledger.api.sync import router as sync_router
from deckledger.api.tournaments import router as tournaments_router

__all__ = [
    "decks_router",
    "formats_router",
    "health_router",
    "matches_router",
    "stats_router",
    "sync_router",
    "tournaments_router",
]
