from deckledger.remote.base import Record, RemoteStore
from deckledger.remote.identity import Identity, IdentityListener, IdentitySource
from deckledger.remote.sql import SqlStore
from deckledger.remote.supabase import SupabaseStore

__all__ = [
    "Identity",
    "IdentityListener",
    "IdentitySource",
    "Record",
    "RemoteStore",
    "SqlStore",
    "SupabaseStore",
]
