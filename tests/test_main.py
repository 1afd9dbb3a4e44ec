"""Tests for application wiring."""

from deckledger.config import Settings
from deckledger.main import build_identity, build_store
from deckledger.remote.sql import SqlStore
from deckledger.remote.supabase import SupabaseStore


class TestBuildStore:
    async def test_supabase_by_default(self) -> None:
        store = build_store(Settings(supabase_url="https://example.supabase.co"))

        assert isinstance(store, SupabaseStore)
        await store.aclose()

    def test_sql(self) -> None:
        assert isinstance(build_store(Settings(remote_backend="sql")), SqlStore)


class TestBuildIdentity:
    def test_signed_out_without_user(self) -> None:
        assert build_identity(Settings(user_id="")).current() is None

    def test_user_and_token(self) -> None:
        identity = build_identity(Settings(user_id="u1", access_token="tok")).current()

        assert identity is not None
        assert identity.user_id == "u1"
        assert identity.access_token == "tok"

    def test_empty_token_is_none(self) -> None:
        identity = build_identity(Settings(user_id="u1", access_token="")).current()

        assert identity is not None
        assert identity.access_token is None
