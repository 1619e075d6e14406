import os
from collections.abc import Generator
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

# Settings are read on first import; keep tests off Firebase and the limiter
os.environ["STORE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from wishlist_api.core.security import CallerIdentity, IdentityProvider, get_identity_provider
from wishlist_api.main import app
from wishlist_api.store import InMemoryDocumentStore, get_document_store


class FakeIdentityProvider(IdentityProvider):
    """Maps fixed tokens to user ids"""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens

    async def resolve(self, token: str) -> Optional[CallerIdentity]:
        uid = self.tokens.get(token)
        if uid is None:
            return None
        return CallerIdentity(uid=uid)


class CountingStore(InMemoryDocumentStore):
    """In-memory store that records every call"""

    def __init__(self):
        super().__init__()
        self.calls = []

    async def get(self, key):
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key, data):
        self.calls.append(("set", key))
        await super().set(key, data)

    async def delete(self, key):
        self.calls.append(("delete", key))
        await super().delete(key)

    async def list_ids(self, collection_key):
        self.calls.append(("list_ids", collection_key))
        return await super().list_ids(collection_key)

    async def toggle_atomic(self, key, data):
        self.calls.append(("toggle_atomic", key))
        return await super().toggle_atomic(key, data)


ALICE_TOKEN = "token-alice"
BOB_TOKEN = "token-bob"


@pytest.fixture(scope="module")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider({ALICE_TOKEN: "alice", BOB_TOKEN: "bob"})


@pytest.fixture
def client(store: CountingStore, identity_provider: FakeIdentityProvider) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    test_client.close()
    app.dependency_overrides.clear()


def auth_headers(token: str = ALICE_TOKEN) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
