import asyncio

import pytest

from conftest import CountingStore
from wishlist_api.core.exceptions import InvalidArgumentException, UnauthenticatedException
from wishlist_api.core.security import CallerIdentity
from wishlist_api.services.wishlist_service import WishlistService

pytestmark = pytest.mark.anyio

ALICE = CallerIdentity(uid="alice")
BOB = CallerIdentity(uid="bob")


@pytest.fixture
def service(store: CountingStore) -> WishlistService:
    return WishlistService(store)


def test_entry_key_uses_user_and_product(service: WishlistService) -> None:
    assert service.entry_key("alice", "ring-1") == "users/alice/wishlist/ring-1"
    assert service.collection_key("alice") == "users/alice/wishlist"


def test_custom_collection_names(store: CountingStore) -> None:
    service = WishlistService(store, users_collection="customers", wishlist_collection="saved")
    assert service.entry_key("alice", "ring-1") == "customers/alice/saved/ring-1"


async def test_add_writes_product_document(service: WishlistService, store: CountingStore) -> None:
    result = await service.add(ALICE, {"productId": "ring-1"})

    assert result.model_dump(by_alias=True) == {"success": True, "productId": "ring-1"}
    assert store.documents == {"users/alice/wishlist/ring-1": {"productId": "ring-1"}}
    # No read before write
    assert store.calls == [("set", "users/alice/wishlist/ring-1")]


async def test_add_is_idempotent(service: WishlistService, store: CountingStore) -> None:
    first = await service.add(ALICE, {"productId": "ring-1"})
    after_first = dict(store.documents)
    second = await service.add(ALICE, {"productId": "ring-1"})

    assert first == second
    assert store.documents == after_first


async def test_add_then_remove_leaves_nothing(service: WishlistService, store: CountingStore) -> None:
    await service.add(ALICE, {"productId": "ring-1"})
    result = await service.remove(ALICE, {"productId": "ring-1"})

    assert result.model_dump(by_alias=True) == {"success": True, "productId": "ring-1"}
    assert "users/alice/wishlist/ring-1" not in store.documents


async def test_remove_absent_entry_succeeds(service: WishlistService, store: CountingStore) -> None:
    result = await service.remove(ALICE, {"productId": "never-added"})

    assert result.model_dump(by_alias=True) == {"success": True, "productId": "never-added"}
    assert store.documents == {}


async def test_toggle_adds_then_removes(service: WishlistService, store: CountingStore) -> None:
    first = await service.toggle(ALICE, {"productId": "ring-1"})
    assert first.model_dump(by_alias=True) == {"success": True, "inWishlist": True}
    assert store.documents["users/alice/wishlist/ring-1"] == {"productId": "ring-1"}

    second = await service.toggle(ALICE, {"productId": "ring-1"})
    assert second.model_dump(by_alias=True) == {"success": True, "inWishlist": False}
    assert store.documents == {}


async def test_toggle_reads_before_writing(service: WishlistService, store: CountingStore) -> None:
    await service.toggle(ALICE, {"productId": "ring-1"})
    assert store.calls == [
        ("get", "users/alice/wishlist/ring-1"),
        ("set", "users/alice/wishlist/ring-1"),
    ]


async def test_users_do_not_share_entries(service: WishlistService, store: CountingStore) -> None:
    await service.add(ALICE, {"productId": "ring-1"})
    result = await service.toggle(BOB, {"productId": "ring-1"})

    assert result.in_wishlist is True
    assert set(store.documents) == {
        "users/alice/wishlist/ring-1",
        "users/bob/wishlist/ring-1",
    }


async def test_user_id_in_data_is_ignored(service: WishlistService, store: CountingStore) -> None:
    await service.add(ALICE, {"productId": "ring-1", "userId": "bob", "uid": "bob"})
    assert list(store.documents) == ["users/alice/wishlist/ring-1"]


@pytest.mark.parametrize("operation", ["add", "remove", "toggle"])
@pytest.mark.parametrize(
    "data",
    [
        None,
        {},
        {"productId": None},
        {"productId": ""},
        {"productId": 42},
        {"productId": ["ring-1"]},
        {"productId": True},
        "ring-1",
    ],
)
async def test_invalid_product_id_never_reaches_store(
    service: WishlistService, store: CountingStore, operation: str, data
) -> None:
    with pytest.raises(InvalidArgumentException) as exc_info:
        await getattr(service, operation)(ALICE, data)

    assert exc_info.value.status_code == 400
    assert exc_info.value.error_status == "INVALID_ARGUMENT"
    assert store.calls == []


@pytest.mark.parametrize("product_id", ["a/b", "../bob", ".", "..", "__name__", "x" * 1501])
async def test_product_id_must_be_single_document_id(
    service: WishlistService, store: CountingStore, product_id: str
) -> None:
    with pytest.raises(InvalidArgumentException):
        await service.add(ALICE, {"productId": product_id})
    assert store.calls == []


async def test_invalid_argument_messages(service: WishlistService) -> None:
    with pytest.raises(InvalidArgumentException) as add_error:
        await service.add(ALICE, {})
    with pytest.raises(InvalidArgumentException) as toggle_error:
        await service.toggle(ALICE, {})

    assert add_error.value.detail == "productId is required and must be a string"
    assert toggle_error.value.detail == "productId is required"


@pytest.mark.parametrize(
    "operation, message",
    [
        ("add", "User must be logged in to add to wishlist"),
        ("remove", "User must be logged in to remove from wishlist"),
        ("toggle", "User must be logged in"),
    ],
)
@pytest.mark.parametrize("data", [{"productId": "ring-1"}, {"productId": 42}, None])
async def test_unauthenticated_checked_before_input(
    service: WishlistService, store: CountingStore, operation: str, message: str, data
) -> None:
    with pytest.raises(UnauthenticatedException) as exc_info:
        await getattr(service, operation)(None, data)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == message
    assert store.calls == []


async def test_empty_uid_is_unauthenticated(service: WishlistService, store: CountingStore) -> None:
    with pytest.raises(UnauthenticatedException):
        await service.add(CallerIdentity(uid=""), {"productId": "ring-1"})
    assert store.calls == []


async def test_list_returns_only_callers_products(service: WishlistService) -> None:
    await service.add(ALICE, {"productId": "ring-2"})
    await service.add(ALICE, {"productId": "ring-1"})
    await service.add(BOB, {"productId": "pendant-9"})

    result = await service.list_product_ids(ALICE)

    assert result.model_dump(by_alias=True) == {
        "success": True,
        "productIds": ["ring-1", "ring-2"],
    }


async def test_list_requires_caller(service: WishlistService, store: CountingStore) -> None:
    with pytest.raises(UnauthenticatedException):
        await service.list_product_ids(None)
    assert store.calls == []


async def test_concurrent_toggles_race_without_atomic_mode(store: CountingStore) -> None:
    service = WishlistService(store, atomic_toggle=False)

    # Both reads complete before either write lands
    first, second = await asyncio.gather(
        service.toggle(ALICE, {"productId": "ring-1"}),
        service.toggle(ALICE, {"productId": "ring-1"}),
    )

    assert first.in_wishlist is True
    assert second.in_wishlist is True
    assert "users/alice/wishlist/ring-1" in store.documents


async def test_concurrent_toggles_flip_once_each_in_atomic_mode(store: CountingStore) -> None:
    service = WishlistService(store, atomic_toggle=True)

    results = await asyncio.gather(
        service.toggle(ALICE, {"productId": "ring-1"}),
        service.toggle(ALICE, {"productId": "ring-1"}),
    )

    assert sorted(r.in_wishlist for r in results) == [False, True]
    assert store.documents == {}
    assert [call[0] for call in store.calls] == ["toggle_atomic", "toggle_atomic"]


async def test_store_failure_propagates(store: CountingStore) -> None:
    class BrokenStore(CountingStore):
        async def set(self, key, data):
            raise ConnectionError("store unavailable")

    service = WishlistService(BrokenStore())
    with pytest.raises(ConnectionError):
        await service.add(ALICE, {"productId": "ring-1"})
