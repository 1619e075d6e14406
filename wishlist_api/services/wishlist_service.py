"""
Wishlist service
Maintains one document per (user, product) under users/{uid}/wishlist/{productId}
"""

from typing import Any, Optional
import logging

from wishlist_api.core.config import settings
from wishlist_api.core.exceptions import InvalidArgumentException, UnauthenticatedException
from wishlist_api.core.monitoring import record_operation
from wishlist_api.core.security import CallerIdentity
from wishlist_api.schemas.wishlist import (
    WishlistEntry,
    WishlistListResult,
    WishlistMutationResult,
    WishlistToggleResult,
)
from wishlist_api.store import DocumentStore, document_key
from wishlist_api.utils.validators import validate_product_id

logger = logging.getLogger(__name__)


def require_caller(caller: Optional[CallerIdentity], message: str) -> CallerIdentity:
    """Reject anonymous callers before anything else happens"""
    if caller is None or not caller.uid:
        raise UnauthenticatedException(message)
    return caller


class WishlistService:
    """
    Stateless wishlist operations over a document store.

    The user id always comes from the verified caller, the product id
    always from validated input.
    """

    def __init__(
        self,
        store: DocumentStore,
        users_collection: str = "users",
        wishlist_collection: str = "wishlist",
        atomic_toggle: bool = False
    ):
        self.store = store
        self.users_collection = users_collection
        self.wishlist_collection = wishlist_collection
        self.atomic_toggle = atomic_toggle

    @classmethod
    def from_settings(cls, store: DocumentStore) -> "WishlistService":
        return cls(
            store,
            users_collection=settings.WISHLIST_USERS_COLLECTION,
            wishlist_collection=settings.WISHLIST_COLLECTION,
            atomic_toggle=settings.WISHLIST_ATOMIC_TOGGLE
        )

    def collection_key(self, user_id: str) -> str:
        return f"{self.users_collection}/{user_id}/{self.wishlist_collection}"

    def entry_key(self, user_id: str, product_id: str) -> str:
        return document_key(
            self.users_collection, user_id, self.wishlist_collection, product_id
        )

    def _authorize(
        self,
        operation: str,
        caller: Optional[CallerIdentity],
        data: Any,
        unauthenticated_message: str,
        invalid_message: str
    ) -> tuple[str, str]:
        """Authentication first, then input validation; no store access on failure"""
        try:
            caller = require_caller(caller, unauthenticated_message)
        except UnauthenticatedException:
            record_operation(operation, "unauthenticated")
            raise

        try:
            product_id = validate_product_id(data, invalid_message)
        except InvalidArgumentException:
            record_operation(operation, "invalid_argument")
            logger.info(f"{operation}: invalid productId from user {caller.uid}")
            raise

        return caller.uid, product_id

    async def add(self, caller: Optional[CallerIdentity], data: Any) -> WishlistMutationResult:
        """Create or overwrite the entry; idempotent"""
        user_id, product_id = self._authorize(
            "add",
            caller,
            data,
            "User must be logged in to add to wishlist",
            "productId is required and must be a string"
        )

        entry = WishlistEntry(product_id=product_id)
        try:
            await self.store.set(
                self.entry_key(user_id, product_id), entry.model_dump(by_alias=True)
            )
        except Exception:
            record_operation("add", "error")
            raise

        record_operation("add", "added")
        logger.info(f"Added product {product_id} to wishlist of user {user_id}")
        return WishlistMutationResult(product_id=product_id)

    async def remove(self, caller: Optional[CallerIdentity], data: Any) -> WishlistMutationResult:
        """Delete the entry; deleting an absent entry is not an error"""
        user_id, product_id = self._authorize(
            "remove",
            caller,
            data,
            "User must be logged in to remove from wishlist",
            "productId is required and must be a string"
        )

        try:
            await self.store.delete(self.entry_key(user_id, product_id))
        except Exception:
            record_operation("remove", "error")
            raise

        record_operation("remove", "removed")
        logger.info(f"Removed product {product_id} from wishlist of user {user_id}")
        return WishlistMutationResult(product_id=product_id)

    async def toggle(self, caller: Optional[CallerIdentity], data: Any) -> WishlistToggleResult:
        """
        Flip membership of the product.

        Without atomic_toggle this is a plain read followed by a write or a
        delete. Concurrent toggles of the same key can then both observe the
        same state and both report the same result.
        """
        user_id, product_id = self._authorize(
            "toggle",
            caller,
            data,
            "User must be logged in",
            "productId is required"
        )

        key = self.entry_key(user_id, product_id)
        payload = WishlistEntry(product_id=product_id).model_dump(by_alias=True)

        try:
            if self.atomic_toggle:
                in_wishlist = await self.store.toggle_atomic(key, payload)
            else:
                snapshot = await self.store.get(key)
                if snapshot.exists:
                    await self.store.delete(key)
                    in_wishlist = False
                else:
                    await self.store.set(key, payload)
                    in_wishlist = True
        except Exception:
            record_operation("toggle", "error")
            raise

        record_operation("toggle", "toggled_on" if in_wishlist else "toggled_off")
        logger.info(
            f"Toggled product {product_id} for user {user_id}: "
            f"in_wishlist={in_wishlist}"
        )
        return WishlistToggleResult(in_wishlist=in_wishlist)

    async def list_product_ids(self, caller: Optional[CallerIdentity]) -> WishlistListResult:
        """Product ids currently in the caller's wishlist"""
        try:
            caller = require_caller(caller, "User must be logged in")
        except UnauthenticatedException:
            record_operation("list", "unauthenticated")
            raise

        product_ids = await self.store.list_ids(self.collection_key(caller.uid))
        record_operation("list", "listed")
        logger.info(f"Loaded {len(product_ids)} wishlist ids for user {caller.uid}")
        return WishlistListResult(product_ids=product_ids)
