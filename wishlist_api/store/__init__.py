"""Document store backends"""

from functools import lru_cache
import logging

from wishlist_api.core.config import settings
from .base import DocumentSnapshot, DocumentStore, document_key
from .memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)

@lru_cache()
def get_document_store() -> DocumentStore:
    """Build the configured store once per process"""
    if settings.STORE_BACKEND == "memory":
        logger.warning("Using in-memory document store, data is not persisted")
        return InMemoryDocumentStore()

    if settings.STORE_BACKEND == "firestore":
        from wishlist_api.core.firebase import get_firestore_client
        from .firestore import FirestoreDocumentStore
        return FirestoreDocumentStore(get_firestore_client())

    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")

__all__ = [
    "DocumentSnapshot",
    "DocumentStore",
    "InMemoryDocumentStore",
    "document_key",
    "get_document_store",
]
