"""Cloud Firestore backed document store"""

import logging
from typing import Any, Dict, List

from google.cloud import firestore

from .base import DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Document store over the async Firestore client"""

    def __init__(self, client):
        self.client = client

    async def get(self, key: str) -> DocumentSnapshot:
        snapshot = await self.client.document(key).get()
        if not snapshot.exists:
            return DocumentSnapshot(exists=False)
        return DocumentSnapshot(exists=True, data=snapshot.to_dict())

    async def set(self, key: str, data: Dict[str, Any]) -> None:
        await self.client.document(key).set(data)

    async def delete(self, key: str) -> None:
        await self.client.document(key).delete()

    async def list_ids(self, collection_key: str) -> List[str]:
        ids = []
        async for snapshot in self.client.collection(collection_key).stream():
            ids.append(snapshot.id)
        return sorted(ids)

    async def toggle_atomic(self, key: str, data: Dict[str, Any]) -> bool:
        ref = self.client.document(key)

        @firestore.async_transactional
        async def flip(transaction) -> bool:
            snapshot = await ref.get(transaction=transaction)
            if snapshot.exists:
                transaction.delete(ref)
                return False
            transaction.set(ref, data)
            return True

        # Retried by the client library when the transaction contends
        return await flip(self.client.transaction())
