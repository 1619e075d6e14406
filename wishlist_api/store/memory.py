"""In-process document store for local development and tests"""

import asyncio
import copy
from typing import Any, Dict, List

from .base import DocumentSnapshot, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """
    Dictionary-backed store.

    Every call yields to the event loop once, the way a network round trip
    would, so interleavings between concurrent requests are observable.
    Mutations are serialized by a single store-wide lock; reads are not.
    """

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> DocumentSnapshot:
        await asyncio.sleep(0)
        data = self.documents.get(key)
        if data is None:
            return DocumentSnapshot(exists=False)
        return DocumentSnapshot(exists=True, data=copy.deepcopy(data))

    async def set(self, key: str, data: Dict[str, Any]) -> None:
        async with self._lock:
            await asyncio.sleep(0)
            self.documents[key] = copy.deepcopy(data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            await asyncio.sleep(0)
            self.documents.pop(key, None)

    async def list_ids(self, collection_key: str) -> List[str]:
        await asyncio.sleep(0)
        prefix = collection_key.rstrip("/") + "/"
        return sorted(
            key[len(prefix):]
            for key in self.documents
            if key.startswith(prefix) and "/" not in key[len(prefix):]
        )

    async def toggle_atomic(self, key: str, data: Dict[str, Any]) -> bool:
        async with self._lock:
            await asyncio.sleep(0)
            if key in self.documents:
                del self.documents[key]
                return False
            self.documents[key] = copy.deepcopy(data)
            return True
