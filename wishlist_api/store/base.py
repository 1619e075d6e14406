"""
Document store interface
Documents are addressed by hierarchical keys: collection/id/collection/id
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DocumentSnapshot:
    """Result of reading a single document"""
    exists: bool
    data: Optional[Dict[str, Any]] = None


def document_key(*segments: str) -> str:
    """Join path segments into a document key"""
    if len(segments) % 2:
        raise ValueError("A document key needs an even number of segments")
    return "/".join(segments)


class DocumentStore(ABC):
    """Per-key document storage used by the wishlist service"""

    @abstractmethod
    async def get(self, key: str) -> DocumentSnapshot:
        """Read the document at key"""

    @abstractmethod
    async def set(self, key: str, data: Dict[str, Any]) -> None:
        """Create or replace the document at key"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete the document at key, no-op if absent"""

    @abstractmethod
    async def list_ids(self, collection_key: str) -> List[str]:
        """Ids of the documents directly under a collection"""

    @abstractmethod
    async def toggle_atomic(self, key: str, data: Dict[str, Any]) -> bool:
        """
        Flip existence of the document at key in one transaction.
        Returns True if the document exists afterwards.
        """
