"""
Caller identity resolution
Verifies Firebase ID tokens sent as bearer credentials
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth

from .config import settings
from .firebase import initialize_firebase

logger = logging.getLogger(__name__)

# Missing or non-bearer credentials resolve to an anonymous caller
bearer_scheme = HTTPBearer(auto_error=False)

@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated principal a request executes for"""
    uid: str
    claims: Dict[str, Any] = field(default_factory=dict)

class IdentityProvider(ABC):
    """Resolves a bearer token into a caller identity, or None"""

    @abstractmethod
    async def resolve(self, token: str) -> Optional[CallerIdentity]:
        ...

class FirebaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Firebase Authentication"""

    def __init__(self, check_revoked: bool = False):
        self.check_revoked = check_revoked

    async def resolve(self, token: str) -> Optional[CallerIdentity]:
        if not token:
            return None

        app = initialize_firebase()
        try:
            # verify_id_token may fetch signing certificates, keep it off the loop
            decoded = await run_in_threadpool(
                auth.verify_id_token,
                token,
                app=app,
                check_revoked=self.check_revoked
            )
        except (
            auth.InvalidIdTokenError,
            auth.UserDisabledError,
            auth.UserNotFoundError,
            ValueError
        ) as e:
            logger.info(f"Rejected ID token: {e}")
            return None

        return CallerIdentity(uid=decoded["uid"], claims=decoded)

@lru_cache()
def get_identity_provider() -> IdentityProvider:
    return FirebaseIdentityProvider(check_revoked=settings.FIREBASE_CHECK_REVOKED)

async def get_caller_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    provider: IdentityProvider = Depends(get_identity_provider)
) -> Optional[CallerIdentity]:
    """
    Resolve the caller for this request
    Returns None for anonymous callers; handlers decide how to reject them
    """
    if credentials is None:
        return None

    caller = await provider.resolve(credentials.credentials)
    if caller:
        # Used as the rate limit key
        request.state.user_id = caller.uid
    return caller
