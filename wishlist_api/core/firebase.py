"""Firebase configuration and initialization"""

import firebase_admin
from firebase_admin import credentials, firestore_async
import json
import logging
from typing import Optional

from .config import settings

logger = logging.getLogger(__name__)

firebase_app: Optional[firebase_admin.App] = None

def initialize_firebase() -> firebase_admin.App:
    """Initialize Firebase Admin SDK"""
    global firebase_app

    if firebase_app:
        return firebase_app

    options = {}
    if settings.FIREBASE_PROJECT_ID:
        options["projectId"] = settings.FIREBASE_PROJECT_ID

    # Try to load credentials from environment variable
    if settings.FIREBASE_CREDENTIALS_JSON:
        cred_dict = json.loads(settings.FIREBASE_CREDENTIALS_JSON)
        cred = credentials.Certificate(cred_dict)
    # Or from file path
    elif settings.FIREBASE_CREDENTIALS_PATH:
        cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
    # Project id alone falls back to application default credentials
    elif settings.FIREBASE_PROJECT_ID:
        cred = None
    else:
        raise ValueError("Firebase credentials not configured")

    firebase_app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Firebase Admin SDK initialized successfully")
    return firebase_app

def get_firestore_client():
    """Async Firestore client bound to the application"""
    return firestore_async.client(initialize_firebase())
