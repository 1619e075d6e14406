"""Wishlist API: per-user wishlist callables over Cloud Firestore"""

__version__ = "1.0.0"
