"""Core business logic layer.

Modules:
- reports: search, low-stock and expiry filters plus sort keys for grocery views
"""
__all__ = ["reports"]
