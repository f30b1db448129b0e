"""API routers package.

This package contains all API routers organized into logical subpackages:
- tv: TV metadata provider routes (provider definition, metadata, matches)
- instance: Instance routes (health)
"""

# Note: Routers are imported directly in api/app.py to avoid circular imports
# This package serves as documentation and provides a clean namespace

__all__ = [
    "tv",
    "instance",
]
