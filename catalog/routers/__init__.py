"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

WHY Routers?
============
1. Organization: Group related endpoints together
2. Modularity: Each router can have its own prefix, tags, dependencies
3. Maintainability: Easy to find and modify endpoint code

Router Structure:
- auth.py: /api/v1/auth/* endpoints (registration, login, password change)
- books.py: /api/v1/books/* endpoints (token required)

Each router is imported and registered in main.py.
"""

from catalog.routers.auth import router as auth_router
from catalog.routers.books import router as books_router

__all__ = [
    "auth_router",
    "books_router",
]
