"""
Presentation Layer - API endpoints and request/response handling.

This layer contains:
- api/: FastAPI routers for the JSON API (mounted under /api)
- pages.py: minimal HTML page routes gated by the access guard
- dependencies/: FastAPI dependencies resolving the caller's identity
- cookies.py: the session cookie contract
"""
