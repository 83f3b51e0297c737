"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON except the plain-text liveness probe

Design Decisions:
    - Thin routes delegate to repositories and services
"""
