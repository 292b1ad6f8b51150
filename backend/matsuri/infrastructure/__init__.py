"""Infrastructure Layer — database sessions, object storage, logging.

Invariants:
    - Every adapter maps its library exceptions to core/errors.py types
    - Core and services never import sqlalchemy or httpx directly
"""
