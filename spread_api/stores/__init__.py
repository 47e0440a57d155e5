"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, cache-store repository, ORM operations
- Redis: short-lived response caching with TTL policies

No business/ranking logic in stores - that belongs in services.
"""
