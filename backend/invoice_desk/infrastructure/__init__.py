"""Infrastructure Layer — database access, logging, and the view cache.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database calls wrapped with rollback and error mapping

Design Decisions:
    - Thin wrappers over raw clients, each with a single responsibility
"""
