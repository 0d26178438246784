"""View Cache — in-process cache of rendered list views, keyed by logical path.

Invariants:
    - invalidate(path) drops the entry; the next read re-queries the database
    - A rebuild started before an invalidate never lands in the cache
    - Entries are whole payloads, never patched in place
    - ListViewEffects is the only writer reachable from the mutation pipeline

Design Decisions:
    - Module-level view_cache: deliberate process-wide state
      (ADR: single-process uvicorn; a multi-worker deploy needs a shared cache)
    - navigate() builds a Redirect, the route turns it into a 303
"""

import logging
from typing import Any

from invoice_desk.core.mutation_result import Redirect

logger = logging.getLogger(__name__)


class ViewCache:
    """Logical path -> cached payload, guarded by a per-path generation.

    A rebuild snapshots generation() before querying and hands it to put();
    an invalidate() landing in between bumps the generation and the stale
    payload is dropped instead of stored.
    """

    def __init__(self):
        self._entries: dict[str, Any] = {}
        self._generations: dict[str, int] = {}

    def get(self, logical_path: str) -> Any | None:
        return self._entries.get(logical_path)

    def generation(self, logical_path: str) -> int:
        return self._generations.get(logical_path, 0)

    def put(self, logical_path: str, payload: Any, generation: int) -> bool:
        """Store payload if no invalidation happened since `generation`."""
        if generation != self.generation(logical_path):
            logger.info(
                f"Stale view rebuild discarded: {logical_path}",
                extra={"path": logical_path},
            )
            return False
        self._entries[logical_path] = payload
        return True

    def invalidate(self, logical_path: str) -> None:
        self._generations[logical_path] = self.generation(logical_path) + 1
        self._entries.pop(logical_path, None)
        logger.info(f"View cache invalidated: {logical_path}", extra={"path": logical_path})

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()


class ListViewEffects:
    """ViewEffects implementation over a ViewCache."""

    def __init__(self, cache: ViewCache):
        self._cache = cache

    def invalidate(self, logical_path: str) -> None:
        self._cache.invalidate(logical_path)

    def navigate(self, logical_path: str) -> Redirect:
        return Redirect(location=logical_path)


view_cache = ViewCache()
