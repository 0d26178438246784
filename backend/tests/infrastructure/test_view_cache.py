"""View Cache — keyed payload storage, generation guard, and the ListViewEffects adapter."""

from invoice_desk.core.mutation_result import Redirect
from invoice_desk.infrastructure.view_cache import ListViewEffects, ViewCache

LIST_PATH = "/dashboard/invoices"


def _primed(path: str, payload) -> ViewCache:
    cache = ViewCache()
    assert cache.put(path, payload, cache.generation(path))
    return cache


def test_get_returns_none_when_empty():
    assert ViewCache().get(LIST_PATH) is None


def test_put_with_current_generation_stores():
    cache = _primed(LIST_PATH, {"invoices": []})
    assert cache.get(LIST_PATH) == {"invoices": []}


def test_invalidate_drops_only_that_path():
    cache = _primed(LIST_PATH, {"invoices": []})
    cache.put("/dashboard/customers", {"customers": []}, 0)

    cache.invalidate(LIST_PATH)

    assert cache.get(LIST_PATH) is None
    assert cache.get("/dashboard/customers") == {"customers": []}


def test_invalidate_missing_path_is_noop():
    ViewCache().invalidate("/nothing/here")


def test_rebuild_started_before_invalidate_is_discarded():
    cache = ViewCache()
    before_query = cache.generation(LIST_PATH)

    # mutation commits and invalidates while the rebuild is still querying
    cache.invalidate(LIST_PATH)

    assert cache.put(LIST_PATH, ["stale row"], before_query) is False
    assert cache.get(LIST_PATH) is None


def test_rebuild_after_invalidate_is_stored():
    cache = ViewCache()
    cache.invalidate(LIST_PATH)

    fresh = cache.generation(LIST_PATH)
    assert cache.put(LIST_PATH, ["fresh row"], fresh) is True
    assert cache.get(LIST_PATH) == ["fresh row"]


def test_generation_is_per_path():
    cache = ViewCache()
    other = cache.generation("/dashboard/customers")

    cache.invalidate(LIST_PATH)

    assert cache.put("/dashboard/customers", [], other) is True


def test_list_view_effects():
    cache = _primed(LIST_PATH, ["row"])
    effects = ListViewEffects(cache)

    effects.invalidate(LIST_PATH)
    assert cache.get(LIST_PATH) is None
    assert effects.navigate(LIST_PATH) == Redirect(LIST_PATH)
