"""Effect Dispatcher — cache invalidation and navigation after a persisted mutation.

Invariants:
    - Only called after the executor reports success
    - Every mutation invalidates the list path exactly once
    - Create/Update then navigate to the list path (Redirect, terminal)
    - Delete never navigates: it is invoked from the list view itself
"""

from invoice_desk.core.domain_types import MutationKind
from invoice_desk.core.mutation_result import Redirect, Succeeded
from invoice_desk.core.repository_protocols import ViewEffects


class EffectDispatcher:
    def __init__(self, effects: ViewEffects, list_path: str):
        self._effects = effects
        self._list_path = list_path

    def on_success(self, kind: MutationKind) -> Redirect | Succeeded:
        self._effects.invalidate(self._list_path)
        if kind == MutationKind.DELETE:
            return Succeeded(kind=kind)
        return self._effects.navigate(self._list_path)
