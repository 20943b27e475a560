from typing import Dict, List, Optional

from kctx.errors import ContextNotFound, NoCurrentContext, StoreCommandError
from kctx.models import Context
from kctx.storage.context_store import ContextStore


class MemoryContextStore(ContextStore):
    """In-memory kubeconfig: contexts plus the cluster/user tables they reference"""

    def __init__(self, contexts: List[Context] = None, current: Optional[str] = None):
        # dicts keep insertion order, which is the store order
        self.contexts: Dict[str, Context] = {c.name: c for c in contexts or []}
        self.clusters: Dict[str, dict] = {c.cluster: {} for c in self.contexts.values() if c.cluster}
        self.users: Dict[str, dict] = {c.user: {} for c in self.contexts.values() if c.user}
        self.current: Optional[str] = current

    def _require(self, name: str) -> Context:
        if name not in self.contexts:
            raise ContextNotFound(name)
        return self.contexts[name]

    def list_contexts(self) -> List[str]:
        return list(self.contexts)

    def current_context(self) -> str:
        if not self.current:
            raise NoCurrentContext()
        return self.current

    def use_context(self, name: str):
        self._require(name)
        self.current = name

    def namespace_of(self, name: str) -> str:
        return self._require(name).namespace

    def rename_context(self, old_name: str, new_name: str):
        context = self._require(old_name)
        if new_name in self.contexts:
            raise StoreCommandError(f'cannot rename the context "{old_name}", the context "{new_name}" already exists')
        context.name = new_name
        # rebuild to keep the renamed entry in its original position
        self.contexts = {(new_name if k == old_name else k): v for k, v in self.contexts.items()}
        if self.current == old_name:
            self.current = new_name

    def delete_context(self, name: str):
        # the referenced cluster and user entries are left alone
        self._require(name)
        del self.contexts[name]

    def unset_current(self):
        self.current = None
