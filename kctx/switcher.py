from typing import Iterable, Iterator, Optional, Tuple

from kctx.errors import ContextNotFound, NoCurrentContext, NoPreviousContext
from kctx.logger import get_logger
from kctx.models import ShellHandoff
from kctx.storage.context_store import ContextStore
from kctx.storage.state_storage import StateStorage

log = get_logger("switcher")

CURRENT_ALIAS = "."


class ContextSwitcher:
    """Switch, swap, rename and delete contexts.

    The context store owns the contexts and the current pointer; the state
    storage only remembers what to swap back to. Nothing here touches the
    process: a switch returns a ``ShellHandoff`` for the caller to run last.
    """

    def __init__(self, store: ContextStore, state_storage: StateStorage):
        self.store = store
        self.state_storage = state_storage

    def _current_or_none(self) -> Optional[str]:
        try:
            return self.store.current_context()
        except NoCurrentContext:
            return None

    def _resolve(self, name: str) -> str:
        """Expand the '.' alias to the current context name"""
        return self.store.current_context() if name == CURRENT_ALIAS else name

    def list_contexts(self) -> Iterator[Tuple[str, bool]]:
        """Yield ``(name, is_current)`` in store order, re-queried on every call"""
        names = self.store.list_contexts()
        current = self._current_or_none()
        for name in names:
            yield name, name == current

    def show_current(self) -> str:
        return self.store.current_context()

    def switch_to(self, name: str) -> ShellHandoff:
        prev = self._current_or_none()
        # validate and read local state before any mutation, so neither an
        # unknown name nor an unreadable state file leaves the store moved
        if not self.store.exists(name):
            raise ContextNotFound(name)
        state = self.state_storage.read()
        self.store.use_context(name)

        self.state_storage.write_current(name, prev, state=state)
        return ShellHandoff(context=name, directory=self.store.namespace_of(name))

    def swap(self) -> ShellHandoff:
        previous = self.state_storage.read().previous_context
        if not previous:
            raise NoPreviousContext()
        return self.switch_to(previous)

    def rename(self, old_name: str, new_name: str) -> str:
        """Rename ``old_name`` (or '.') to ``new_name``; returns the resolved old name"""
        old_name = self._resolve(old_name)
        if not self.store.exists(old_name):
            raise ContextNotFound(old_name)
        if old_name == new_name:
            log.info('context "%s" already has that name', old_name)
            return old_name

        if self.store.exists(new_name):
            log.warning('context "%s" exists, overwriting it.', new_name)
            self.store.delete_context(new_name)
        self.store.rename_context(old_name, new_name)

        state = self.state_storage.read()
        new_state = state.renamed(old_name, new_name)
        if new_state != state:
            self.state_storage.save(new_state)
        return old_name

    def delete_many(self, names: Iterable[str]) -> Iterator[str]:
        """Delete each context in turn, yielding names as they go.

        The first failure aborts the rest of the batch; contexts already
        deleted stay deleted.
        """
        for raw in names:
            name = self._resolve(raw)
            if not self.store.exists(name):
                raise ContextNotFound(name)
            was_current = name == self._current_or_none()
            self.store.delete_context(name)
            if was_current:
                log.warning('you deleted the current context "%s", switch to another one', name)
            yield name

    def unset(self):
        self.store.unset_current()
