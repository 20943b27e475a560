from abc import ABC, abstractmethod
from typing import List


class ContextStore(ABC):
    """Authoritative source of contexts and the current-context pointer.

    Implementations raise ``NoCurrentContext`` when the pointer is unset,
    ``StoreLookupError`` when the store itself cannot be read and
    ``ContextNotFound`` when a named context does not exist.
    """

    @abstractmethod
    def list_contexts(self) -> List[str]:
        """Context names in store order"""

    @abstractmethod
    def current_context(self) -> str:
        """Name the current pointer refers to"""

    @abstractmethod
    def use_context(self, name: str):
        """Point the current pointer at ``name``"""

    @abstractmethod
    def namespace_of(self, name: str) -> str:
        """Namespace/directory value of ``name``, empty if it has none"""

    @abstractmethod
    def rename_context(self, old_name: str, new_name: str):
        pass

    @abstractmethod
    def delete_context(self, name: str):
        pass

    @abstractmethod
    def unset_current(self):
        pass

    def exists(self, name: str) -> bool:
        return name in self.list_contexts()
