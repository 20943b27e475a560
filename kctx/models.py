from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass
class Context:
    """Context entry as held by a context store"""
    name: str
    cluster: str = ""
    user: str = ""
    namespace: str = ""


@dataclass(frozen=True)
class LocalState:
    """The two pointers kctx persists on top of kubeconfig"""
    current_context: Optional[str] = None
    previous_context: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert state to dictionary for JSON serialization"""
        return {
            'current_context': self.current_context,
            'previous_context': self.previous_context
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create state from dictionary (unknown keys are ignored)"""
        return cls(
            current_context=data.get('current_context') or None,
            previous_context=data.get('previous_context') or None,
        )

    def switched(self, prev: Optional[str], name: str) -> "LocalState":
        """Return the state after switching from ``prev`` to ``name``"""
        previous = self.previous_context
        if prev and prev != name:
            previous = prev
        return replace(self, current_context=name, previous_context=previous)

    def renamed(self, old: str, new: str) -> "LocalState":
        """Return the state with references to ``old`` pointing at ``new``"""
        return LocalState(
            current_context=new if self.current_context == old else self.current_context,
            previous_context=new if self.previous_context == old else self.previous_context,
        )


@dataclass(frozen=True)
class ShellHandoff:
    """Terminal action of a switch: enter ``directory`` and exec a shell"""
    context: str
    directory: str = ""


# Commands parsed from the argument vector

@dataclass(frozen=True)
class ListContexts:
    pass


@dataclass(frozen=True)
class SelectInteractively:
    pass


@dataclass(frozen=True)
class SwitchTo:
    name: str


@dataclass(frozen=True)
class Swap:
    pass


@dataclass(frozen=True)
class ShowCurrent:
    pass


@dataclass(frozen=True)
class Unset:
    pass


@dataclass(frozen=True)
class DeleteMany:
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Rename:
    old_name: str
    new_name: str
