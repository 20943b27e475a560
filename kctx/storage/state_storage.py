import json
import os
import tempfile
from pathlib import Path

from kctx.errors import StateReadError, StateWriteError
from kctx.logger import get_logger
from kctx.models import LocalState

log = get_logger("state")

# write_current default: take previous from the recorded current pointer
RECORDED = object()


class StateStorage:
    """JSON file holding the current/previous context pointers.

    No cross-process locking: concurrent invocations race and the last
    writer wins. Writes are atomic so a reader never sees a torn record.
    """

    def __init__(self, storage_path: Path):
        self.storage_path = storage_path

    def _read_data(self) -> dict:
        """Read raw data from storage, an empty record if missing or corrupt"""
        try:
            raw = json.loads(self.storage_path.read_text())
            if isinstance(raw, dict):
                return raw
            log.debug("ignoring non-object state in %s", self.storage_path)
        except FileNotFoundError:
            pass
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.debug("ignoring unreadable state in %s: %s", self.storage_path, e)
        except OSError as e:
            raise StateReadError(f"failed to read {self.storage_path}: {e}") from e
        return {}

    def _write_data(self, data: dict):
        """Write to a temp file beside the target, then replace it"""
        parent = self.storage_path.parent
        tmp_name = None
        try:
            parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.storage_path.name}.", dir=parent)
            with os.fdopen(fd, "w") as f:
                f.write(json.dumps(data, indent=2))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.storage_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StateWriteError(f"failed to write {self.storage_path}: {e}") from e

    def read(self) -> LocalState:
        """Load the persisted state (default state if none yet)"""
        return LocalState.from_dict(self._read_data())

    def save(self, state: LocalState):
        """Persist the whole record"""
        log.debug("writing state %s to %s", state, self.storage_path)
        self._write_data(state.to_dict())

    def write_current(self, name: str, prev=RECORDED, state: LocalState = None) -> LocalState:
        """Set the current pointer, remembering ``prev`` as previous.

        ``prev`` defaults to the recorded current pointer; ``None`` means
        there was no active context and previous is left alone. Pass an
        already-read ``state`` to skip the read. Unchanged state is not
        rewritten.
        """
        if state is None:
            state = self.read()
        if prev is RECORDED:
            prev = state.current_context
        new_state = state.switched(prev, name)
        if new_state != state:
            self.save(new_state)
        else:
            log.debug("state unchanged for %s", name)
        return new_state
