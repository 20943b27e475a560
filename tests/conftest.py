import pytest

from kctx.models import Context
from kctx.storage.memory_store import MemoryContextStore
from kctx.storage.state_storage import StateStorage
from kctx.switcher import ContextSwitcher


@pytest.fixture
def store():
    """Store with dev/staging/prod, dev active"""
    return MemoryContextStore(
        [
            Context("dev", cluster="dev-cluster", user="dev-user", namespace="/srv/dev"),
            Context("staging", cluster="shared", user="ops", namespace="/srv/staging"),
            Context("prod", cluster="shared", user="ops", namespace=""),
        ],
        current="dev",
    )


@pytest.fixture
def state_storage(tmp_path):
    """State storage in a temporary cache dir"""
    return StateStorage(tmp_path / "cache" / "state.json")


@pytest.fixture
def switcher(store, state_storage):
    return ContextSwitcher(store, state_storage)
