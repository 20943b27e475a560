import logging
from unittest.mock import patch

import pytest

from kctx.errors import ContextNotFound, NoCurrentContext, NoPreviousContext, StateReadError
from kctx.models import LocalState, ShellHandoff
from kctx.storage.state_storage import StateStorage
from kctx.switcher import ContextSwitcher


def names(switcher):
    return [name for name, _ in switcher.list_contexts()]


def test_list_marks_current(switcher):
    """Listing keeps store order and flags the active context"""
    assert list(switcher.list_contexts()) == [("dev", True), ("staging", False), ("prod", False)]


def test_list_is_stable(switcher):
    """Two listings without mutation are identical"""
    assert list(switcher.list_contexts()) == list(switcher.list_contexts())


def test_list_requeries_store(switcher, store):
    """Listing is not cached between calls"""
    assert names(switcher) == ["dev", "staging", "prod"]
    store.delete_context("prod")
    assert names(switcher) == ["dev", "staging"]


def test_list_without_current(switcher, store):
    """No highlighted entry when the current pointer is unset"""
    store.unset_current()
    assert all(not is_current for _, is_current in switcher.list_contexts())


def test_show_current(switcher, store):
    assert switcher.show_current() == "dev"
    store.unset_current()
    with pytest.raises(NoCurrentContext):
        switcher.show_current()


def test_switch_records_previous(switcher, store, state_storage):
    """Switching moves the store pointer and remembers where we came from"""
    handoff = switcher.switch_to("staging")
    assert store.current == "staging"
    assert handoff == ShellHandoff(context="staging", directory="/srv/staging")
    assert state_storage.read() == LocalState(current_context="staging", previous_context="dev")


def test_switch_unknown_context(switcher, store, state_storage):
    """Unknown names fail before anything is mutated"""
    with pytest.raises(ContextNotFound):
        switcher.switch_to("nope")
    assert store.current == "dev"
    assert not state_storage.storage_path.exists()


def test_switch_to_current_keeps_previous(switcher, state_storage):
    """Re-switching to the active context does not alter previous"""
    switcher.switch_to("staging")
    switcher.switch_to("staging")
    assert state_storage.read().previous_context == "dev"


def test_switch_without_current_pointer(switcher, store, state_storage):
    """An unset pointer leaves the previous slot untouched"""
    switcher.switch_to("staging")
    store.unset_current()
    switcher.switch_to("prod")
    assert state_storage.read() == LocalState(current_context="prod", previous_context="dev")


def test_switch_empty_namespace(switcher):
    """A context without a namespace hands off with an empty directory"""
    assert switcher.switch_to("prod").directory == ""


def test_swap_toggles(switcher, store):
    """switch then swap returns, swap again goes back"""
    switcher.switch_to("staging")
    switcher.swap()
    assert store.current == "dev"
    switcher.swap()
    assert store.current == "staging"
    switcher.swap()
    assert store.current == "dev"


def test_swap_without_previous(switcher, store):
    with pytest.raises(NoPreviousContext):
        switcher.swap()
    assert store.current == "dev"


def test_unset_keeps_previous(switcher, store):
    """Swap still works after the pointer is unset"""
    switcher.switch_to("staging")
    switcher.unset()
    with pytest.raises(NoCurrentContext):
        store.current_context()
    switcher.swap()
    assert store.current == "dev"


def test_rename_moves_current_pointer(switcher, store):
    """Renaming the active context keeps it active under the new name"""
    switcher.rename("dev", "development")
    assert store.current_context() == "development"
    assert names(switcher) == ["development", "staging", "prod"]


def test_rename_dot_alias(switcher, store):
    assert switcher.rename(".", "local") == "dev"
    assert store.current_context() == "local"


def test_rename_unknown(switcher):
    with pytest.raises(ContextNotFound):
        switcher.rename("nope", "other")


def test_rename_collision_overwrites(switcher, store, caplog):
    """Renaming onto an existing name deletes that entry first"""
    staging = store.contexts["staging"]
    with caplog.at_level(logging.WARNING, logger="kctx"):
        switcher.rename("staging", "prod")
    assert names(switcher) == ["dev", "prod"]
    assert store.contexts["prod"] is staging
    assert "overwriting" in caplog.text


def test_rename_same_name_is_noop(switcher, store):
    switcher.rename("staging", "staging")
    assert names(switcher) == ["dev", "staging", "prod"]


def test_rename_updates_local_state(switcher, state_storage):
    """Swap follows a renamed previous context"""
    switcher.switch_to("staging")
    switcher.rename("dev", "development")
    assert state_storage.read().previous_context == "development"
    assert switcher.swap().context == "development"


def test_delete_many(switcher, store):
    assert list(switcher.delete_many(["staging", "prod"])) == ["staging", "prod"]
    assert names(switcher) == ["dev"]


def test_delete_keeps_credentials(switcher, store):
    """Cluster and user entries survive deletion of the context"""
    clusters, users = dict(store.clusters), dict(store.users)
    list(switcher.delete_many(["dev"]))
    assert store.clusters == clusters
    assert store.users == users


def test_delete_mixed_dot_and_names(switcher, store, caplog):
    """'.' resolves to the current context per item"""
    with caplog.at_level(logging.WARNING, logger="kctx"):
        deleted = list(switcher.delete_many(["staging", "."]))
    assert deleted == ["staging", "dev"]
    assert names(switcher) == ["prod"]
    assert "current context" in caplog.text


def test_delete_fails_fast(switcher, store):
    """The batch stops at the first unknown name; earlier deletions stay"""
    with pytest.raises(ContextNotFound):
        list(switcher.delete_many(["staging", "nope", "prod"]))
    assert names(switcher) == ["dev", "prod"]


def test_scenario(switcher, store, state_storage):
    """dev/staging/prod walk-through with a stale previous pointer"""
    switcher.switch_to("staging")
    assert state_storage.read() == LocalState("staging", "dev")
    switcher.swap()
    assert state_storage.read() == LocalState("dev", "staging")
    switcher.rename("prod", "production")
    assert names(switcher) == ["dev", "staging", "production"]
    list(switcher.delete_many(["staging"]))
    assert names(switcher) == ["dev", "production"]

    # previous still names the deleted entry
    with pytest.raises(ContextNotFound):
        switcher.swap()
    assert store.current == "dev"


def test_switch_with_unreadable_state(store, tmp_path):
    """A broken state path aborts the switch before the store moves"""
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a dir")
    switcher = ContextSwitcher(store, StateStorage(blocker / "state.json"))
    with pytest.raises(StateReadError):
        switcher.switch_to("staging")
    assert store.current == "dev"


def test_switch_uses_write_current(switcher, state_storage):
    """The recorded previous comes from the store pointer"""
    with patch.object(state_storage, "write_current", wraps=state_storage.write_current) as mock_write:
        switcher.switch_to("staging")
    assert mock_write.call_args[0][:2] == ("staging", "dev")
