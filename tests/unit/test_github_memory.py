"""Unit tests for the in-memory label store."""

import pytest

from github_label_manager.github.memory import InMemoryLabelStore, LabelStoreError
from github_label_manager.schemas.labels import RemoteLabel


@pytest.mark.asyncio
async def test_create_and_get() -> None:
    """Test creating a label and reading it back."""
    store = InMemoryLabelStore()
    created = await store.create_label("bug", color="#D73A4A", description="Bug report")
    assert created == RemoteLabel(name="bug", color="d73a4a", description="Bug report")
    assert await store.get_label("bug") == created
    assert await store.get_label("missing") is None


@pytest.mark.asyncio
async def test_create_duplicate_is_rejected() -> None:
    """Test that creating an existing label fails like the API does."""
    store = InMemoryLabelStore([RemoteLabel("bug", "d73a4a")])
    with pytest.raises(LabelStoreError) as exc_info:
        await store.create_label("bug")
    assert exc_info.value.status == 422


@pytest.mark.asyncio
async def test_update_renames_label() -> None:
    """Test that update with new_name moves the label."""
    store = InMemoryLabelStore([RemoteLabel("enhancement", "a2eeef", "Feature")])
    updated = await store.update_label("enhancement", new_name="feature")
    assert updated == RemoteLabel("feature", "a2eeef", "Feature")
    assert list(store.labels) == ["feature"]


@pytest.mark.asyncio
async def test_update_rename_onto_existing_name_is_rejected() -> None:
    """Test that renaming onto an existing label fails."""
    store = InMemoryLabelStore([RemoteLabel("a", "ededed"), RemoteLabel("b", "ededed")])
    with pytest.raises(LabelStoreError) as exc_info:
        await store.update_label("a", new_name="b")
    assert exc_info.value.status == 422


@pytest.mark.asyncio
async def test_missing_targets_raise_not_found() -> None:
    """Test that updating or deleting a missing label fails with 404."""
    store = InMemoryLabelStore()
    for call in (store.update_label("missing", color="ffffff"), store.delete_label("missing")):
        with pytest.raises(LabelStoreError) as exc_info:
            await call
        assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_injected_failure_for_one_name() -> None:
    """Test that failures can be restricted to a single label."""
    store = InMemoryLabelStore([RemoteLabel("a", "ededed"), RemoteLabel("b", "ededed")])
    store.fail("delete_label", LabelStoreError("Forbidden", status=403), name="a")

    with pytest.raises(LabelStoreError):
        await store.delete_label("a")
    await store.delete_label("b")

    assert list(store.labels) == ["a"]
    assert [call.args for call in store.mutation_calls] == [("a",), ("b",)]


@pytest.mark.asyncio
async def test_dry_run_returns_none_and_keeps_state() -> None:
    """Test that a dry-run store accepts mutations without applying them."""
    store = InMemoryLabelStore([RemoteLabel("bug", "d73a4a")], dry_run=True)
    assert await store.create_label("feature") is None
    assert await store.update_label("bug", color="000000") is None
    assert await store.delete_label("bug") is None
    assert store.labels == {"bug": RemoteLabel("bug", "d73a4a")}
    assert len(store.mutation_calls) == 3
