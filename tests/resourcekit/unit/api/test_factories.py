from __future__ import annotations

from pathlib import Path

import resourcekit
from resourcekit.api import MediaType, OperationState, create_document_store, create_media_resource
from resourcekit.documents.store import DocumentStore
from resourcekit.media.loader import MediaResource
from resourcekit.runtime.scheduler import CoroutineScheduler


def test_create_media_resource_performs_no_io() -> None:
    resource = create_media_resource("https://example.com/a.mp3", is_remote=True)

    assert isinstance(resource, MediaResource)
    assert resource.handle is None
    assert resource.media_type is MediaType.MPEG


def test_create_document_store_binds_location_and_type(tmp_path: Path) -> None:
    store = create_document_store(tmp_path / "save.json", dict)

    assert isinstance(store, DocumentStore)
    assert store.location == tmp_path / "save.json"
    assert store.value_type is dict
    assert store.value is None
    assert not (tmp_path / "save.json").exists()


def test_package_exports_scheduler_factory() -> None:
    assert isinstance(resourcekit.create_scheduler(), CoroutineScheduler)
    assert OperationState.IDLE is not OperationState.COMPLETED
