"""Cooperative loading of audio assets and JSON-backed typed documents."""

from resourcekit.api.documents import create_document_store
from resourcekit.api.media import create_media_resource
from resourcekit.api.operations import create_scheduler

__all__ = ["create_document_store", "create_media_resource", "create_scheduler"]
