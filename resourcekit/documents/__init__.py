"""JSON-backed typed documents."""

from resourcekit.documents.codec import JsonDocumentCodec
from resourcekit.documents.filesystem import LocalFileSystem
from resourcekit.documents.store import DocumentStore

__all__ = ["DocumentStore", "JsonDocumentCodec", "LocalFileSystem"]
