"""Public document-store API contracts."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from resourcekit.documents.store import DocumentStore

TValue = TypeVar("TValue")


class DocumentCodec(Protocol):
    """Serializes a value under a single `content` field and back."""

    def encode(self, value: Any) -> str:
        """Return pretty-printed document text; raises `DocumentEncodeError`."""

    def decode(self, text: str, value_type: type[TValue]) -> TValue:
        """Parse document text; raises `DocumentDecodeError`."""


class ReadableStream(Protocol):
    """File opened for reading."""

    def read_to_end_async(self) -> Future[str]:
        """Read the remaining text and release the stream."""


class WritableStream(Protocol):
    """File opened (created/truncated) for writing."""

    def write_async(self, text: str) -> Future[None]:
        """Write text without blocking the caller."""

    def flush_async(self) -> Future[None]:
        """Flush buffered text to stable storage."""

    def close(self) -> None:
        """Release the file handle; safe to call more than once."""


class FileSystem(Protocol):
    """File-system collaborator used by document stores."""

    def exists(self, path: Path) -> bool:
        """Return whether a regular file exists at path."""

    def open_read(self, path: Path) -> ReadableStream:
        """Open path for reading; raises `OSError` synchronously on failure."""

    def open_write(self, path: Path) -> WritableStream:
        """Create or truncate path for writing; raises `OSError` on failure."""


def create_document_store(location: str | Path, value_type: type[TValue]) -> DocumentStore[TValue]:
    """Create a JSON document store on the local file system."""
    from resourcekit.documents.store import DocumentStore

    return DocumentStore(location, value_type)
