"""Public resource-loading API contracts."""

from resourcekit.api.documents import (
    DocumentCodec,
    FileSystem,
    ReadableStream,
    WritableStream,
    create_document_store,
)
from resourcekit.api.logging import LoggingConfig
from resourcekit.api.media import (
    AudioDecoder,
    MediaErrorCallback,
    MediaHandle,
    MediaType,
    Transport,
    TransportRequest,
    TransportResponse,
    TransportResult,
    create_media_resource,
)
from resourcekit.api.operations import (
    CompletionCallback,
    MessageErrorCallback,
    Operation,
    OperationState,
    create_scheduler,
)

__all__ = [
    "AudioDecoder",
    "CompletionCallback",
    "DocumentCodec",
    "FileSystem",
    "LoggingConfig",
    "MediaErrorCallback",
    "MediaHandle",
    "MediaType",
    "MessageErrorCallback",
    "Operation",
    "OperationState",
    "ReadableStream",
    "Transport",
    "TransportRequest",
    "TransportResponse",
    "TransportResult",
    "WritableStream",
    "create_document_store",
    "create_media_resource",
    "create_scheduler",
]
