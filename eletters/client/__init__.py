"""HTTP clients for the remote draft and import services."""

from eletters.client.http import (
    RemoteDraftClient,
    RemoteImportClient,
    error_message,
    letter_from_import,
)

__all__ = [
    "RemoteDraftClient",
    "RemoteImportClient",
    "error_message",
    "letter_from_import",
]
