"""Streaming platform integration: upload slots and signed playback tokens."""

from .client import StreamClient, UploadSlot, encode_upload_metadata
from .playback import PlaybackTokenSigner, load_private_key, sign

__all__ = [
    "StreamClient",
    "UploadSlot",
    "encode_upload_metadata",
    "PlaybackTokenSigner",
    "load_private_key",
    "sign",
]
