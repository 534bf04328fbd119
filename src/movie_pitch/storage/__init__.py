from .blob_store import BlobStore, LocalBlobStore

__all__ = ["BlobStore", "LocalBlobStore"]
