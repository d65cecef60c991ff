from .client import SessionStoreClient

__all__ = ["SessionStoreClient"]
