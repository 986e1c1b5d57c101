from .client import FactStoreClient, StoreError

__all__ = ["FactStoreClient", "StoreError"]
