"""Storage: local filesystem backend and category-scoped path allocation.

Factory creates the backend from sikap.core.config. Implementations satisfy
sikap.application.interfaces.storage.IStorageService (upload, download,
delete, exists).
"""

from sikap.infrastructure.external.storage.factory import StorageFactory
from sikap.infrastructure.external.storage.paths import allocate_relative_path

__all__ = [
    "StorageFactory",
    "allocate_relative_path",
]
