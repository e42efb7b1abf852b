from typing import ClassVar

from prospect_intel.config.settings import Settings
from prospect_intel.database.repositories.scan_results_repository import ScanResultsRepository
from prospect_intel.database.repositories.scan_status_repository import ScanStatusRepository
from prospect_intel.storage.base import BaseResultStore, BaseStatusStore
from prospect_intel.storage.memory import InMemoryResultStore, InMemoryStatusStore


class StoreFactory:
    """Creates the configured status and result stores."""

    SUPPORTED_BACKENDS: ClassVar[tuple[str, ...]] = ("postgres", "memory")

    @classmethod
    def create(cls, settings: Settings) -> tuple[BaseStatusStore, BaseResultStore]:
        backend = settings.storage_backend.lower()
        if backend == "postgres":
            return ScanStatusRepository(), ScanResultsRepository()
        if backend == "memory":
            return (
                InMemoryStatusStore(settings.memory_store_max_scans),
                InMemoryResultStore(settings.memory_store_max_scans),
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. "
            f"Choose from: {list(cls.SUPPORTED_BACKENDS)}"
        )
