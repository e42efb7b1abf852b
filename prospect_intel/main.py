from pathlib import Path

from prospect_intel.config.settings import Settings
from prospect_intel.database.connection import close_pool, init_pool
from prospect_intel.database.repositories.scan_job_repository import ScanJobRepository
from prospect_intel.logging.logger import Log
from prospect_intel.pipeline.processor import build_processor
from prospect_intel.pipeline.service import ScanService
from prospect_intel.storage.factory import StoreFactory
from prospect_intel.worker.job_runner import JobRunner
from prospect_intel.worker.screenshot_loader import ScreenshotLoader
from prospect_intel.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        status_store, result_store = StoreFactory.create(settings)
        processor = build_processor(settings, status_store, result_store)
        service = ScanService(processor, status_store)
        job_repo = ScanJobRepository()
        loader = ScreenshotLoader(Path(settings.screenshots_root))
        job_runner = JobRunner(service, processor, job_repo, loader)
        worker = Worker(job_repo, job_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
