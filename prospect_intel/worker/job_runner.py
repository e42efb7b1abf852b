from prospect_intel.database.models import ScanJobRecord
from prospect_intel.database.repositories.scan_job_repository import ScanJobRepository
from prospect_intel.logging.logger import Log
from prospect_intel.pipeline.processor import ScanProcessor
from prospect_intel.pipeline.service import ScanService
from prospect_intel.pipeline.states import ScanStage
from prospect_intel.worker.exceptions import ScreenshotLoadError
from prospect_intel.worker.screenshot_loader import ScreenshotLoader


class JobRunner:
    """Run one scan job and record how it ended. Jobs are never retried."""

    def __init__(
        self,
        service: ScanService,
        processor: ScanProcessor,
        job_repo: ScanJobRepository,
        loader: ScreenshotLoader,
    ) -> None:
        self._service = service
        self._processor = processor
        self._job_repo = job_repo
        self._loader = loader

    def run(self, job: ScanJobRecord) -> None:
        """Execute a single job with error handling."""
        Log.info(f"Running job {job.id} for scan {job.scan_id}")
        try:
            images = self._loader.load(job.scan_id)
        except (FileNotFoundError, ScreenshotLoadError) as exc:
            self._processor.reject(job.scan_id, str(exc))
            self._handle_failure(job, str(exc))
            return

        try:
            outcome = self._service.submit_scan(job.scan_id, images)
        except Exception as exc:
            self._handle_failure(job, str(exc) or type(exc).__name__)
            return

        if outcome.status is ScanStage.COMPLETED:
            self._job_repo.mark_done(job.id)
            Log.info(
                f"Job {job.id} completed successfully: "
                f"{outcome.prospects_found} prospect(s)"
            )
        else:
            self._handle_failure(job, outcome.error_message or "Scan failed")

    def _handle_failure(self, job: ScanJobRecord, message: str) -> None:
        Log.error(f"Job {job.id} failed: {message}")
        self._job_repo.mark_failed(job.id, message)
