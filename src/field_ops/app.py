"""Field Ops activity engine - application wiring."""
import logging

from .config_manager import ConfigManager
from .local_db import LocalStore
from .repositories.draft_repository import DraftRepository
from .services.template_store import TemplateStore
from .services.directory_service import HomeDirectory
from .services.upload_queue import PhotoUploadQueue, SimulatedUploader, HttpUploader
from .services.report_exporter import JsonReportExporter
from .services.activity_registry import ActiveActivityRegistry
from .handlers.activity_handler import ActivityHandler


class FieldOpsApp:
    """Owns the engine's long-lived services and hands them to the handlers."""

    def __init__(self, config=None, directory=None, exporter=None, uploader=None,
                 report_handoff=None, on_warning=None):
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = config or ConfigManager()
        self.logger.info(f"Configuration loaded: data dir={self.config.data_dir}")

        self.store = LocalStore(self.config.db_path())
        self.repository = DraftRepository(self.store)
        self.logger.info("Local store initialized")

        self.template_store = TemplateStore()
        if directory is None:
            if self.config.directory_file:
                directory = HomeDirectory.from_json_file(self.config.directory_file)
            else:
                directory = HomeDirectory()
        self.directory = directory

        if uploader is None:
            uploader = self._build_uploader()
        self.upload_queue = PhotoUploadQueue(
            uploader,
            max_workers=self.config.upload_workers,
            timeout=self.config.upload_timeout,
            max_retries=self.config.upload_retry_attempts,
            retry_delay=self.config.upload_retry_delay,
        )
        self.exporter = exporter or JsonReportExporter(self.config.reports_path)
        self.registry = ActiveActivityRegistry(self.repository, self.template_store, self.directory)

        self.report_handoff = report_handoff
        self.on_warning = on_warning

        self.activity_handler = ActivityHandler(self)
        self.logger.info("Field Ops app initialized")

    def _build_uploader(self):
        if self.config.upload_mode == 'http':
            self.logger.info(f"Uploading photos to {self.config.api_base_url}")
            return HttpUploader(self.config.api_base_url, timeout=self.config.upload_timeout)
        return SimulatedUploader(
            latency=self.config.upload_latency,
            failure_rate=self.config.upload_failure_rate,
        )

    def close(self):
        """Flush the open session and stop background work."""
        self.activity_handler.close_current()
        self.upload_queue.shutdown(wait=True)
        self.store.close()
        self.logger.info("Field Ops app closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
