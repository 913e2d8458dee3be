"""Deployment orchestration: cleanup, upload, purge, archive forwarding."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from flare_edge.domain.deployment_models import DeploymentConfig, ServiceNowConfig
from flare_edge.domain.entities import DeploymentReport, FileTask
from flare_edge.domain.ports import AttachmentForwarder, ContentGateway, ProjectArchiver
from flare_edge.infrastructure.files import enumerate_files
from flare_edge.infrastructure.uploads import UploadPipeline

logger = logging.getLogger(__name__)

_DEFAULT_ARCHIVE_EXCLUDES = ("node_modules/**",)

FileEnumerator = Callable[[Path], list[FileTask]]


def archive_file_name(moment: datetime | None = None) -> str:
    """Attachment name `source_code_<ISO timestamp>.zip` with `:` and `.` dashed."""

    stamp = (moment or datetime.now(UTC)).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z").replace(":", "-").replace(".", "-")
    return f"source_code_{stamp}.zip"


class DeploymentService:
    """Sequence the deployment phases; each phase gates the next.

    Errors are raised as `DeploymentError` subclasses and left for the caller
    to report. Nothing is retried and nothing already done is rolled back.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        gateway: ContentGateway,
        upload_pipeline: UploadPipeline,
        archiver: ProjectArchiver | None = None,
        attachment_forwarder: AttachmentForwarder | None = None,
        project_dir: Path = Path("."),
        archive_exclude_patterns: Sequence[str] = _DEFAULT_ARCHIVE_EXCLUDES,
        scratch_dir: Path | None = None,
        file_enumerator: FileEnumerator = enumerate_files,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._gateway = gateway
        self._upload_pipeline = upload_pipeline
        self._archiver = archiver
        self._attachment_forwarder = attachment_forwarder
        self._project_dir = project_dir
        self._archive_exclude_patterns = tuple(archive_exclude_patterns)
        self._scratch_dir = scratch_dir
        self._file_enumerator = file_enumerator
        self._clock = clock or (lambda: datetime.now(UTC))

    async def deploy(self) -> DeploymentReport:
        """Run every phase and return what was done."""

        logger.info("Cleaning up...")
        await self._gateway.delete_container_contents()
        logger.info("Container contents deleted successfully.")

        logger.info("Deploying to FlareEdge...")
        tasks = self._file_enumerator(Path(self._config.folder_path))
        summary = await self._upload_pipeline.run(tasks)
        if summary.failure is not None:
            raise summary.failure
        logger.info(
            "Uploaded %d of %d files (%d rejected by the gateway).",
            summary.uploaded,
            len(tasks),
            summary.rejected,
        )

        await self._gateway.purge_container()
        logger.info("Container updated successfully.")

        file_name: str | None = None
        if self._config.servicenow is not None:
            file_name = await self.archive_and_forward(self._config.servicenow)
            logger.info("Project source code copied to ServiceNow.")

        logger.info("Done. Project has been deployed to FlareEdge.")
        return DeploymentReport(uploads=summary, archive_file_name=file_name)

    async def close(self) -> None:
        """Release the gateway connection pool."""

        await self._gateway.close()

    async def archive_and_forward(self, servicenow: ServiceNowConfig) -> str:
        """Zip the project directory, attach it to the ticketing record, drop the zip."""

        if self._archiver is None or self._attachment_forwarder is None:
            raise RuntimeError("Archive forwarding requires an archiver and a forwarder.")

        file_name = archive_file_name(self._clock())
        scratch_dir = self._scratch_dir or Path(tempfile.gettempdir())
        output_path = scratch_dir / file_name

        archive_path = self._archiver.compress(
            self._project_dir,
            self._archive_exclude_patterns,
            output_path,
        )
        try:
            await self._attachment_forwarder.forward(
                archive_path,
                file_name,
                servicenow.project_sys_id,
            )
        finally:
            archive_path.unlink(missing_ok=True)
        return file_name


__all__ = ["DeploymentService", "archive_file_name"]
