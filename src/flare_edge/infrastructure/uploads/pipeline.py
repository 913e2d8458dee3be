"""Bounded-concurrency upload of an enumerated file list."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from flare_edge.domain.entities import FileTask, UploadSummary
from flare_edge.domain.errors import DeploymentError
from flare_edge.domain.ports import ContentGateway
from flare_edge.infrastructure.uploads.runtime import DelayedReleaseThrottle

logger = logging.getLogger(__name__)


class UploadPipeline:
    """Run one upload task per file, admitted through a delayed-release throttle.

    - Tasks are created in enumeration order; completion order is unspecified.
    - Each task holds a permit while its request is in flight and hands it back
      `release_delay_seconds` after settling, success or failure.
    - The first failure stops admission: tasks still waiting for a permit skip
      their upload and return the permit at once. In-flight uploads settle.
    - No file is attempted twice.
    """

    def __init__(self, gateway: ContentGateway, throttle: DelayedReleaseThrottle) -> None:
        self._gateway = gateway
        self._throttle = throttle

    @property
    def throttle(self) -> DelayedReleaseThrottle:
        return self._throttle

    async def run(self, tasks: Sequence[FileTask]) -> UploadSummary:
        """Upload every task and report the outcome of the batch."""

        summary = UploadSummary()
        await asyncio.gather(*(self._upload_one(task, summary) for task in tasks))
        if summary.failure is not None:
            logger.error(
                "Upload batch stopped after %d files; %d skipped.",
                len(summary.results),
                summary.skipped,
            )
        return summary

    async def _upload_one(self, task: FileTask, summary: UploadSummary) -> None:
        await self._throttle.acquire()
        if summary.failure is not None:
            self._throttle.release(delayed=False)
            summary.skipped += 1
            return

        try:
            result = await self._gateway.upload_file(task)
        except DeploymentError as exc:
            logger.error("Error uploading file %s: %s", task.absolute_path, exc)
            if summary.failure is None:
                summary.failure = exc
            return
        finally:
            self._throttle.release()

        summary.results.append(result)


__all__ = ["UploadPipeline"]
