"""Zip packaging of the project source tree."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Sequence
from pathlib import Path

from flare_edge.domain.errors import ArchiveError, DeploymentError
from flare_edge.domain.ports import ProjectArchiver
from flare_edge.infrastructure.files import enumerate_files

logger = logging.getLogger(__name__)

_COMPRESS_LEVEL = 9


class ZipProjectArchiver(ProjectArchiver):
    """Write a deflate-compressed zip of every file under a root directory."""

    def __init__(self, compress_level: int = _COMPRESS_LEVEL) -> None:
        self._compress_level = compress_level

    def compress(
        self,
        root: Path,
        exclude_patterns: Sequence[str],
        output_path: Path,
    ) -> Path:
        """Archive `root` into `output_path`, skipping excluded relative paths.

        A partially written archive is removed before the error propagates.
        """

        try:
            tasks = enumerate_files(root, exclude_patterns)
        except DeploymentError as exc:
            raise ArchiveError(f"Failed to create zip file: {exc}") from exc

        output = output_path.absolute()
        try:
            with zipfile.ZipFile(
                output,
                mode="w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self._compress_level,
            ) as archive:
                for task in tasks:
                    if task.absolute_path == output:
                        continue
                    archive.write(task.absolute_path, arcname=task.relative_path)
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            output.unlink(missing_ok=True)
            raise ArchiveError(f"Failed to create zip file: {exc}") from exc

        logger.debug("Archived %d files from '%s' into '%s'.", len(tasks), root, output)
        return output


__all__ = ["ZipProjectArchiver"]
