"""Ports for the remote gateway, archive creation, and attachment forwarding."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from flare_edge.domain.entities import FileTask, UploadResult


class ContentGateway(Protocol):
    """Remote container operations exposed by the deployment gateway."""

    async def delete_container_contents(self) -> Any:
        """Remove every object from the target container."""

    async def upload_file(self, task: FileTask) -> UploadResult:
        """Upload one local file under its root-relative key."""

    async def purge_container(self) -> Any:
        """Invalidate the CDN cache for the target container."""

    async def close(self) -> None:
        """Release network resources held by the gateway adapter."""


class ProjectArchiver(Protocol):
    """Packages a directory tree into a single compressed file."""

    def compress(
        self,
        root: Path,
        exclude_patterns: Sequence[str],
        output_path: Path,
    ) -> Path:
        """Write the archive and return its path."""


class AttachmentForwarder(Protocol):
    """Attaches a file to an external ticketing record."""

    async def forward(self, archive_path: Path, file_name: str, record_id: str) -> Any:
        """Upload the archive as an attachment of the given record."""


__all__ = ["AttachmentForwarder", "ContentGateway", "ProjectArchiver"]
