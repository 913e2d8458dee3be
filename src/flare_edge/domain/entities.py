"""Domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from flare_edge.domain.errors import DeploymentError


class UploadStatus(StrEnum):
    """Outcome reported by the gateway for one file."""

    DONE = "done"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class FileTask:
    """One local file and its destination key inside the container."""

    absolute_path: Path
    relative_path: str


@dataclass(slots=True, frozen=True)
class UploadResult:
    """Gateway answer for a single uploaded file."""

    task: FileTask
    status: UploadStatus
    detail: Any = None

    @property
    def succeeded(self) -> bool:
        return self.status is UploadStatus.DONE


@dataclass(slots=True)
class UploadSummary:
    """Aggregated outcome of one upload batch."""

    results: list[UploadResult] = field(default_factory=list)
    skipped: int = 0
    failure: DeploymentError | None = None

    @property
    def uploaded(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def rejected(self) -> int:
        return sum(1 for result in self.results if not result.succeeded)

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass(slots=True, frozen=True)
class DeploymentReport:
    """What a finished deployment did."""

    uploads: UploadSummary
    archive_file_name: str | None = None


__all__ = [
    "DeploymentReport",
    "FileTask",
    "UploadResult",
    "UploadStatus",
    "UploadSummary",
]
