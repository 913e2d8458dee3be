"""Domain public API."""

from flare_edge.domain.deployment_models import DeploymentConfig, ServiceNowConfig
from flare_edge.domain.entities import (
    DeploymentReport,
    FileTask,
    UploadResult,
    UploadStatus,
    UploadSummary,
)
from flare_edge.domain.errors import (
    ArchiveError,
    ConfigError,
    DeploymentError,
    FilesystemError,
    RemoteError,
    TransportError,
)
from flare_edge.domain.ports import AttachmentForwarder, ContentGateway, ProjectArchiver

__all__ = [
    "ArchiveError",
    "AttachmentForwarder",
    "ConfigError",
    "ContentGateway",
    "DeploymentConfig",
    "DeploymentError",
    "DeploymentReport",
    "FileTask",
    "FilesystemError",
    "ProjectArchiver",
    "RemoteError",
    "ServiceNowConfig",
    "TransportError",
    "UploadResult",
    "UploadStatus",
    "UploadSummary",
]
