"""Application services public API."""

from flare_edge.application.services.deployment_service import (
    DeploymentService,
    archive_file_name,
)

__all__ = ["DeploymentService", "archive_file_name"]
