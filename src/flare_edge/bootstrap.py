"""Application bootstrap/wiring."""

import logging

import httpx

from flare_edge.application.services import DeploymentService
from flare_edge.config import Settings
from flare_edge.domain.deployment_models import DeploymentConfig
from flare_edge.domain.entities import DeploymentReport
from flare_edge.infrastructure.archives import ZipProjectArchiver
from flare_edge.infrastructure.attachments import ServiceNowAttachmentClient
from flare_edge.infrastructure.gateway import GatewayClient
from flare_edge.infrastructure.uploads import DelayedReleaseThrottle, UploadPipeline

logger = logging.getLogger(__name__)


def _build_attachment_forwarder(
    settings: Settings,
    config: DeploymentConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> ServiceNowAttachmentClient | None:
    if config.servicenow is None:
        return None
    logger.debug(
        "Project source will be attached to record '%s' on '%s'.",
        config.servicenow.project_sys_id,
        config.servicenow.base_url,
    )
    return ServiceNowAttachmentClient(
        config.servicenow,
        table_name=settings.attachment_table_name,
        timeout_seconds=settings.http_timeout_seconds,
        transport=transport,
    )


def build_deployment_service(
    settings: Settings,
    config: DeploymentConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DeploymentService:
    """Compose service graph."""

    forwarder = _build_attachment_forwarder(settings, config, transport)
    gateway = GatewayClient(
        config,
        timeout_seconds=settings.http_timeout_seconds,
        transport=transport,
    )
    throttle = DelayedReleaseThrottle(
        capacity=settings.max_concurrent_uploads,
        release_delay_seconds=settings.release_delay_seconds,
    )
    return DeploymentService(
        config=config,
        gateway=gateway,
        upload_pipeline=UploadPipeline(gateway, throttle),
        archiver=ZipProjectArchiver() if forwarder is not None else None,
        attachment_forwarder=forwarder,
        project_dir=settings.project_dir,
        archive_exclude_patterns=settings.archive_exclude_patterns,
    )


async def run_deployment(
    settings: Settings,
    config: DeploymentConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DeploymentReport:
    """Build the service graph, deploy once, release network resources."""

    service = build_deployment_service(settings, config, transport=transport)
    try:
        return await service.deploy()
    finally:
        await service.close()


__all__ = ["build_deployment_service", "run_deployment"]
