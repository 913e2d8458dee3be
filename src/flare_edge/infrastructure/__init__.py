"""Infrastructure layer public API."""

from flare_edge.infrastructure.archives import ZipProjectArchiver
from flare_edge.infrastructure.attachments import ServiceNowAttachmentClient
from flare_edge.infrastructure.files import enumerate_files
from flare_edge.infrastructure.gateway import GatewayClient
from flare_edge.infrastructure.uploads import DelayedReleaseThrottle, UploadPipeline

__all__ = [
    "DelayedReleaseThrottle",
    "GatewayClient",
    "ServiceNowAttachmentClient",
    "UploadPipeline",
    "ZipProjectArchiver",
    "enumerate_files",
]
