"""Upload pipeline implementations."""

from flare_edge.infrastructure.uploads.pipeline import UploadPipeline
from flare_edge.infrastructure.uploads.runtime import DelayedReleaseThrottle

__all__ = ["DelayedReleaseThrottle", "UploadPipeline"]
