"""Shared runtime utilities for the upload pipeline."""

from flare_edge.infrastructure.uploads.runtime.delayed_release_throttle import (
    DelayedReleaseThrottle,
)

__all__ = ["DelayedReleaseThrottle"]
