"""Project archive adapters."""

from flare_edge.infrastructure.archives.zip_archiver import ZipProjectArchiver

__all__ = ["ZipProjectArchiver"]
