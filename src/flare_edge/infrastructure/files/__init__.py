"""Local filesystem adapters."""

from flare_edge.infrastructure.files.enumerator import enumerate_files, is_excluded

__all__ = ["enumerate_files", "is_excluded"]
