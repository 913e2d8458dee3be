"""FlareEdge deployment utility."""

__version__ = "1.2.0"

__all__ = ["__version__"]
