"""Deployment gateway adapters."""

from flare_edge.infrastructure.gateway.client import GatewayClient

__all__ = ["GatewayClient"]
