"""Ticketing attachment adapters."""

from flare_edge.infrastructure.attachments.servicenow_client import (
    DEFAULT_TABLE_NAME,
    ServiceNowAttachmentClient,
)

__all__ = ["DEFAULT_TABLE_NAME", "ServiceNowAttachmentClient"]
