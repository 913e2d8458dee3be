"""HTTP client for the ServiceNow attachment API."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from flare_edge.domain.deployment_models import ServiceNowConfig
from flare_edge.domain.errors import (
    ConfigError,
    FilesystemError,
    RemoteError,
    TransportError,
)
from flare_edge.domain.ports import AttachmentForwarder

DEFAULT_TABLE_NAME = "x_elsr_fedge_project"


class ServiceNowAttachmentClient(AttachmentForwarder):
    """Attach binary files to records of one ServiceNow table."""

    def __init__(
        self,
        config: ServiceNowConfig,
        table_name: str = DEFAULT_TABLE_NAME,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            httpx.URL(config.base_url)
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Invalid ServiceNow instance '{config.instance}': {exc}") from exc
        self._config = config
        self._table_name = table_name
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def forward(self, archive_path: Path, file_name: str, record_id: str) -> Any:
        """Call `/api/now/attachment/file` with the archive as the request body."""

        try:
            content = archive_path.read_bytes()
        except OSError as exc:
            raise FilesystemError(f"Cannot read archive '{archive_path}': {exc}") from exc

        url = f"{self._config.base_url}/api/now/attachment/file"
        params = {
            "table_name": self._table_name,
            "table_sys_id": record_id,
            "file_name": file_name,
        }
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/octet-stream",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
                auth=httpx.BasicAuth(self._config.username, self._config.password),
            ) as http_client:
                response = await http_client.post(
                    url,
                    params=params,
                    headers=headers,
                    content=content,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc
        self._ensure_success(response)
        try:
            return response.json()
        except ValueError:
            return None

    def _ensure_success(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = self._detail_from_response(response)
        raise RemoteError(
            f"{response.request.method} {response.request.url} failed: "
            f"{response.status_code} {message}"
        )

    def _detail_from_response(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            text = response.text.strip()
            return text or "<no response body>"

        # ServiceNow wraps failures as {"error": {"message": ..., "detail": ...}}.
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                message = error.get("message")
                if isinstance(message, str):
                    return message
        return str(payload)


__all__ = ["DEFAULT_TABLE_NAME", "ServiceNowAttachmentClient"]
