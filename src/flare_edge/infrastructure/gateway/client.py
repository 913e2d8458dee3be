"""HTTP client for the deployment gateway container endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from flare_edge.domain.deployment_models import DeploymentConfig
from flare_edge.domain.entities import FileTask, UploadResult, UploadStatus
from flare_edge.domain.errors import (
    ConfigError,
    FilesystemError,
    RemoteError,
    TransportError,
)
from flare_edge.domain.ports import ContentGateway

logger = logging.getLogger(__name__)


class GatewayClient(ContentGateway):
    """Wrapper around `deleteContainerContents`, `uploadFile` and `purgeContainer`."""

    def __init__(
        self,
        config: DeploymentConfig,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._base_url = self._normalize_base_url(config.gateway)
        self._http = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        """Release underlying HTTP resources."""

        await self._http.aclose()

    async def delete_container_contents(self) -> Any:
        """Call `/deleteContainerContents`."""

        response = await self._post(
            "/deleteContainerContents",
            json=self._config.credential_fields(),
        )
        return self._payload(response)

    async def purge_container(self) -> Any:
        """Call `/purgeContainer`."""

        response = await self._post(
            "/purgeContainer",
            json=self._config.credential_fields(),
        )
        return self._payload(response)

    async def upload_file(self, task: FileTask) -> UploadResult:
        """Call `/uploadFile` with one file streamed as multipart content."""

        data = self._config.credential_fields()
        data["filePath"] = task.relative_path
        try:
            with task.absolute_path.open("rb") as stream:
                response = await self._post(
                    "/uploadFile",
                    data=data,
                    files={"file": (task.absolute_path.name, stream)},
                )
        except OSError as exc:
            raise FilesystemError(f"Cannot read '{task.absolute_path}': {exc}") from exc

        payload = self._payload(response)
        if isinstance(payload, dict) and payload.get("success"):
            logger.info("File: %s %s", task.absolute_path, UploadStatus.DONE.value)
            return UploadResult(task=task, status=UploadStatus.DONE, detail=payload)

        logger.warning("File: %s %s", task.absolute_path, payload)
        return UploadResult(task=task, status=UploadStatus.REJECTED, detail=payload)

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.post(url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc
        self._ensure_success(response)
        return response

    def _ensure_success(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = self._detail_from_response(response)
        raise RemoteError(
            f"{response.request.method} {response.request.url} failed: "
            f"{response.status_code} {message}"
        )

    def _payload(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text.strip() or None

    def _detail_from_response(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            text = response.text.strip()
            return text or "<no response body>"

        if isinstance(payload, dict):
            for key in ("detail", "message", "error"):
                detail = payload.get(key)
                if isinstance(detail, str):
                    return detail
        return str(payload)

    def _normalize_base_url(self, gateway: str) -> str:
        host = gateway.strip().rstrip("/")
        if not host:
            raise ConfigError("Gateway host cannot be empty.")
        base_url = host if host.startswith(("http://", "https://")) else f"https://{host}"
        try:
            httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Invalid gateway '{gateway}': {exc}") from exc
        return base_url


__all__ = ["GatewayClient"]
