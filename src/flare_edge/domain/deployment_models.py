"""Pydantic models mapped from the deployment configuration document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConfigModel(BaseModel):
    """Base model for immutable configuration records."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ServiceNowConfig(ConfigModel):
    """Ticketing record that receives the project source archive."""

    project_sys_id: str
    instance: str
    username: str
    password: str

    @property
    def base_url(self) -> str:
        """Instance URL without trailing slash."""

        return self.instance.strip().rstrip("/")


class DeploymentConfig(ConfigModel):
    """Credentials and addressing for one container deployment."""

    api_key: str = Field(alias="apiKey")
    secret_key: str = Field(alias="secretKey")
    gateway_key: str = Field(alias="gatewayKey")
    domain_space: str = Field(alias="domainSpace")
    container_name: str = Field(alias="containerName")
    folder_path: str = Field(alias="folderPath")
    gateway: str
    servicenow: ServiceNowConfig | None = None

    def credential_fields(self) -> dict[str, str]:
        """Fields every gateway call carries."""

        return {
            "apiKey": self.api_key,
            "secretKey": self.secret_key,
            "domainSpace": self.domain_space,
            "containerName": self.container_name,
            "gatewayKey": self.gateway_key,
        }


__all__ = ["ConfigModel", "DeploymentConfig", "ServiceNowConfig"]
