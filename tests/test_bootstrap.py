from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from flare_edge.bootstrap import build_deployment_service
from flare_edge.config import Settings, load_deployment_config
from flare_edge.domain.errors import ConfigError
from flare_edge.infrastructure.attachments import ServiceNowAttachmentClient
from flare_edge.infrastructure.gateway import GatewayClient

_CONFIG = {
    "apiKey": "api-key",
    "secretKey": "secret-key",
    "gatewayKey": "gateway-key",
    "domainSpace": "space-1",
    "containerName": "site",
    "folderPath": "./dist",
    "gateway": "gateway.example.com",
}


def _write_config(tmp_path: Path, document: object) -> Path:
    path = tmp_path / "flare-edge.config.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_load_deployment_config_maps_camel_case_fields(tmp_path: Path) -> None:
    config = load_deployment_config(_write_config(tmp_path, _CONFIG))

    assert config.api_key == "api-key"
    assert config.domain_space == "space-1"
    assert config.folder_path == "./dist"
    assert config.servicenow is None


def test_load_deployment_config_reads_servicenow_block(tmp_path: Path) -> None:
    document = dict(
        _CONFIG,
        servicenow={
            "project_sys_id": "proj-1",
            "instance": "https://example.service-now.com",
            "username": "u",
            "password": "p",
        },
    )

    config = load_deployment_config(_write_config(tmp_path, document))

    assert config.servicenow is not None
    assert config.servicenow.project_sys_id == "proj-1"


def test_load_deployment_config_is_immutable(tmp_path: Path) -> None:
    config = load_deployment_config(_write_config(tmp_path, _CONFIG))

    with pytest.raises(ValidationError):
        config.gateway = "other.example.com"  # type: ignore[misc]


def test_load_deployment_config_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_deployment_config(tmp_path / "absent.json")


def test_load_deployment_config_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_deployment_config(path)


def test_load_deployment_config_rejects_missing_fields(tmp_path: Path) -> None:
    document = {key: value for key, value in _CONFIG.items() if key != "gateway"}

    with pytest.raises(ConfigError, match="gateway"):
        load_deployment_config(_write_config(tmp_path, document))


def test_settings_defaults_match_deployment_conventions() -> None:
    settings = Settings()

    assert settings.max_concurrent_uploads == 8
    assert settings.release_delay_seconds == 1.0
    assert settings.archive_exclude_patterns == ["node_modules/**"]
    assert settings.config_file == Path("flare-edge.config.json")


def test_settings_parse_comma_separated_excludes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLARE_EDGE_ARCHIVE_EXCLUDE_PATTERNS", "node_modules/**, .git/**")

    settings = Settings()

    assert settings.archive_exclude_patterns == ["node_modules/**", ".git/**"]


def test_settings_require_positive_concurrency() -> None:
    with pytest.raises(ValidationError):
        Settings(max_concurrent_uploads=0)


def test_settings_reject_negative_release_delay() -> None:
    with pytest.raises(ValidationError):
        Settings(release_delay_seconds=-1)


def test_build_deployment_service_wires_gateway_and_throttle(tmp_path: Path) -> None:
    config = load_deployment_config(_write_config(tmp_path, _CONFIG))
    settings = Settings(max_concurrent_uploads=3, release_delay_seconds=0.5)

    service = build_deployment_service(settings, config)

    assert isinstance(service._gateway, GatewayClient)
    assert service._upload_pipeline.throttle.capacity == 3
    assert service._upload_pipeline.throttle.release_delay_seconds == 0.5
    assert service._attachment_forwarder is None


def test_build_deployment_service_adds_forwarder_for_servicenow_block(tmp_path: Path) -> None:
    document = dict(
        _CONFIG,
        servicenow={
            "project_sys_id": "proj-1",
            "instance": "https://example.service-now.com",
            "username": "u",
            "password": "p",
        },
    )
    config = load_deployment_config(_write_config(tmp_path, document))

    service = build_deployment_service(Settings(), config)

    assert isinstance(service._attachment_forwarder, ServiceNowAttachmentClient)


def test_load_deployment_config_rejects_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "flare-edge.config.json"
    path.write_bytes(b'{"apiKey": "\xff\xfe"}')

    with pytest.raises(ConfigError, match="Error reading configuration file"):
        load_deployment_config(path)
