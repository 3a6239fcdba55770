from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from trxpub.core.models import PublishConfig


class ConfigurationError(ValueError):
    """Raised when a publish configuration is incomplete or unreadable."""


MISSING_SUITE_ID = "/testSuiteId must be specified when publishing test results"
MISSING_CONFIG_ID = "/testConfigId must be specified when publishing test results"

_FIELD_NAMES = {item.name for item in fields(PublishConfig)}
_REQUIRED_KEYS = ("test_results", "collection", "project", "build_number", "build_definition")


def load_config(path: str, overrides: dict[str, Any] | None = None) -> PublishConfig:
    """Load a PublishConfig from a YAML or JSON file.

    Keys mirror the PublishConfig field names. Non-None values in
    ``overrides`` (typically CLI flags) win over the file.
    """
    ext = Path(path).suffix.lower()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            if ext in {".yaml", ".yml"}:
                data = yaml.safe_load(handle)
            elif ext == ".json":
                data = json.load(handle)
            else:
                raise ConfigurationError(f"Unsupported config file extension: {ext}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to parse config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown config key(s): {', '.join(unknown)}")

    merged = dict(data)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return config_from_mapping(merged)


def config_from_mapping(data: dict[str, Any]) -> PublishConfig:
    missing = [key for key in _REQUIRED_KEYS if data.get(key) in (None, "")]
    if missing:
        raise ConfigurationError(f"Missing required setting(s): {', '.join(missing)}")

    return PublishConfig(
        test_results=str(data["test_results"]),
        collection=str(data["collection"]),
        project=str(data["project"]),
        build_number=str(data["build_number"]),
        build_definition=str(data["build_definition"]),
        test_suite_id=_optional_int(data, "test_suite_id"),
        try_all_suites=bool(data.get("try_all_suites", False)),
        test_config_id=_optional_int(data, "test_config_id"),
        test_run_title=data.get("test_run_title"),
        test_run_result_owner=data.get("test_run_result_owner"),
        fix_test_ids=bool(data.get("fix_test_ids", False)),
        tool_path=data.get("tool_path"),
    )


def validate_config(config: PublishConfig) -> list[str]:
    """Return the reasons a config cannot be published, empty when valid."""
    errors: list[str] = []
    if config.test_suite_id is None and not config.try_all_suites:
        errors.append(MISSING_SUITE_ID)
    if config.test_suite_id is not None and config.test_suite_id <= 0:
        errors.append(f"/testSuiteId must be a positive integer, got {config.test_suite_id}")
    if config.test_config_id is None:
        errors.append(MISSING_CONFIG_ID)
    return errors


def require_valid(config: PublishConfig) -> PublishConfig:
    errors = validate_config(config)
    if errors:
        raise ConfigurationError("; ".join(errors))
    return config


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from exc
