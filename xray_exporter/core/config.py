"""Configuration for the X-Ray exporter.

Settings are resolved with the following precedence (highest to lowest):
1. Explicit arguments
2. Environment variables
3. YAML configuration (.xray/config.yaml in the project root)
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .naming import MAX_SEGMENT_NAME_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_DAEMON_ADDRESS = "127.0.0.1:2000"
# The exporter traces its own exports at roughly 1 in 10,000
DEFAULT_DIAGNOSTIC_SAMPLING_RATE = 0.0001

CONFIG_DIR_NAME = ".xray"
CONFIG_FILE_NAME = "config.yaml"
PROJECT_ROOT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg", ".git")

ENV_SERVICE_NAME = "XRAY_EXPORTER_SERVICE_NAME"
ENV_USE_DAEMON = "XRAY_EXPORTER_USE_DAEMON"
ENV_DAEMON_ADDRESS = "AWS_XRAY_DAEMON_ADDRESS"
ENV_REGION = "AWS_REGION"
ENV_ENDPOINT_URL = "XRAY_EXPORTER_ENDPOINT_URL"
ENV_ORIGIN = "XRAY_EXPORTER_ORIGIN"
ENV_DIAGNOSTIC_SAMPLING_RATE = "XRAY_EXPORTER_DIAGNOSTIC_SAMPLING_RATE"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ServiceConfig:
    name: str | None = None
    origin: str | None = None


@dataclass
class ExportConfig:
    use_daemon: bool | None = None
    daemon_address: str | None = None
    region: str | None = None
    endpoint_url: str | None = None


@dataclass
class DiagnosticsConfig:
    sampling_rate: float | None = None


@dataclass
class XRayFileConfig:
    """Contents of .xray/config.yaml. Missing sections are None."""

    service: ServiceConfig | None = None
    export: ExportConfig | None = None
    diagnostics: DiagnosticsConfig | None = None


@dataclass
class XRayExporterConfig:
    """Resolved exporter settings."""

    # Used verbatim as the name of top-level segments; span names are used when empty
    service_name: str = ""
    # Frame documents for the UDP daemon instead of calling the API
    use_daemon: bool = False
    daemon_address: str = DEFAULT_DAEMON_ADDRESS
    # AWS region and endpoint override for the PutTraceSegments client
    region: str | None = None
    endpoint_url: str | None = None
    # AWS resource type recorded on top-level segments, e.g. "AWS::EC2::Instance"
    origin: str | None = None
    diagnostic_sampling_rate: float = DEFAULT_DIAGNOSTIC_SAMPLING_RATE

    def __post_init__(self) -> None:
        if len(self.service_name) > MAX_SEGMENT_NAME_LENGTH:
            raise ValueError(
                f"Service name must be at most {MAX_SEGMENT_NAME_LENGTH} characters, "
                f"got {len(self.service_name)}"
            )
        if validate_sampling_rate(self.diagnostic_sampling_rate, "config") is None:
            raise ValueError(
                f"Diagnostic sampling rate must be between 0.0 and 1.0, "
                f"got {self.diagnostic_sampling_rate}"
            )

    @classmethod
    def resolve(
        cls,
        service_name: str | None = None,
        use_daemon: bool | None = None,
        file_config: XRayFileConfig | None = None,
    ) -> XRayExporterConfig:
        """
        Build a config from arguments, environment variables and the config file.

        Args:
            service_name: Overrides every other source when given
            use_daemon: Overrides every other source when given
            file_config: Parsed config file (loaded from the project root if None)

        Returns:
            The resolved configuration
        """
        if file_config is None:
            file_config = load_xray_config() or XRayFileConfig()

        service = file_config.service or ServiceConfig()
        export = file_config.export or ExportConfig()
        diagnostics = file_config.diagnostics or DiagnosticsConfig()

        if service_name is None:
            service_name = os.environ.get(ENV_SERVICE_NAME) or service.name or ""

        if use_daemon is None:
            env_use_daemon = os.environ.get(ENV_USE_DAEMON)
            if env_use_daemon is not None:
                use_daemon = _parse_bool(env_use_daemon)
            else:
                use_daemon = bool(export.use_daemon)

        return cls(
            service_name=service_name,
            use_daemon=use_daemon,
            daemon_address=(
                os.environ.get(ENV_DAEMON_ADDRESS)
                or export.daemon_address
                or DEFAULT_DAEMON_ADDRESS
            ),
            region=os.environ.get(ENV_REGION) or export.region,
            endpoint_url=os.environ.get(ENV_ENDPOINT_URL) or export.endpoint_url,
            origin=os.environ.get(ENV_ORIGIN) or service.origin,
            diagnostic_sampling_rate=_determine_sampling_rate(diagnostics.sampling_rate),
        )


def validate_sampling_rate(rate: float | None, source: str) -> float | None:
    """Return the rate if it lies in [0.0, 1.0], otherwise log and return None."""
    if rate is None:
        return None
    if not 0.0 <= rate <= 1.0:
        logger.warning(f"Invalid diagnostic sampling rate from {source}: {rate}. Must be between 0.0 and 1.0")
        return None
    return rate


def _determine_sampling_rate(file_rate: float | None) -> float:
    env_rate = os.environ.get(ENV_DIAGNOSTIC_SAMPLING_RATE)
    if env_rate is not None:
        try:
            validated = validate_sampling_rate(float(env_rate), f"{ENV_DIAGNOSTIC_SAMPLING_RATE} env var")
            if validated is not None:
                return validated
        except ValueError:
            logger.warning(f"Invalid {ENV_DIAGNOSTIC_SAMPLING_RATE} env var: {env_rate}")

    validated = validate_sampling_rate(file_rate, "config file")
    if validated is not None:
        return validated

    return DEFAULT_DIAGNOSTIC_SAMPLING_RATE


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) to the first directory holding a project marker."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            return directory
    return None


def load_xray_config(project_root: Path | None = None) -> XRayFileConfig | None:
    """
    Load .xray/config.yaml from the project root.

    Returns:
        Parsed config, or None when the file is missing or not valid YAML
    """
    root = project_root or find_project_root()
    if root is None:
        return None

    config_path = root / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if not config_path.is_file():
        logger.debug(f"No config file found at {config_path}")
        return None

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse config file {config_path}: {e}")
        return None

    if not isinstance(raw, dict):
        logger.error(f"Config file {config_path} must contain a mapping")
        return None

    return _parse_file_config(raw)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def _parse_file_bool(value: Any, key: str) -> bool | None:
    """Accept YAML booleans and the same strings as the env vars; ignore anything else."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _parse_bool(value)
    logger.warning(f"Ignoring invalid {key} in config file: {value!r}")
    return None


def _parse_file_float(value: Any, key: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        logger.warning(f"Ignoring invalid {key} in config file: {value!r}")
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid {key} in config file: {value!r}")
        return None


def _parse_file_config(raw: dict[str, Any]) -> XRayFileConfig:
    service = raw.get("service")
    export = raw.get("export")
    diagnostics = raw.get("diagnostics")

    return XRayFileConfig(
        service=(
            ServiceConfig(name=service.get("name"), origin=service.get("origin"))
            if isinstance(service, dict)
            else None
        ),
        export=(
            ExportConfig(
                use_daemon=_parse_file_bool(export.get("use_daemon"), "export.use_daemon"),
                daemon_address=export.get("daemon_address"),
                region=export.get("region"),
                endpoint_url=export.get("endpoint_url"),
            )
            if isinstance(export, dict)
            else None
        ),
        diagnostics=(
            DiagnosticsConfig(
                sampling_rate=_parse_file_float(diagnostics.get("sampling_rate"), "diagnostics.sampling_rate")
            )
            if isinstance(diagnostics, dict)
            else None
        ),
    )
