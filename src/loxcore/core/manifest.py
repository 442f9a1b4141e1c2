"""
Project configuration for the loxcore CLI.

Settings come from an optional ``loxcore.toml``:

    [scanner]
    show_lines = true

    [output]
    format = "table"    # "plain" | "table"

    [logging]
    level = "INFO"

The LOXCORE_LOG_LEVEL environment variable overrides ``[logging] level``.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .errors import ManifestError

MANIFEST_NAME = "loxcore.toml"
LOG_LEVEL_ENV_VAR = "LOXCORE_LOG_LEVEL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class OutputFormat(StrEnum):
    """How ``loxcore scan`` prints tokens."""

    PLAIN = "plain"
    TABLE = "table"


@dataclass
class ScannerConfig:
    show_lines: bool = True


@dataclass
class OutputConfig:
    format: OutputFormat = OutputFormat.PLAIN


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class LoxManifest:
    """Top-level configuration."""

    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_log_level(value: str, source: str) -> str:
    level = value.upper()
    if level not in _LOG_LEVELS:
        raise ManifestError(f"Invalid log level {value!r} in {source}")
    return level


def load_manifest(path: Path) -> LoxManifest:
    """
    Load configuration from a TOML file.

    Args:
        path: Path to ``loxcore.toml``

    Returns:
        Parsed manifest

    Raises:
        ManifestError: If the file is not valid TOML or has bad values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    scanner_data = data.get("scanner", {})
    output_data = data.get("output", {})
    logging_data = data.get("logging", {})

    try:
        output_format = OutputFormat(output_data.get("format", OutputFormat.PLAIN))
    except ValueError as e:
        raise ManifestError(f"Invalid output format in {path}: {e}") from e

    return LoxManifest(
        scanner=ScannerConfig(show_lines=bool(scanner_data.get("show_lines", True))),
        output=OutputConfig(format=output_format),
        logging=LoggingConfig(
            level=_parse_log_level(logging_data.get("level", "WARNING"), str(path))
        ),
    )


def resolve_manifest(directory: Path | None = None) -> LoxManifest:
    """
    Find and load configuration for a working directory.

    A missing ``loxcore.toml`` gives the defaults. LOXCORE_LOG_LEVEL, when
    set, wins over the file.
    """
    manifest_path = (directory or Path.cwd()) / MANIFEST_NAME
    manifest = load_manifest(manifest_path) if manifest_path.exists() else LoxManifest()

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        manifest.logging.level = _parse_log_level(env_level, LOG_LEVEL_ENV_VAR)

    return manifest
