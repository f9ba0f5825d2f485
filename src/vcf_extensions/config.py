"""Configuration file support for vcf-extensions."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .extensions import EXTENSIONS

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class DecodeConfig:
    """Settings for decoding annotated VCF files."""

    info_key: str = "CSQ"
    extensions: list[str] = field(default_factory=lambda: ["ensembl_vep"])
    log_level: str = "INFO"
    include_unannotated: bool = False


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "info_key" in config_dict:
        info_key = config_dict["info_key"]
        if not isinstance(info_key, str):
            raise ConfigValidationError(
                f"info_key must be a string, got {type(info_key).__name__}"
            )
        if not info_key.strip():
            raise ConfigValidationError("info_key cannot be empty")

    if "extensions" in config_dict:
        extensions = config_dict["extensions"]
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            raise ConfigValidationError("extensions must be a list of extension names")
        unknown = [e for e in extensions if e not in EXTENSIONS]
        if unknown:
            raise ConfigValidationError(
                f"Unknown extensions: {', '.join(unknown)}. "
                f"Available: {', '.join(EXTENSIONS)}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )

    if "include_unannotated" in config_dict:
        if not isinstance(config_dict["include_unannotated"], bool):
            raise ConfigValidationError("include_unannotated must be a boolean")


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> DecodeConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        DecodeConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = toml_data.get("vcf_extensions", {})

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    valid_fields = {"info_key", "extensions", "log_level", "include_unannotated"}
    ignored = sorted(set(config_dict) - valid_fields)
    if ignored:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(ignored))

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return DecodeConfig(**filtered_config)
