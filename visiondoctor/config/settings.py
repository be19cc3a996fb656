"""Service settings for the advisory client and logging.

Settings come from an optional YAML file with an ``advisor:`` section;
environment variables override the file::

    advisor:
      host: http://localhost:11434
      model: llama3.2:3b
      temperature: 0.2
      log_level: INFO

The API key is normally supplied via ``VISION_DOCTOR_API_KEY`` only.
Station configurations are never persisted here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from visiondoctor.config.validation import ConfigValidator, ValidationError


ENV_API_KEY = "VISION_DOCTOR_API_KEY"
ENV_HOST = "VISION_DOCTOR_HOST"
ENV_MODEL = "VISION_DOCTOR_MODEL"
ENV_LOG_LEVEL = "VISION_DOCTOR_LOG_LEVEL"

ENV_FIELDS: Dict[str, str] = {
    ENV_API_KEY: "api_key",
    ENV_HOST: "host",
    ENV_MODEL: "model",
    ENV_LOG_LEVEL: "log_level",
}


@dataclass(frozen=True)
class AdvisorSettings:
    """Configuration of the advisory service client.

    Attributes:
        api_key: Credential sent as a bearer token. None disables the advisor
        host: Ollama-compatible endpoint. None uses the ollama default
        model: Model name
        temperature: Sampling temperature passed with every request
        log_level: Logging level used by the CLI
    """

    api_key: Optional[str] = None
    host: Optional[str] = None
    model: str = "llama3.2:3b"
    temperature: float = 0.2
    log_level: str = "INFO"

    @property
    def configured(self) -> bool:
        """True if an API key is present."""
        return bool(self.api_key)

    def validate(self) -> None:
        if not isinstance(self.model, str) or not self.model:
            raise ValidationError("Invalid model: must be a non-empty string")
        ConfigValidator.validate_range(self.temperature, "temperature", 0.0, 2.0, "0.0-1.0")


def _settings_from_mapping(data: Mapping[str, Any], source: str) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Invalid settings in {source}: expected a mapping")
    valid = [f.name for f in fields(AdvisorSettings)]
    ConfigValidator.validate_field_names(data.keys(), valid)
    return dict(data)


def load_settings(
    path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AdvisorSettings:
    """Load advisor settings from YAML and the environment.

    Args:
        path: Optional YAML file. Its ``advisor:`` section supplies values
        env: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated AdvisorSettings

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist
        ValidationError: On unknown keys, a non-mapping document or bad values
    """
    env = os.environ if env is None else env
    settings = AdvisorSettings()

    if path is not None:
        settings_file = Path(path)
        if not settings_file.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(settings_file, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError(f"Invalid settings in {path}: expected a mapping")
        unknown = [key for key in data if key != "advisor"]
        if unknown:
            ConfigValidator.validate_field_names(unknown, ["advisor"])

        section = data.get("advisor") or {}
        settings = replace(settings, **_settings_from_mapping(section, str(path)))

    overrides = {attr: env[var] for var, attr in ENV_FIELDS.items() if env.get(var)}
    if overrides:
        settings = replace(settings, **overrides)

    settings.validate()
    return settings
