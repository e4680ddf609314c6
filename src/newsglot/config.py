"""Handles the parsing and validation of the newsglot configuration file."""

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_LANGUAGE = "id"
DEFAULT_SEPARATOR = "|||"


class ProviderSettings(BaseModel):
    """Settings for a specific translation provider."""

    api_key: str | None = None
    model: str | None = None
    timeout: float | None = 15.0
    extra: dict[str, Any] | None = None


class RenderStyle(BaseModel):
    """Presentation parameters shared by every rendering of translated content."""

    model_config = ConfigDict(frozen=True)

    theme: Literal["light", "dark"] = "light"
    font_size: Literal["small", "medium", "large"] = "medium"

    @property
    def is_dark(self) -> bool:
        """Return True for the dark theme."""
        return self.theme == "dark"


class PipelineConfig(BaseModel):
    """The root configuration for newsglot."""

    source_language: str = DEFAULT_SOURCE_LANGUAGE
    provider: str = "google"
    providers: dict[str, ProviderSettings] = Field(default_factory=dict)
    separator: str = DEFAULT_SEPARATOR
    pass_timeout: float | None = 60.0
    cache_enabled: bool = True
    fallback_translations: dict[str, dict[str, str]] = Field(default_factory=dict)
    style: RenderStyle = Field(default_factory=RenderStyle)

    @field_validator("separator")
    @classmethod
    def _separator_must_be_visible(cls, value: str) -> str:
        """Reject separators that would vanish when the joined text is trimmed."""
        if not value.strip():
            msg = "The batching separator must contain non-whitespace characters."
            raise ValueError(msg)
        return value.strip()

    @field_validator("source_language")
    @classmethod
    def _normalize_language(cls, value: str) -> str:
        """Store language codes in lowercase."""
        return value.strip().lower()

    def provider_settings(self, name: str | None = None) -> ProviderSettings | None:
        """Return the settings block of the given provider, or of the active one."""
        return self.providers.get(name or self.provider)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PipelineConfig":
        """
        Create a PipelineConfig object from a dictionary.

        Provider blocks may be empty (`mock:` with no keys) and are normalized to defaults.
        """
        data = dict(data)
        providers_data = data.pop("providers", None) or {}
        if not isinstance(providers_data, dict):
            msg = "'providers' must be a mapping of provider names to settings."
            raise TypeError(msg)
        try:
            return cls(providers=_build_providers_from_dict(providers_data), **data)
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e


def _build_providers_from_dict(providers_data: dict[str, Any]) -> dict[str, ProviderSettings]:
    """Build a dictionary of ProviderSettings objects from a dictionary."""
    providers = {}
    for name, p_config in providers_data.items():
        config_data = p_config if isinstance(p_config, dict) else {}
        providers[name] = ProviderSettings(**config_data)
    return providers


class StrictSingleQuoteLoader(yaml.SafeLoader):
    """
    A custom YAML loader that enforces the use of single quotes for all strings.

    It raises an error if any double-quoted strings are found.
    """


def _construct_scalar(loader: StrictSingleQuoteLoader, node: yaml.ScalarNode) -> Any:  # noqa: ANN401
    """Construct a scalar node, but first check its style."""
    if node.style == '"':
        line = node.start_mark.line + 1
        col = node.start_mark.column + 1
        msg = f"Double-quoted string found at line {line}, column {col}. Please use single quotes (') instead."
        raise yaml.YAMLError(msg)
    return loader.construct_scalar(node)


StrictSingleQuoteLoader.add_constructor("tag:yaml.org,2002:str", _construct_scalar)


def load_config(config_path: str | Path) -> PipelineConfig:
    """
    Load, parse, and validate the YAML configuration file.

    Args:
        config_path: The path to the main.yaml file.

    Returns:
        A PipelineConfig object representing the validated configuration.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the configuration is invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    def _raise_type_error(msg: str) -> None:
        """Raise a TypeError with a specific message."""
        raise TypeError(msg)

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.load(f, Loader=StrictSingleQuoteLoader)  # noqa: S506

        if data is None:
            data = {}
        if not isinstance(data, dict):
            _raise_type_error("Config file must be a YAML mapping (dictionary).")

        config = PipelineConfig.from_dict(data)

    except yaml.YAMLError as e:
        msg = f"Error parsing YAML config file: {e}"
        raise yaml.YAMLError(msg) from e
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Invalid or missing configuration: {e}"
        raise ValueError(msg) from e
    else:
        logger.debug("Loaded configuration from %s (provider '%s').", path, config.provider)
        return config
