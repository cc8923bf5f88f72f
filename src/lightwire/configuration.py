"""Loading of parameters, settings and the raw dependency description.

A configuration directory holds three JSON files:

    parameters.json    scalar values, usually differing per deployment
    settings.json      optional; values may embed ``%parameter%`` tokens
    dependencies.json  the component graph description

Parameters and expanded settings are merged into one mapping (parameters
win on clashing keys), which is what placeholder substitution consumes.
"""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from lightwire.errors import ConfigurationError
from lightwire.placeholders import placeholder_for

__all__ = [
    "Configuration",
    "ConfigurationLoader",
    "CONFIG_DIR_ENV",
    "PARAMETER_ENVIRONMENT",
    "PARAMETER_APPLICATION_STARTING_POINT",
]

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "LIGHTWIRE_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "config"

PARAMETERS_FILE = "parameters.json"
SETTINGS_FILE = "settings.json"
DEPENDENCIES_FILE = "dependencies.json"

PARAMETER_ENVIRONMENT = "environment"
PARAMETER_APPLICATION_STARTING_POINT = "applicationStartingPoint"
REQUIRED_PARAMETERS = (PARAMETER_ENVIRONMENT, PARAMETER_APPLICATION_STARTING_POINT)

Scalar = Union[str, int, float, bool]


@dataclass(frozen=True)
class Configuration:
    """
    Everything read from a configuration directory.

    Attributes:
        parameters: Merged parameters and settings, all scalar.
        dependencies_text: The raw dependency description, unparsed so that
            placeholder checks can inspect the text itself.
    """

    parameters: dict[str, Scalar]
    dependencies_text: str

    @property
    def environment(self) -> str:
        return str(self.parameters[PARAMETER_ENVIRONMENT])

    @property
    def application_starting_point(self) -> str:
        return str(self.parameters[PARAMETER_APPLICATION_STARTING_POINT])


class ConfigurationLoader:
    """Read a Configuration from a directory of JSON files.

    Args:
        config_dir: Directory holding the configuration files; defaults to
            ``$LIGHTWIRE_CONFIG_DIR``, or ``./config`` when that is unset.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        env = env if env is not None else os.environ
        self.config_dir = Path(
            config_dir or env.get(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR
        )

    def load(self) -> Configuration:
        """Load and validate the whole configuration.

        Raises:
            ConfigurationError: If a required file is missing or malformed, a
                value is not scalar, or a required parameter is absent.
        """
        parameters = self.load_parameters()
        check_required_parameters(parameters)
        return Configuration(parameters, self.load_dependencies_text())

    def load_parameters(self) -> dict[str, Scalar]:
        parameters = self._read_json(PARAMETERS_FILE)
        _check_scalars(parameters, PARAMETERS_FILE)

        settings_path = self.config_dir / SETTINGS_FILE
        if not settings_path.exists():
            logger.debug("No %s in %s", SETTINGS_FILE, self.config_dir)
            return dict(parameters)

        settings = expand_settings(self._read_json(SETTINGS_FILE), parameters)
        _check_scalars(settings, SETTINGS_FILE)
        return {**settings, **parameters}

    def load_dependencies_text(self) -> str:
        return self._read_text(DEPENDENCIES_FILE)

    def _read_text(self, filename: str) -> str:
        path = self.config_dir / filename
        if not path.is_file():
            raise ConfigurationError(
                f"Could not find {filename} file in {self.config_dir}"
            )
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not read {path}: {e}") from e

    def _read_json(self, filename: str) -> dict[str, Any]:
        try:
            value = json.loads(self._read_text(filename))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed JSON in {filename}: {e}") from e
        if not isinstance(value, dict):
            raise ConfigurationError(
                f"{filename} must contain a JSON object, got {type(value).__name__}"
            )
        return value


def expand_settings(
    settings: Mapping[str, Any], parameters: Mapping[str, Scalar]
) -> dict[str, Any]:
    """Replace ``%parameter%`` tokens inside settings values.

    A string consisting of exactly one token takes the parameter's value
    with its type preserved; tokens embedded in longer strings are replaced
    by the parameter's text. Nested lists and objects are expanded too.

    Example:
        >>> expand_settings({"port": "%port%", "url": "http://%host%/"},
        ...                 {"port": 8080, "host": "example.com"})
        {'port': 8080, 'url': 'http://example.com/'}
    """
    return {key: _expand(value, parameters) for key, value in settings.items()}


def _expand(value: Any, parameters: Mapping[str, Scalar]) -> Any:
    if isinstance(value, dict):
        return {key: _expand(item, parameters) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item, parameters) for item in value]
    if not isinstance(value, str):
        return value

    for key, parameter in parameters.items():
        placeholder = placeholder_for(key)
        if value == placeholder:
            return parameter
        value = value.replace(placeholder, _as_text(parameter))
    return value


def _as_text(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def check_required_parameters(parameters: Mapping[str, Any]):
    missing = [name for name in REQUIRED_PARAMETERS if name not in parameters]
    if missing:
        raise ConfigurationError(
            f"Could not find required parameters {missing} in {PARAMETERS_FILE} "
            f"or {SETTINGS_FILE}, make sure you set these values"
        )


def _check_scalars(values: Mapping[str, Any], source: str):
    for key, value in values.items():
        if not isinstance(value, (str, int, float, bool)):
            raise ConfigurationError(
                f"Parameter has to be string, int, float or bool, got {value!r} "
                f"for key {key!r} in {source}"
            )
