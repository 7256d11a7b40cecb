"""
Environment Config Provider - Loads configuration from every source.

Precedence (lowest to highest):
1. ``~/.config/jirate/config.txt`` (``key:value`` lines)
2. YAML config file (``--config`` path, or ``.jirate.yaml`` / ``.jirate.yml``
   in the current directory)
3. Environment variables (JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN, ...)
4. CLI overrides
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ...core.constants import CONFIG_DIR, CONFIG_TXT
from ...core.exceptions import ConfigError
from ...core.ports.config_provider import (
    AppConfig,
    ConfigProviderPort,
    OutputConfig,
    TrackerConfig,
)


YAML_CONFIG_NAMES = (".jirate.yaml", ".jirate.yml")

# config.txt keys -> jira.* keys
TXT_KEYS = {
    "url": "url",
    "username": "email",
    "email": "email",
    "password": "api_token",
    "token": "api_token",
    "api_token": "api_token",
    "project": "project",
}

ENV_KEYS = {
    "JIRA_URL": "jira.url",
    "JIRA_EMAIL": "jira.email",
    "JIRA_API_TOKEN": "jira.api_token",
    "JIRA_PROJECT": "jira.project",
    "JIRATE_TIMEOUT": "jira.timeout",
    "JIRATE_LOG_FORMAT": "output.log_format",
}

CLI_KEYS = {
    "jira_url": "jira.url",
    "jira_email": "jira.email",
    "jira_api_token": "jira.api_token",
    "jira_project": "jira.project",
    "timeout": "jira.timeout",
    "verbose": "output.verbose",
    "color": "output.color",
    "log_format": "output.log_format",
    "log_file": "output.log_file",
}


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider merging config.txt, YAML, environment and CLI.

    The merged view is a nested dict (``jira.*`` and ``output.*``) that
    ``get`` reads with dot notation.
    """

    def __init__(
        self,
        config_file: Path | str | None = None,
        cli_overrides: Mapping[str, Any] | None = None,
        env: Mapping[str, str] | None = None,
        home: Path | None = None,
    ):
        """
        Args:
            config_file: Explicit YAML config file (otherwise auto-detected)
            cli_overrides: Values from command line flags (None values ignored)
            env: Environment mapping (defaults to os.environ)
            home: Home directory holding ``.config/jirate`` (defaults to ~)
        """
        self.config_file = Path(config_file) if config_file else None
        self.cli_overrides = dict(cli_overrides or {})
        self.env = os.environ if env is None else env
        self.home = home
        self.logger = logging.getLogger("EnvironmentConfigProvider")

        self._values: dict[str, Any] | None = None
        self._errors: list[str] = []
        self._sources: list[str] = []

    @property
    def name(self) -> str:
        if self.config_file:
            return f"Environment+{self.config_file.name}"
        return "Environment"

    @property
    def txt_config_path(self) -> Path:
        """Location of the ``config.txt`` credentials file."""
        if self.home is not None:
            return self.home / ".config" / "jirate" / CONFIG_TXT
        return Path(CONFIG_DIR).expanduser() / CONFIG_TXT

    @property
    def sources(self) -> list[str]:
        """Sources that contributed values, lowest precedence first."""
        self._merged()
        return list(self._sources)

    def load(self) -> AppConfig:
        errors = self.validate()
        if errors:
            raise ConfigError("Configuration is incomplete", errors=errors)

        values = self._merged()
        jira = values.get("jira", {})
        output = values.get("output", {})

        return AppConfig(
            tracker=TrackerConfig(
                url=normalize_url(jira.get("url", "")),
                email=jira.get("email", ""),
                api_token=jira.get("api_token", ""),
                project_key=jira.get("project") or None,
                timeout=_as_float(jira.get("timeout")),
            ),
            output=OutputConfig(
                color=_as_bool(output.get("color", True)),
                verbose=_as_bool(output.get("verbose", False)),
                log_format=output.get("log_format") or "text",
                log_file=output.get("log_file") or None,
            ),
        )

    def get(self, key: str, default: Any = None) -> Any:
        value: Any = self._merged()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def validate(self) -> list[str]:
        values = self._merged()
        errors = list(self._errors)

        jira = values.get("jira", {})
        if not jira.get("url"):
            errors.append(
                "Missing Jira URL: set JIRA_URL in the environment, 'url' in "
                f"{self.txt_config_path}, or jira.url in a config file"
            )
        if not jira.get("email"):
            errors.append(
                "Missing Jira email: set JIRA_EMAIL in the environment, 'username' in "
                f"{self.txt_config_path}, or jira.email in a config file"
            )
        if not jira.get("api_token"):
            errors.append(
                "Missing Jira API token: set JIRA_API_TOKEN in the environment, 'password' in "
                f"{self.txt_config_path}, or jira.api_token in a config file"
            )

        return errors

    # -------------------------------------------------------------------------
    # Sources
    # -------------------------------------------------------------------------

    def _merged(self) -> dict[str, Any]:
        if self._values is not None:
            return self._values

        values: dict[str, Any] = {"jira": {}, "output": {}}

        txt = self._load_txt()
        if txt:
            values["jira"].update(txt)
            self._sources.append(str(self.txt_config_path))

        yaml_path = self._find_yaml()
        if yaml_path is not None:
            data = self._load_yaml(yaml_path)
            if data:
                _deep_merge(values, data)
                self._sources.append(str(yaml_path))

        from_env = False
        for env_key, dotted in ENV_KEYS.items():
            value = self.env.get(env_key)
            if value:
                _set_dotted(values, dotted, value)
                from_env = True
        if from_env:
            self._sources.append("environment")

        for cli_key, dotted in CLI_KEYS.items():
            value = self.cli_overrides.get(cli_key)
            if value is not None:
                _set_dotted(values, dotted, value)

        self._values = values
        self.logger.debug(f"Configuration sources: {self._sources or ['defaults']}")
        return values

    def _load_txt(self) -> dict[str, str]:
        """Parse ``key:value`` lines; unknown keys and malformed lines are skipped."""
        path = self.txt_config_path
        if not path.is_file():
            return {}

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            self._errors.append(f"Cannot read {path}: {e}")
            return {}

        values: dict[str, str] = {}
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or ":" not in line:
                continue
            key, _, value = line.partition(":")
            target = TXT_KEYS.get(key.strip().lower())
            if target and value.strip():
                values[target] = value.strip()
        return values

    def _find_yaml(self) -> Path | None:
        if self.config_file is not None:
            if not self.config_file.is_file():
                self._errors.append(f"Config file not found: {self.config_file}")
                return None
            return self.config_file

        for name in YAML_CONFIG_NAMES:
            candidate = Path.cwd() / name
            if candidate.is_file():
                self.config_file = candidate
                return candidate
        return None

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._errors.append(f"Invalid YAML syntax in {path}: {e}")
            return {}
        except OSError as e:
            self._errors.append(f"Cannot read {path}: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            self._errors.append(f"Config file {path} must contain a mapping")
            return {}
        return data


def normalize_url(url: str) -> str:
    """Add an ``https://`` scheme when none is given and drop trailing slashes."""
    url = (url or "").strip()
    if not url:
        return ""
    if "://" not in url:
        url = f"https://{url}"
    return url.rstrip("/")


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def _set_dotted(values: dict[str, Any], dotted: str, value: Any) -> None:
    *parents, leaf = dotted.split(".")
    node = values
    for part in parents:
        node = node.setdefault(part, {})
    node[leaf] = value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_float(value: Any) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout value: {value!r}", cause=e) from e
