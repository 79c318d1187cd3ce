"""Configuration management for nbinject.

Values are resolved in three layers: built-in defaults, the ``injection``
section of ``nbinject.yml`` (or the file named by ``NBINJECT_CONFIG``), then
command-line overrides.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Dict, Any

import yaml

from .injection.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_CANDIDATE_DIRS,
    DEFAULT_CLIENT_SCRIPT_URL,
    DEFAULT_FALLBACK_HUB_URL,
    DEFAULT_HUB_PATH,
    DEFAULT_TOOLBAR_SUBJECT,
    INJECTION_MARKER,
)


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""


@dataclass
class InjectionConfig:
    """Configuration for one injection run."""
    base_dir: str = "."
    directories: List[str] = field(default_factory=lambda: list(DEFAULT_CANDIDATE_DIRS))
    marker: str = INJECTION_MARKER
    dry_run: bool = False
    verbose: bool = False

    # Client payload settings
    fallback_hub_url: str = DEFAULT_FALLBACK_HUB_URL
    hub_path: str = DEFAULT_HUB_PATH
    toolbar_subject: str = DEFAULT_TOOLBAR_SUBJECT
    client_script_url: str = DEFAULT_CLIENT_SCRIPT_URL
    debug: bool = False  # console logging in the browser payload

    # Keys accepted in the ``injection`` section of the config file
    FILE_KEYS = (
        "directories",
        "marker",
        "fallback_hub_url",
        "hub_path",
        "toolbar_subject",
        "client_script_url",
        "debug",
    )

    def candidate_paths(self) -> List[Path]:
        """Candidate output roots resolved against ``base_dir``, in order."""
        base = Path(self.base_dir)
        return [base / directory for directory in self.directories]

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None, **overrides) -> 'InjectionConfig':
        """Create configuration from nbinject.yml with command-line overrides.

        Args:
            config_path: Explicit config file. Defaults to ``$NBINJECT_CONFIG``,
                then ``nbinject.yml`` in the base directory.
            **overrides: Command-line arguments; ``None`` values are ignored.

        Returns:
            InjectionConfig: Configuration with file values and overrides applied.

        Raises:
            ConfigError: If the config file cannot be parsed or has invalid values.
        """
        config = cls()
        base_dir = overrides.get("base_dir") or config.base_dir

        path = _locate_config_file(config_path, base_dir)
        if path is not None:
            for key, value in _load_injection_section(path).items():
                setattr(config, key, value)

        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)

        config.validate()
        return config

    def validate(self) -> None:
        """Check value types and the invariants the injector relies on."""
        if isinstance(self.directories, str):
            self.directories = [self.directories]
        if not isinstance(self.directories, (list, tuple)) or not all(isinstance(d, str) for d in self.directories):
            raise ConfigError("'directories' must be a list of paths")
        self.directories = list(self.directories)

        for name in ("marker", "fallback_hub_url", "hub_path", "toolbar_subject", "client_script_url"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{name}' must be a non-empty string")

        if "-->" in self.marker:
            raise ConfigError("'marker' must not contain '-->'")

        if not isinstance(self.debug, bool):
            raise ConfigError("'debug' must be true or false")


def _locate_config_file(config_path: Optional[str], base_dir: str) -> Optional[Path]:
    """Find the config file to load, if any."""
    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigError(f"Config file from {CONFIG_ENV_VAR} not found: {env_path}")
        return path

    path = Path(base_dir) / CONFIG_FILENAME
    return path if path.is_file() else None


def _load_injection_section(path: Path) -> Dict[str, Any]:
    """Read the ``injection`` section of a YAML config file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")

    section = data.get("injection", {}) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'injection' in {path} must be a mapping")

    unknown = sorted(set(section) - set(InjectionConfig.FILE_KEYS))
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")

    return dict(section)
