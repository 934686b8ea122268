"""Configuration loader with multi-source support."""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class ConfigLoader:
    """Loads configuration from multiple sources with priority."""

    def __init__(self, app_name: str = "crccheck", config_class: Optional[Type[T]] = None) -> None:
        self.app_name = app_name
        self.config_class = config_class

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load configuration from all sources.
        
        Args:
            defaults_path: Optional path to defaults.toml file
            
        Returns:
            Validated configuration object
            
        Raises:
            ConfigurationError: If a config file cannot be parsed or the
                merged configuration fails validation
        """
        # 1. Start with defaults (shipped with app)
        config_dict = self._load_defaults(defaults_path)

        # 2. Merge system config
        system_config = self._load_system_config()
        if system_config:
            config_dict = self._deep_merge(config_dict, system_config)

        # 3. Merge user config
        user_config = self._load_user_config()
        if user_config:
            config_dict = self._deep_merge(config_dict, user_config)

        # 4. Override with environment variables
        config_dict = self._apply_env_overrides(config_dict)

        # 5. Validate and create Config object
        if not self.config_class:
            return config_dict
        try:
            return self.config_class(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", app_name=self.app_name) from e

    def _read_toml(self, path: Path) -> Dict[str, Any]:
        logger.debug(f"Loading config: {{'path': {str(path)!r}}}")
        try:
            return toml.load(path)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Malformed config file {path}: {e}", path=str(path)) from e

    def _load_defaults(self, defaults_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load default configuration shipped with app."""
        if defaults_path is not None:
            if not defaults_path.exists():
                raise ConfigurationError(f"Config file not found: {defaults_path}", path=str(defaults_path))
            return self._read_toml(defaults_path)
            
        # Try multiple possible locations for defaults
        possible_paths = [
            Path.cwd() / "config" / "defaults.toml",
            Path.home() / ".config" / self.app_name / "defaults.toml",
        ]

        for path in possible_paths:
            if path.exists():
                return self._read_toml(path)

        # Return empty dict if no defaults found
        return {}

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        """Load system-wide configuration."""
        if os.name == "nt":  # Windows
            system_path = (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        else:  # Linux/Mac
            system_path = Path(f"/etc/{self.app_name}/config.toml")

        if system_path.exists():
            return self._read_toml(system_path)

        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific configuration."""
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        user_config_path = Path(user_config_dir) / "config.toml"
        
        if user_config_path.exists():
            return self._read_toml(user_config_path)

        logger.debug(f"User config not found at {user_config_path}")
        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Override config with environment variables.

        Format: CRCCHECK_<SECTION>_<KEY>. Only the first underscore after the
        section is a separator, so CRCCHECK_CHECKER_WORKER_MULTIPLIER sets
        checker.worker_multiplier.
        """
        prefix = f"{self.app_name.upper().replace('-', '_')}_"

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            section, _, key = env_key[len(prefix):].lower().partition("_")
            if not key:
                logger.warning(f"Ignoring environment override without a key: {{'variable': {env_key!r}}}")
                continue

            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                logger.warning(f"Ignoring environment override for non-section: {{'variable': {env_key!r}}}")
                continue
            current[key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type."""
        # Boolean
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        # Number
        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # String
        return value
