"""
Configuration Manager - JSON-backed settings and provider configuration.

settings.json holds application settings and sources.json the provider
registry (enabled flag, priority, per-provider overrides). Both files are
created with defaults on first use; a file that fails to parse or
validate is moved aside to `<name>.json.backup` and replaced.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from nontonplux.core.config_defaults import get_default_settings, get_default_sources
from nontonplux.core.config_schemas import AppSettings, SourcesConfig, SourceConfig
from nontonplux.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigManager:
    """
    Loads, validates and persists the two configuration files.

    Accessors are guarded by a lock so commands running provider work in
    threads see a consistent snapshot.
    """

    SETTINGS_FILE = "settings.json"
    SOURCES_FILE = "sources.json"

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory holding the configuration files
                        (defaults to ./config)

        Raises:
            ConfigurationError: If the files cannot be read or written
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._lock = Lock()

        try:
            self._settings = self._load(self.SETTINGS_FILE, AppSettings, get_default_settings)
            self._sources = self._load(self.SOURCES_FILE, SourcesConfig, get_default_sources)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", str(self.config_dir))

        logger.info(f"Configuration loaded from {self.config_dir}")

    def _path(self, file_name: str) -> Path:
        return self.config_dir / file_name

    def _load(self, file_name: str, model: Type[ModelT], default: Callable[[], ModelT]) -> ModelT:
        """
        Read one configuration file, falling back to defaults.

        Missing files are created; unreadable ones are backed up first.
        """
        path = self._path(file_name)
        if not path.exists():
            logger.info(f"{file_name} not found, writing defaults")
            return self._store(file_name, default())

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return model.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            backup = path.with_suffix('.json.backup')
            path.replace(backup)
            logger.warning(f"{file_name} is invalid ({e}); moved to {backup.name}, using defaults")
            return self._store(file_name, default())

    def _store(self, file_name: str, value: ModelT) -> ModelT:
        """Write a model to its file through a temp file and return it."""
        path = self._path(file_name)
        temp_file = path.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(value.model_dump(mode='json'), f, indent=2, ensure_ascii=False)
            temp_file.replace(path)
        except OSError as e:
            temp_file.unlink(missing_ok=True)
            raise ConfigurationError(f"Failed to save {file_name}: {e}", str(path))

        logger.debug(f"Saved {file_name}")
        return value

    @property
    def settings(self) -> AppSettings:
        with self._lock:
            return self._settings

    @property
    def sources(self) -> SourcesConfig:
        with self._lock:
            return self._sources

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Change one setting addressed by a dotted path such as `ui.color_theme`.

        Args:
            key_path: Section and key separated by dots
            value: New value, validated against the settings schema

        Raises:
            ConfigurationError: If the path does not exist or the value is rejected
        """
        with self._lock:
            data = self._settings.model_dump()

            *sections, key = key_path.split('.')
            target: Any = data
            for section in sections:
                if not isinstance(target, dict) or section not in target:
                    raise ConfigurationError(f"Invalid setting path: {key_path}")
                target = target[section]

            if not isinstance(target, dict) or key not in target:
                raise ConfigurationError(f"Invalid setting key: {key}")
            target[key] = value

            try:
                updated = AppSettings.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid setting value for {key_path}: {e}")

            self._settings = self._store(self.SETTINGS_FILE, updated)

        logger.info(f"Setting updated: {key_path} = {value}")

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """Read a setting by dotted path, or `default` if it does not exist."""
        with self._lock:
            value: Any = self._settings.model_dump()

        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    def update_source_config(self, source_name: str, changes: Dict[str, Any]) -> None:
        """
        Merge fields into a provider's entry in sources.json.

        Args:
            source_name: Provider name (the sources.json key)
            changes: SourceConfig fields to overwrite, e.g. {"enabled": False}

        Raises:
            ConfigurationError: If the resulting entry does not validate
        """
        with self._lock:
            data = self._sources.model_dump()
            data['sources'].setdefault(source_name, {}).update(changes)

            try:
                updated = SourcesConfig.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration for source {source_name}: {e}")

            self._sources = self._store(self.SOURCES_FILE, updated)

        logger.info(f"Source configuration updated: {source_name}")

    def enable_source(self, source_name: str) -> None:
        self.update_source_config(source_name, {"enabled": True})

    def disable_source(self, source_name: str) -> None:
        self.update_source_config(source_name, {"enabled": False})

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Enabled providers, highest priority first."""
        return self.sources.get_enabled_sources()

    def reset_to_defaults(self) -> None:
        """Overwrite both files with the default configuration."""
        logger.warning("Resetting configuration to defaults")
        with self._lock:
            self._settings = self._store(self.SETTINGS_FILE, get_default_settings())
            self._sources = self._store(self.SOURCES_FILE, get_default_sources())

    def validate_configuration(self) -> Dict[str, Any]:
        """
        Re-validate the loaded configuration.

        Returns:
            Report with `valid`, a list of `issues` and a list of `warnings`
        """
        report: Dict[str, Any] = {"valid": True, "issues": [], "warnings": []}

        checks = (
            ("Settings", AppSettings, self.settings),
            ("Sources", SourcesConfig, self.sources),
        )
        for label, model, value in checks:
            try:
                model.model_validate(value.model_dump())
            except ValidationError as e:
                report["valid"] = False
                report["issues"].append(f"{label} validation failed: {e}")

        if not self.get_enabled_sources():
            report["warnings"].append("No providers are enabled")

        return report


__all__ = ["ConfigManager"]
