"""Configuration Management

Hierarchical configuration for fsgate, loaded from YAML files and environment
variables and validated with Pydantic models.

Configuration Hierarchy (highest to lowest precedence):
1. Environment Variables (FSGATE_* prefix)
2. Project Configuration ({project}/.fsgate/config.yaml)
3. Global Configuration (~/.fsgate/config.yaml)
4. Hardcoded Defaults

The filesystem operations themselves read nothing from here; configuration
only feeds the host surface (CLI defaults, registry location, logging).
"""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .exceptions import FsGateError

logger = logging.getLogger(__name__)

# ============================================================================
# Exceptions
# ============================================================================

class ConfigurationError(FsGateError):
    """Base exception for configuration management operations."""
    pass

class ConfigurationFileError(ConfigurationError):
    """Raised when configuration file operations fail."""
    pass

# ============================================================================
# Configuration Models
# ============================================================================

class FilesystemConfiguration(BaseModel):
    """Defaults for the filesystem tools as exposed by the host."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    default_tree_depth: int = Field(default=3, ge=0, le=64, description="Tree depth used when none is given")

class RegistryConfiguration(BaseModel):
    """Location of the component registry document."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    registry_file: str = Field(default="component-registry.json", description="Path to the registry JSON file")

class LoggingConfiguration(BaseModel):
    """Configuration for logging."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    level: str = Field(default="WARNING", description="Default log level")
    enable_file_logging: bool = Field(default=False, description="Enable logging to files")
    log_directory: str = Field(default="logs", description="Log file directory")
    enable_structured_logging: bool = Field(default=False, description="Use structured JSON logging")
    max_log_size_mb: int = Field(default=10, ge=1, le=1000, description="Maximum log file size (MB)")
    backup_count: int = Field(default=3, ge=0, le=30, description="Rotated log files to keep")

class SystemConfiguration(BaseModel):
    """Master configuration containing all settings."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    filesystem: FilesystemConfiguration = Field(default_factory=FilesystemConfiguration)
    registry: RegistryConfiguration = Field(default_factory=RegistryConfiguration)
    logging: LoggingConfiguration = Field(default_factory=LoggingConfiguration)

# ============================================================================
# Environment Variable Mapping
# ============================================================================

class EnvironmentVariableMapper:
    """Maps environment variables to configuration fields."""

    ENV_MAPPINGS = {
        "FSGATE_TREE_DEPTH": "filesystem.default_tree_depth",
        "FSGATE_REGISTRY_FILE": "registry.registry_file",
        "FSGATE_LOG_LEVEL": "logging.level",
        "FSGATE_LOG_DIRECTORY": "logging.log_directory",
        "FSGATE_LOG_TO_FILE": "logging.enable_file_logging",
        "FSGATE_LOG_JSON": "logging.enable_structured_logging",
    }

    BOOLEAN_FIELDS = {"logging.enable_file_logging", "logging.enable_structured_logging"}
    INTEGER_FIELDS = {"filesystem.default_tree_depth"}

    @classmethod
    def load_from_environment(cls) -> Dict[str, Any]:
        """Load configuration values from environment variables."""
        env_config: Dict[str, Any] = {}

        for env_var, config_path in cls.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is not None:
                converted_value = cls._convert_env_value(value, config_path)
                cls._set_nested_value(env_config, config_path, converted_value)
                logger.debug(f"Loaded environment variable: {env_var}={value} -> {config_path}")

        return env_config

    @classmethod
    def _convert_env_value(cls, value: str, config_path: str) -> Any:
        """Convert environment variable string to appropriate type."""
        if config_path in cls.BOOLEAN_FIELDS:
            return value.lower() in ('true', '1', 'yes', 'on')

        if config_path in cls.INTEGER_FIELDS:
            try:
                return int(value)
            except ValueError:
                logger.warning(f"Invalid integer value for {config_path}: {value}")
                return value

        return value

    @classmethod
    def _set_nested_value(cls, config_dict: Dict[str, Any], path: str, value: Any) -> None:
        """Set a value in a nested dictionary using dot notation."""
        keys = path.split('.')
        current = config_dict

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

# ============================================================================
# Configuration Loading and Management
# ============================================================================

class ConfigurationLoader:
    """Handles loading and parsing of configuration files."""

    @staticmethod
    def load_yaml_file(file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML file."""
        if not file_path.exists():
            logger.debug(f"Configuration file not found: {file_path}")
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error in {file_path}: {e}")
            raise ConfigurationFileError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            logger.error(f"Error loading configuration file {file_path}: {e}")
            raise ConfigurationFileError(f"Failed to load {file_path}: {e}") from e

        if not isinstance(content, dict):
            raise ConfigurationFileError(f"Configuration in {file_path} must be a mapping")

        logger.debug(f"Loaded configuration from: {file_path}")
        return content

    @staticmethod
    def merge_configurations(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries with deep merging."""
        def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
            result = base.copy()

            for key, value in override.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value

            return result

        merged: Dict[str, Any] = {}
        for config in configs:
            merged = deep_merge(merged, config)

        return merged

# ============================================================================
# Main Configuration Manager
# ============================================================================

class ConfigurationManager:
    """
    Singleton configuration manager with caching.

    Precedence (highest to lowest):
    1. Environment Variables
    2. Project Configuration (.fsgate/config.yaml in project root)
    3. Global Configuration (~/.fsgate/config.yaml)
    4. Default Values (Pydantic models)
    """

    _instance: Optional['ConfigurationManager'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigurationManager':
        """Ensure singleton pattern."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize configuration manager (only once due to singleton)."""
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._config: Optional[SystemConfiguration] = None
        self._config_cache_time: float = 0
        self._cache_ttl: float = 300
        self._project_root: Optional[Path] = None

        logger.debug("ConfigurationManager initialized")

    def get_config(self, force_reload: bool = False) -> SystemConfiguration:
        """
        Get the current configuration, reloading when the cache has expired.

        Args:
            force_reload: Force reload from all sources, ignoring cache

        Returns:
            Complete system configuration
        """
        current_time = time.time()

        if (force_reload or
            self._config is None or
            (current_time - self._config_cache_time) > self._cache_ttl):

            self._load_configuration()
            self._config_cache_time = current_time

        return self._config

    def reload_configuration(self) -> SystemConfiguration:
        """Force reload configuration from all sources."""
        return self.get_config(force_reload=True)

    def set_project_root(self, project_root: Path) -> None:
        """Set the project root path for project-specific configuration."""
        self._project_root = Path(project_root)
        logger.debug(f"Set project root to: {project_root}")
        self.reload_configuration()

    def _load_configuration(self) -> None:
        """Load configuration from all sources with proper precedence."""
        configs_to_merge = []

        global_config_path = Path.home() / '.fsgate' / 'config.yaml'
        global_config = ConfigurationLoader.load_yaml_file(global_config_path)
        if global_config:
            configs_to_merge.append(global_config)
            logger.debug("Loaded global configuration")

        project_root = self._project_root or Path.cwd()
        project_config_path = project_root / '.fsgate' / 'config.yaml'
        project_config = ConfigurationLoader.load_yaml_file(project_config_path)
        if project_config:
            configs_to_merge.append(project_config)
            logger.debug("Loaded project configuration")

        env_config = EnvironmentVariableMapper.load_from_environment()
        if env_config:
            configs_to_merge.append(env_config)
            logger.debug("Loaded environment configuration")

        merged_config = ConfigurationLoader.merge_configurations(*configs_to_merge)

        try:
            self._config = SystemConfiguration(**merged_config)
        except Exception as e:
            logger.warning(f"Invalid configuration, using defaults: {e}")
            self._config = SystemConfiguration()
            return

        logger.debug("Configuration loaded successfully from all sources")

# ============================================================================
# Global Configuration Access
# ============================================================================

_config_manager: Optional[ConfigurationManager] = None

def get_config_manager() -> ConfigurationManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigurationManager()
    return _config_manager

def get_config() -> SystemConfiguration:
    """Get the global configuration instance."""
    return get_config_manager().get_config()

def reload_config() -> SystemConfiguration:
    """Force reload the global configuration."""
    return get_config_manager().reload_configuration()
