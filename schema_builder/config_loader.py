"""
Configuration loading utilities for the schema builder.

This module loads config.yaml, merges it over built-in defaults and caches
the result. Missing or broken files never stop the app: the defaults are
used instead.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging
from copy import deepcopy

logger = logging.getLogger(__name__)

CONFIG_FILE = Path("config.yaml")

# Global configuration cache
_config_cache: Optional[Dict[str, Any]] = None


def deep_merge(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with update_dict taking precedence.

    Args:
        base_dict: Base dictionary (defaults)
        update_dict: Dictionary to merge in (user config)

    Returns:
        Merged dictionary
    """
    result = deepcopy(base_dict)

    for key, value in update_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Dictionary with default configuration
    """
    return {
        'app': {
            'name': 'JSON Schema Builder',
            'version': '1.0.0',
            'debug': False
        },
        'ui': {
            'page_title': 'JSON Schema Builder',
            'subtitle': 'Build dynamic JSON schemas with nested structures',
            'initial_fields': 1
        },
        'projection': {
            'indent': 2,
            'string_placeholder': 'STRING',
            'number_placeholder': 'number'
        },
        'logging': {
            'level': 'INFO'
        }
    }


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load application configuration, merged over the defaults.

    The default location is cached; an explicit config_path is always read.

    Args:
        config_path: Optional path to config file (defaults to config.yaml)

    Returns:
        Complete configuration dictionary
    """
    global _config_cache

    use_cache = config_path is None
    if use_cache and _config_cache is not None:
        return _config_cache

    if config_path is None:
        config_path = CONFIG_FILE

    config = _read_config(Path(config_path))
    if use_cache:
        _config_cache = config
    return config


def _read_config(config_path: Path) -> Dict[str, Any]:
    default_config = get_default_config()

    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}")
        logger.info("Using default configuration")
        return default_config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)

        if user_config is None:
            logger.warning(f"Configuration file is empty: {config_path}")
            return default_config

        if not isinstance(user_config, dict):
            logger.error(f"Configuration file is not a valid dictionary: {config_path}")
            logger.info("Using default configuration")
            return default_config

        config = deep_merge(default_config, user_config)

        logger.info(f"Successfully loaded configuration from {config_path}")
        return config

    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {config_path}: {e}")
        logger.info("Using default configuration")
        return default_config

    except (IOError, OSError) as e:
        logger.error(f"Failed to read configuration file {config_path}: {e}")
        logger.info("Using default configuration")
        return default_config


def reload_config() -> Dict[str, Any]:
    """
    Force reload of configuration from file.
    Useful for testing or when configuration changes.
    """
    global _config_cache
    _config_cache = None
    return load_config()


def get_config_value(section: str, key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value.

    Args:
        section: Configuration section (e.g., 'ui', 'projection')
        key: Configuration key within section
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    config = load_config()
    section_values = config.get(section, {})
    if not isinstance(section_values, dict):
        return default
    return section_values.get(key, default)


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if configuration is valid, False otherwise
    """
    required_sections = ['app', 'ui', 'projection']

    for section in required_sections:
        if section not in config:
            logger.warning(f"Missing required configuration section: {section}")
            return False

    app = config.get('app', {})
    if 'name' not in app or 'version' not in app:
        logger.warning("Missing required app configuration (name or version)")
        return False

    projection = config.get('projection', {})
    if 'indent' in projection:
        try:
            indent = int(projection['indent'])
            if indent < 0:
                logger.warning("projection.indent must not be negative")
                return False
        except (ValueError, TypeError):
            logger.warning("projection.indent must be a valid integer")
            return False

    for key in ('string_placeholder', 'number_placeholder'):
        if key in projection and not isinstance(projection[key], str):
            logger.warning(f"projection.{key} must be a string")
            return False

    initial_fields = config.get('ui', {}).get('initial_fields', 1)
    if isinstance(initial_fields, bool) or not isinstance(initial_fields, int) or initial_fields < 0:
        logger.warning("ui.initial_fields must be a non-negative integer")
        return False

    return True


def get_config_summary(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get a summary of the current configuration.

    Args:
        config: Configuration dictionary

    Returns:
        Dictionary with configuration summary
    """
    return {
        'app_name': config.get('app', {}).get('name', 'Unknown'),
        'app_version': config.get('app', {}).get('version', 'Unknown'),
        'debug_mode': config.get('app', {}).get('debug', False),
        'indent': config.get('projection', {}).get('indent', 2),
        'log_level': config.get('logging', {}).get('level', 'INFO')
    }
