#!/usr/bin/env python3

import os
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("stackrepo")

APPSODY_HUB_URL = "https://raw.githubusercontent.com/appsody/stacks/master/index.yaml"
DEFAULT_HOME = "~/.stackrepo"
CONFIG_FILENAME = "config.yaml"
REPO_DIRNAME = "repository"
REPO_FILENAME = "repository.yaml"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. STACKREPO_CONFIG environment variable
    2. config.yaml inside STACKREPO_HOME
    3. ~/.stackrepo/config.yaml
    """
    if os.environ.get('STACKREPO_CONFIG'):
        return Path(os.environ['STACKREPO_CONFIG']).expanduser()

    home = os.environ.get('STACKREPO_HOME') or DEFAULT_HOME
    return Path(home).expanduser() / CONFIG_FILENAME


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "home": DEFAULT_HOME,
        "default_repository": {
            "name": "appsodyhub",
            "url": APPSODY_HUB_URL,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from file.

    Defaults are merged with the YAML file (when it exists), then
    STACKREPO_* environment variables are applied on top.
    """
    config_path = Path(config_path) if config_path else get_config_path()

    config = get_default_config()

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level of the config file must be a mapping")
            config = merge_configs(config, file_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config)
    return config


def save_config(config: Dict[str, Any], config_path: Optional[Path] = None) -> Path:
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: STACKREPO_SECTION_KEY
    For example: STACKREPO_HOME=/tmp/stacks or STACKREPO_LOGGING_LEVEL=DEBUG
    """
    env_prefix = "STACKREPO_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or not value:
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i:i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            if i + best_match_len == len(key_parts):
                if not isinstance(current_level[matched_key], dict):
                    current_level[matched_key] = value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Path conflict: env var is longer but we found a non-dict value
                break

    return config


def configure_logging(config: Dict[str, Any], verbose: bool = False) -> None:
    """Apply the configured log level (DEBUG when verbose)."""
    if verbose:
        level = logging.DEBUG
    else:
        logging_config = config.get("logging")
        if not isinstance(logging_config, dict):
            logging_config = {}
        level_name = str(logging_config.get("level") or "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)


def get_home(config: Dict[str, Any]) -> Path:
    return Path(config.get("home") or DEFAULT_HOME).expanduser()


def get_repo_dir(config: Dict[str, Any]) -> Path:
    return get_home(config) / REPO_DIRNAME


def get_repo_file_path(config: Dict[str, Any]) -> Path:
    return get_repo_dir(config) / REPO_FILENAME


def get_default_config_file(config: Dict[str, Any]) -> Path:
    return get_home(config) / CONFIG_FILENAME
