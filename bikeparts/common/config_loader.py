"""
Configuration Loader

Loads YAML configuration files for runtime settings, vendor extraction
profiles and the part catalogue (component rule tables).
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_HEADERS,
    DEFAULT_MAX_WORKERS,
)

# Environment variables that override settings.yaml (name -> (key, type))
ENV_OVERRIDES = {
    "BIKEPARTS_FETCH_TIMEOUT": ("fetch_timeout", float),
    "BIKEPARTS_MAX_WORKERS": ("max_workers", int),
    "BIKEPARTS_CURRENCY_SYMBOL": ("currency_symbol", str),
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'vendor_profiles.yaml')
        config_dir: Directory to load from (defaults to the repo's config/)

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file does not contain a mapping
    """
    config_path = (config_dir or _get_config_dir()) / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def load_settings(config_dir: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Load runtime settings.

    Defaults from constants are overlaid with settings.yaml (if present),
    then with BIKEPARTS_* environment variables.

    Returns:
        Dictionary with fetch_timeout, max_workers, currency_symbol, headers

    Example:
        {
            'fetch_timeout': 5,
            'max_workers': 10,
            'currency_symbol': '£',
            'headers': {'User-Agent': '...'},
        }
    """
    settings: Dict[str, Any] = {
        "fetch_timeout": DEFAULT_FETCH_TIMEOUT,
        "max_workers": DEFAULT_MAX_WORKERS,
        "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
        "headers": dict(DEFAULT_HEADERS),
    }

    try:
        file_settings = load_config('settings.yaml', config_dir)
    except FileNotFoundError:
        file_settings = {}

    headers = file_settings.pop("headers", None) or {}
    settings.update(file_settings)
    settings["headers"].update(headers)

    env = os.environ if environ is None else environ
    for var, (key, cast) in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw:
            try:
                settings[key] = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {var}: {raw!r}") from e

    return settings


def load_vendor_profiles(config_dir: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load raw vendor extraction profiles.

    Returns:
        Dictionary mapping vendor host to its selector/price-format settings

    Example:
        {
            'wiggle.com': {'container': 'div.ProductDetail_container__FX6xF',
                           'title': 'h1', 'price': '...', ...},
            ...
        }
    """
    config = load_config('vendor_profiles.yaml', config_dir)
    return config.get('vendors', {})


def load_part_catalog(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the raw part catalogue.

    Returns:
        Dictionary with 'groupset_brands', 'prepass' (ordered component names)
        and 'components' (component name -> rule table)
    """
    return load_config('part_catalog.yaml', config_dir)
