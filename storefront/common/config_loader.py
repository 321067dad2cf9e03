"""
Configuration Loader

Loads YAML configuration files for the catalog source, cache, column
aliases and the contact relay. A handful of environment variables
override the file values so deployments can keep secrets out of the repo.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .constants import (
    CONSENT_KEY,
    DEFAULT_FIELD_ALIASES,
    PLACEHOLDER_GALLERY,
    PLACEHOLDER_IMAGE,
    SOURCE_PLACEHOLDER_MARKER,
    STORE_CACHE_KEY,
    STORE_CACHE_TTL_MS,
)

DEFAULT_REQUEST_TIMEOUT = 15


@dataclass
class CatalogSettings:
    """Where the catalog comes from and how long a fetched copy stays valid."""

    source_url: str = ""
    cache_key: str = STORE_CACHE_KEY
    cache_ttl_ms: int = STORE_CACHE_TTL_MS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    field_aliases: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_FIELD_ALIASES.items()}
    )
    placeholder_image: str = PLACEHOLDER_IMAGE
    placeholder_gallery: Tuple[str, ...] = PLACEHOLDER_GALLERY
    consent_key: str = CONSENT_KEY

    @property
    def source_configured(self) -> bool:
        """False when the URL is missing or still the template placeholder."""
        return bool(self.source_url) and SOURCE_PLACEHOLDER_MARKER not in self.source_url


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


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'catalog.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def merge_field_aliases(overrides: Optional[Mapping[str, List[str]]]) -> Dict[str, List[str]]:
    """
    Merge per-deployment column aliases over the defaults.

    A field listed in overrides replaces the default alias list for that
    field entirely; unlisted fields keep their defaults.

    Example:
        {'name': ['name', 'título']} -> name resolves from those two columns only
    """
    aliases = {k: list(v) for k, v in DEFAULT_FIELD_ALIASES.items()}
    for field_name, columns in (overrides or {}).items():
        aliases[field_name] = [str(c).lower() for c in columns]
    return aliases


def catalog_settings_from_dict(
    config: Mapping[str, Any],
    env: Optional[Mapping[str, str]] = None,
) -> CatalogSettings:
    """
    Build CatalogSettings from parsed YAML plus environment overrides.

    Args:
        config: Parsed catalog.yaml content
        env: Environment mapping (defaults to os.environ)

    Environment:
        CATALOG_SOURCE_URL - overrides source_url
        CATALOG_CACHE_TTL_MINUTES - overrides cache.ttl_minutes
    """
    if env is None:
        env = os.environ

    cache = config.get('cache') or {}
    ttl_minutes = env.get('CATALOG_CACHE_TTL_MINUTES') or cache.get('ttl_minutes')
    cache_ttl_ms = int(float(ttl_minutes) * 60 * 1000) if ttl_minutes else STORE_CACHE_TTL_MS

    gallery = config.get('placeholder_gallery')

    return CatalogSettings(
        source_url=(env.get('CATALOG_SOURCE_URL') or config.get('source_url') or '').strip(),
        cache_key=cache.get('key') or STORE_CACHE_KEY,
        cache_ttl_ms=cache_ttl_ms,
        request_timeout=float(config.get('request_timeout') or DEFAULT_REQUEST_TIMEOUT),
        field_aliases=merge_field_aliases(config.get('field_aliases')),
        placeholder_image=config.get('placeholder_image') or PLACEHOLDER_IMAGE,
        placeholder_gallery=tuple(gallery) if gallery else PLACEHOLDER_GALLERY,
        consent_key=config.get('consent_key') or CONSENT_KEY,
    )


def load_catalog_settings(filename: str = 'catalog.yaml') -> CatalogSettings:
    """
    Load catalog settings.

    Returns:
        CatalogSettings with environment overrides applied

    Example:
        settings = load_catalog_settings()
        settings.source_url  # 'https://docs.google.com/spreadsheets/d/e/.../pub?output=csv'
    """
    return catalog_settings_from_dict(load_config(filename))


def load_contact_settings(filename: str = 'contact.yaml') -> Dict[str, Any]:
    """
    Load contact relay settings.

    Returns:
        Dictionary with recipient, sender_name, subjects and labels, plus
        an 'smtp' section filled from SMTP_* environment variables
    """
    config = load_config(filename)
    smtp = dict(config.get('smtp') or {})
    smtp['host'] = os.environ.get('SMTP_HOST', smtp.get('host', 'localhost'))
    smtp['port'] = int(os.environ.get('SMTP_PORT', smtp.get('port', 25)))
    smtp['user'] = os.environ.get('SMTP_USER', smtp.get('user', ''))
    smtp['password'] = os.environ.get('SMTP_PASSWORD', smtp.get('password', ''))
    config['smtp'] = smtp
    return config
